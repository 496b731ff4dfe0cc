"""
Policy system for blogauthz.

This module provides the Pundit-inspired policy pattern used by the
blog application: one policy class per resource, a closed enumeration
of actions per policy, and a Scope for filtering listings.

Quick Start:
    >>> from blogauthz.policies import BlogAction, default_registry
    >>>
    >>> registry = default_registry()
    >>> policy = registry.get_policy_instance("blog", actor, blog)
    >>> if policy.can(BlogAction.EDIT):
    ...     form.render()
    >>>
    >>> visible = registry.resolve_scope("blog", actor, all_blogs)
"""

from blogauthz.policies.admin import AdminAction, AdminPolicy
from blogauthz.policies.base import (
    DEFAULT_DENIAL_MESSAGE,
    HeadlessPolicy,
    Policy,
    PolicyAction,
    RecordPolicy,
    Scope,
)
from blogauthz.policies.blog import BlogAction, BlogPolicy
from blogauthz.policies.dashboard import DashboardAction, DashboardPolicy
from blogauthz.policies.registry import PolicyRegistry, default_registry
from blogauthz.policies.user import UserAction, UserPolicy

__all__ = [
    # Base classes
    "Policy",
    "RecordPolicy",
    "HeadlessPolicy",
    "PolicyAction",
    "Scope",
    "DEFAULT_DENIAL_MESSAGE",
    # Registry
    "PolicyRegistry",
    "default_registry",
    # Application policies
    "BlogPolicy",
    "BlogAction",
    "UserPolicy",
    "UserAction",
    "AdminPolicy",
    "AdminAction",
    "DashboardPolicy",
    "DashboardAction",
]
