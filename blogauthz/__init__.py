"""
blogauthz: role and ownership based authorization for a blog.

blogauthz decides what readers, authors and administrators may do with
blog posts, user accounts, the admin area and the dashboard. It answers
allow/deny with a human-readable reason, and filters collections for
listings. Authentication, persistence and HTTP handling stay with the
caller.

Basic Usage:
    >>> from blogauthz import Actor, Authorizer, Blog, Role
    >>>
    >>> authorizer = Authorizer()
    >>> author = Actor(id=2, role=Role.AUTHOR)
    >>> draft = Blog(id=10, owner_id=2, published=False)
    >>>
    >>> authorizer.can(author, "blog", "edit", draft)
    True
    >>> authorizer.check(None, "blog", "create").reason
    'You must be logged in to create blogs.'
    >>>
    >>> request = authorizer.for_request(author)
    >>> visible = request.policy_scope("blog", all_blogs)
    >>> request.verify_policy_scoped()
"""

__version__ = "0.1.0"

from blogauthz.audit import DecisionLog, DecisionRecord
from blogauthz.authorizer import Authorizer, RequestAuthorization
from blogauthz.config import AuthorizerConfig
from blogauthz.exceptions import (
    AuthorizationNotPerformedError,
    BlogAuthzError,
    ConfigurationError,
    PayloadValidationError,
    PolicyNotFoundError,
    ScopeNotSupportedError,
    UnknownActionError,
)
from blogauthz.policies import (
    AdminAction,
    AdminPolicy,
    BlogAction,
    BlogPolicy,
    DashboardAction,
    DashboardPolicy,
    HeadlessPolicy,
    Policy,
    PolicyAction,
    PolicyRegistry,
    RecordPolicy,
    Scope,
    UserAction,
    UserPolicy,
    default_registry,
)
from blogauthz.types import Actor, Blog, Decision, Role, is_authenticated

__all__ = [
    # Version
    "__version__",
    # Entry point
    "Authorizer",
    "RequestAuthorization",
    "AuthorizerConfig",
    # Core types
    "Actor",
    "Role",
    "Blog",
    "Decision",
    "is_authenticated",
    # Policies
    "Policy",
    "RecordPolicy",
    "HeadlessPolicy",
    "PolicyAction",
    "Scope",
    "PolicyRegistry",
    "default_registry",
    "BlogPolicy",
    "BlogAction",
    "UserPolicy",
    "UserAction",
    "AdminPolicy",
    "AdminAction",
    "DashboardPolicy",
    "DashboardAction",
    # Decision log
    "DecisionLog",
    "DecisionRecord",
    # Exceptions
    "BlogAuthzError",
    "PolicyNotFoundError",
    "UnknownActionError",
    "ScopeNotSupportedError",
    "AuthorizationNotPerformedError",
    "ConfigurationError",
    "PayloadValidationError",
]
