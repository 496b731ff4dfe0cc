"""
Headless policy for the administration area.

Every admin capability is restricted to administrators.
"""

from __future__ import annotations

from blogauthz.policies.base import HeadlessPolicy, PolicyAction


class AdminAction(PolicyAction):
    """Capabilities of the administration area."""

    INDEX = "index"
    MANAGE_USERS = "manage_users"
    ASSIGN_ROLE = "assign_role"
    DEACTIVATE_USER = "deactivate_user"
    ACTIVATE_USER = "activate_user"
    VIEW_ANALYTICS = "view_analytics"


_ADMIN_MESSAGES = {
    AdminAction.INDEX: (
        "You do not have permission to access the admin dashboard. "
        "Only administrators can access this section."
    ),
    AdminAction.MANAGE_USERS: (
        "You do not have permission to manage users. "
        "Only administrators can manage users."
    ),
    AdminAction.ASSIGN_ROLE: (
        "You do not have permission to assign roles. "
        "Only administrators can assign roles."
    ),
    AdminAction.DEACTIVATE_USER: (
        "You do not have permission to deactivate users. "
        "Only administrators can perform this action."
    ),
    AdminAction.ACTIVATE_USER: (
        "You do not have permission to activate users. "
        "Only administrators can perform this action."
    ),
    AdminAction.VIEW_ANALYTICS: (
        "You do not have permission to view analytics. "
        "Only administrators can access this."
    ),
}


class AdminPolicy(HeadlessPolicy):
    """Policy guarding the admin dashboard and user management."""

    Action = AdminAction

    def admin_only(self) -> bool:
        return self.admin

    rules = dict.fromkeys(AdminAction, admin_only)

    def message_for(self, action: PolicyAction | None) -> str:
        if not self.authenticated:
            return "You must be logged in to access the admin section."
        if action in _ADMIN_MESSAGES:
            return _ADMIN_MESSAGES[action]
        return "You are not authorized to access this admin section."
