"""
Authorization rules for user accounts.

The record is itself an ``Actor``. Users may view and edit their own
profile; administrators manage everyone else. An administrator can
never deactivate or reactivate their own account, so an admin cannot
lock themselves out.
"""

from __future__ import annotations

from blogauthz.policies.base import PolicyAction, RecordPolicy, Scope
from blogauthz.types import Actor


class UserAction(PolicyAction):
    """Actions guarded by UserPolicy."""

    INDEX = "index"
    SHOW = "show"
    EDIT = "edit"
    UPDATE = "update"
    ASSIGN_ROLE = "assign_role"
    DEACTIVATE = "deactivate"
    ACTIVATE = "activate"


class UserPolicy(RecordPolicy[Actor]):
    """
    Policy for user accounts.

    Denial messages distinguish between an anonymous request, a request
    for someone else's account, a missing admin role, and an admin
    targeting their own account.

    Example:
        >>> UserPolicy(admin, admin).can("deactivate")
        False
        >>> UserPolicy(admin, admin).check("deactivate").reason
        'You cannot deactivate your own account'
    """

    Action = UserAction

    def is_self(self) -> bool:
        """Check if the record is the actor's own account."""
        if self.actor is None or self.record is None:
            return False
        return self.actor.id == self.record.id

    def can_index(self) -> bool:
        return self.admin

    def can_show(self) -> bool:
        return self.authenticated and (self.admin or self.is_self())

    def can_edit(self) -> bool:
        return self.authenticated and (self.admin or self.is_self())

    def can_update(self) -> bool:
        return self.can_edit()

    def can_assign_role(self) -> bool:
        return self.admin

    def can_deactivate(self) -> bool:
        return self.admin and self.record is not None and not self.is_self()

    def can_activate(self) -> bool:
        return self.admin and self.record is not None and not self.is_self()

    rules = {
        UserAction.INDEX: can_index,
        UserAction.SHOW: can_show,
        UserAction.EDIT: can_edit,
        UserAction.UPDATE: can_update,
        UserAction.ASSIGN_ROLE: can_assign_role,
        UserAction.DEACTIVATE: can_deactivate,
        UserAction.ACTIVATE: can_activate,
    }

    def message_for(self, action: PolicyAction | None) -> str:
        if action is UserAction.INDEX:
            if not self.authenticated:
                return "You must be logged in to view the user list"
            return (
                "You do not have permission to view the user list. "
                "Only administrators can access this."
            )

        if action is UserAction.SHOW:
            if not self.authenticated:
                return "You must be logged in to view user details"
            if not self.is_self() and not self.admin:
                return "You can only view your own profile"
            return "You are not authorized to view this user"

        if action in (UserAction.EDIT, UserAction.UPDATE):
            if not self.authenticated:
                return "You must be logged in to edit user details"
            if not self.is_self() and not self.admin:
                return "You can only edit your own profile"
            return "You are not authorized to edit this user"

        if action is UserAction.ASSIGN_ROLE:
            if not self.authenticated:
                return "You must be logged in to assign roles"
            if not self.admin:
                return "Only administrators can assign roles"
            return "You are not authorized to assign roles"

        if action in (UserAction.DEACTIVATE, UserAction.ACTIVATE):
            verb = action.value
            if not self.authenticated:
                return f"You must be logged in to {verb} users"
            if not self.admin:
                return f"Only administrators can {verb} users"
            if self.is_self():
                return f"You cannot {verb} your own account"
            return f"You are not authorized to {verb} this user"

        return "You are not authorized to perform this action on users"

    class Scope(Scope[Actor]):
        """
        Accounts an actor may list.

        Administrators see every account; anyone else sees only their
        own. Anonymous visitors see none.
        """

        def resolve(self) -> list[Actor]:
            actor = self.actor
            if actor is None:
                return []
            if actor.is_admin():
                return list(self.scope)
            return [user for user in self.scope if user.id == actor.id]
