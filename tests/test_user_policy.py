"""
Tests for UserPolicy and its Scope.

Tests cover:
- Self-service profile access
- Admin-only management actions
- Admin self-protection on deactivate/activate
- Denial messages per cause
- Scope filtering
"""

from __future__ import annotations

import pytest

from blogauthz import Actor
from blogauthz.policies.user import UserAction, UserPolicy

SELF_SERVICE = [UserAction.SHOW, UserAction.EDIT, UserAction.UPDATE]
ADMIN_ONLY = [UserAction.INDEX, UserAction.ASSIGN_ROLE]
STATUS_CHANGES = [UserAction.DEACTIVATE, UserAction.ACTIVATE]


class TestSelfService:
    """Tests for show/edit/update."""

    @pytest.mark.parametrize("action", SELF_SERVICE)
    def test_own_profile(self, action, reader: Actor):
        assert UserPolicy(reader, reader).can(action) is True

    @pytest.mark.parametrize("action", SELF_SERVICE)
    def test_other_profile_denied(self, action, reader: Actor, author: Actor):
        assert UserPolicy(reader, author).can(action) is False

    @pytest.mark.parametrize("action", SELF_SERVICE)
    def test_admin_any_profile(self, action, admin: Actor, author: Actor):
        assert UserPolicy(admin, author).can(action) is True

    @pytest.mark.parametrize("action", SELF_SERVICE)
    def test_anonymous_denied(self, action, author: Actor):
        assert UserPolicy(None, author).can(action) is False


class TestAdministration:
    """Tests for index, assign_role, deactivate and activate."""

    @pytest.mark.parametrize("action", ADMIN_ONLY)
    def test_admin_only(self, action, reader: Actor, author: Actor, admin: Actor):
        assert UserPolicy(admin, author).can(action) is True
        assert UserPolicy(author, author).can(action) is False
        assert UserPolicy(reader, author).can(action) is False
        assert UserPolicy(None, author).can(action) is False

    def test_index_without_record(self, admin: Actor, reader: Actor):
        assert UserPolicy(admin, None).can("index") is True
        assert UserPolicy(reader, None).can("index") is False

    @pytest.mark.parametrize("action", STATUS_CHANGES)
    def test_admin_may_change_others(self, action, admin: Actor, author: Actor):
        assert UserPolicy(admin, author).can(action) is True

    @pytest.mark.parametrize("action", STATUS_CHANGES)
    def test_admin_may_not_change_self(self, action, admin: Actor):
        """Test an admin cannot lock themselves out."""
        assert UserPolicy(admin, admin).can(action) is False

    def test_admin_self_protection_by_id(self, admin: Actor):
        """Test self-protection compares ids, not object identity."""
        same_account = Actor(id=admin.id, role=admin.role)
        assert UserPolicy(admin, same_account).can("deactivate") is False

    @pytest.mark.parametrize("action", STATUS_CHANGES)
    def test_non_admin_may_not_change(self, action, author: Actor, reader: Actor):
        assert UserPolicy(author, reader).can(action) is False
        assert UserPolicy(author, author).can(action) is False
        assert UserPolicy(None, reader).can(action) is False

    @pytest.mark.parametrize("action", STATUS_CHANGES)
    def test_status_change_needs_a_record(self, action, admin: Actor):
        assert UserPolicy(admin, None).can(action) is False


class TestMessages:
    """Tests for cause-specific denial messages."""

    def test_show_messages(self, reader: Actor, author: Actor):
        assert UserPolicy(None, author).check("show").reason == (
            "You must be logged in to view user details"
        )
        assert UserPolicy(reader, author).check("show").reason == (
            "You can only view your own profile"
        )

    @pytest.mark.parametrize("action", ["edit", "update"])
    def test_edit_messages(self, action, reader: Actor, author: Actor):
        assert UserPolicy(None, author).check(action).reason == (
            "You must be logged in to edit user details"
        )
        assert UserPolicy(reader, author).check(action).reason == (
            "You can only edit your own profile"
        )

    def test_index_messages(self, reader: Actor):
        assert UserPolicy(None, None).check("index").reason == (
            "You must be logged in to view the user list"
        )
        assert UserPolicy(reader, None).check("index").reason.startswith(
            "You do not have permission to view the user list"
        )

    def test_assign_role_messages(self, reader: Actor, author: Actor):
        assert UserPolicy(None, author).check("assign_role").reason == (
            "You must be logged in to assign roles"
        )
        assert UserPolicy(reader, author).check("assign_role").reason == (
            "Only administrators can assign roles"
        )

    @pytest.mark.parametrize("verb", ["deactivate", "activate"])
    def test_status_messages_by_cause(self, verb, admin: Actor, author: Actor):
        anonymous = UserPolicy(None, author).check(verb).reason
        wrong_role = UserPolicy(author, admin).check(verb).reason
        self_target = UserPolicy(admin, admin).check(verb).reason

        assert anonymous == f"You must be logged in to {verb} users"
        assert wrong_role == f"Only administrators can {verb} users"
        assert self_target == f"You cannot {verb} your own account"

    def test_generic_message(self, reader: Actor):
        assert UserPolicy(reader, reader).authorization_message() == (
            "You are not authorized to perform this action on users"
        )


class TestUserScope:
    """Tests for UserPolicy.Scope."""

    def test_admin_sees_all(self, admin, reader, author, other_author):
        users = [reader, author, admin, other_author]
        assert UserPolicy.Scope(admin, users).resolve() == users

    def test_non_admin_sees_only_self(self, reader, author, admin):
        users = [reader, author, admin]
        assert UserPolicy.Scope(author, users).resolve() == [author]
        assert UserPolicy.Scope(reader, users).resolve() == [reader]

    def test_anonymous_sees_nobody(self, reader, author):
        assert UserPolicy.Scope(None, [reader, author]).resolve() == []

    def test_self_missing_from_collection(self, reader, author):
        assert UserPolicy.Scope(reader, [author]).resolve() == []
