"""
Tests for payload validation.

Tests cover:
- Actor payloads from the authenticator
- Blog payloads from the persistence layer
- Rejection of malformed payloads
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from blogauthz import Actor, Blog, Role
from blogauthz.exceptions import PayloadValidationError
from blogauthz.policies import BlogPolicy, UserPolicy
from blogauthz.validation import (
    ActorPayload,
    actor_from_payload,
    blog_from_payload,
    blogs_from_payloads,
)


class TestActorPayload:
    """Tests for actor_from_payload."""

    def test_anonymous(self):
        assert actor_from_payload(None) is None

    def test_full_payload(self):
        actor = actor_from_payload({
            "id": 2,
            "role": "author",
            "active": True,
            "username": "janesmith",
            "email": "jane@example.com",
        })
        assert actor == Actor(
            id=2, role=Role.AUTHOR, username="janesmith", email="jane@example.com"
        )

    @pytest.mark.parametrize(
        "role, expected",
        [
            ("reader", Role.READER),
            ("ADMIN", Role.ADMIN),
            (1, Role.AUTHOR),
            (2, Role.ADMIN),
            (None, Role.READER),
        ],
    )
    def test_role_names_and_ordinals(self, role, expected):
        assert actor_from_payload({"id": 1, "role": role}).role is expected

    def test_role_defaults_to_reader(self):
        assert actor_from_payload({"id": 1}).role is Role.READER

    def test_string_ids_kept(self):
        assert actor_from_payload({"id": "u-42"}).id == "u-42"

    @pytest.mark.parametrize("raw", ["2", " 2 ", 2])
    def test_numeric_ids_normalized(self, raw):
        assert actor_from_payload({"id": raw}).id == 2

    def test_inactive(self):
        assert actor_from_payload({"id": 5, "active": False}).is_inactive() is True

    def test_unknown_fields_ignored(self):
        actor = actor_from_payload({"id": 1, "encrypted_password": "x"})
        assert actor == Actor(id=1)

    def test_unknown_role_rejected(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            actor_from_payload({"id": 1, "role": "moderator"})

        error = exc_info.value
        assert error.model == "actor"
        assert len(error.validation_errors) == 1
        assert error.validation_errors[0].startswith("Field 'role'")

    def test_missing_id_rejected(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            actor_from_payload({"role": "admin"})
        assert error_fields(exc_info.value) == ["id"]

    def test_model_is_frozen(self):
        payload = ActorPayload(id=1)
        with pytest.raises(ValidationError):
            payload.role = Role.ADMIN


class TestBlogPayload:
    """Tests for blog_from_payload."""

    def test_owner_id(self):
        blog = blog_from_payload({"id": 10, "owner_id": 2, "published": False})
        assert blog == Blog(id=10, owner_id=2, published=False)

    def test_user_id_column(self):
        blog = blog_from_payload({"id": 11, "user_id": 2, "published": True, "title": "Hi"})
        assert blog.owner_id == 2
        assert blog.is_published() is True
        assert blog.title == "Hi"

    def test_null_published_is_draft(self):
        assert blog_from_payload({"id": 1, "owner_id": 2, "published": None}).is_draft() is True

    def test_published_defaults_to_draft(self):
        assert blog_from_payload({"id": 1, "owner_id": 2}).is_draft() is True

    def test_missing_owner_rejected(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            blog_from_payload({"id": 1, "published": True})

        error = exc_info.value
        assert error.model == "blog"
        assert len(error.validation_errors) == 1
        assert "Invalid blog payload" in str(error)

    def test_bad_published_rejected(self):
        with pytest.raises(PayloadValidationError):
            blog_from_payload({"id": 1, "owner_id": 2, "published": "maybe"})

    def test_many_payloads_keep_order(self):
        blogs = blogs_from_payloads([
            {"id": 3, "owner_id": 1},
            {"id": 1, "owner_id": 1, "published": True},
            {"id": 2, "user_id": 4},
        ])
        assert [blog.id for blog in blogs] == [3, 1, 2]


class TestIdentifierConsistency:
    """Tests that ids from both collaborators compare equal."""

    def test_owner_can_edit_with_mixed_id_types(self):
        actor = actor_from_payload({"id": "2", "role": "author"})
        blog = blog_from_payload({"id": "10", "user_id": 2})

        assert actor.id == blog.owner_id == 2
        assert blog.id == 10
        assert BlogPolicy(actor, blog).can("edit") is True
        assert BlogPolicy(actor, blog).can("show") is True

    def test_owner_id_string_matches_int_actor(self):
        actor = actor_from_payload({"id": 2, "role": "author"})
        blog = blog_from_payload({"id": 10, "owner_id": "2"})
        assert BlogPolicy(actor, blog).can("destroy") is True

    def test_self_check_with_mixed_id_types(self):
        admin = actor_from_payload({"id": "3", "role": "admin"})
        same_account = actor_from_payload({"id": 3, "role": "admin"})
        assert UserPolicy(admin, same_account).can("deactivate") is False


def error_fields(error: PayloadValidationError) -> list[str]:
    return [message.split("'")[1] for message in error.validation_errors]
