"""
Pydantic validation of collaborator payloads.

The authenticator and the persistence layer hand over plain mappings
(a session's user row, rows from the blogs table). This module checks
them and turns them into ``Actor`` and ``Blog`` values before any
policy sees them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from blogauthz.exceptions import PayloadValidationError
from blogauthz.types import Actor, Blog, Role

logger = logging.getLogger(__name__)


def _normalize_identifier(value: Any) -> Any:
    """Turn digit-only strings into ints so "2" and 2 name the same record."""
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isascii() and stripped.isdigit():
            return int(stripped)
    return value


# Ownership and self checks compare ids with ==, so every id goes through here
Identifier = Annotated[int | str, BeforeValidator(_normalize_identifier)]


class ActorPayload(BaseModel):
    """
    Shape of an authenticated user as supplied by the authenticator.

    ``role`` accepts a role name ("author") or the stored ordinal (1)
    and defaults to reader.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Identifier
    role: Role = Role.READER
    active: bool = True
    username: str | None = None
    email: str | None = None

    @field_validator("role", mode="before")
    @classmethod
    def _coerce_role(cls, value: Any) -> Role:
        if value is None:
            return Role.READER
        return Role.coerce(value)

    def to_actor(self) -> Actor:
        return Actor(
            id=self.id,
            role=self.role,
            active=self.active,
            username=self.username,
            email=self.email,
        )


class BlogPayload(BaseModel):
    """
    Shape of a blog row as supplied by the persistence layer.

    The owner column is accepted as ``owner_id`` or as the table's
    ``user_id``.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Identifier
    owner_id: Identifier = Field(validation_alias=AliasChoices("owner_id", "user_id"))
    published: bool = False
    title: str = ""
    description: str = ""

    @field_validator("published", mode="before")
    @classmethod
    def _null_is_draft(cls, value: Any) -> Any:
        # The published column is nullable
        return False if value is None else value

    def to_blog(self) -> Blog:
        return Blog(
            id=self.id,
            owner_id=self.owner_id,
            published=self.published,
            title=self.title,
            description=self.description,
        )


def _format_errors(error: ValidationError) -> list[str]:
    errors = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"]) or "<root>"
        errors.append(f"Field '{loc}': {item['msg']}")
    return errors


def actor_from_payload(payload: Mapping[str, Any] | None) -> Actor | None:
    """
    Build an Actor from an authenticator payload.

    Args:
        payload: The signed-in user's fields, or None when no one is
            signed in.

    Returns:
        The Actor, or None for an anonymous request.

    Raises:
        PayloadValidationError: If the payload is malformed.

    Example:
        >>> actor_from_payload({"id": 3, "role": "admin"})
        Actor(id=3, role=<Role.ADMIN: 2>, active=True, username=None, email=None)
        >>> actor_from_payload(None) is None
        True
    """
    if payload is None:
        return None
    try:
        validated = ActorPayload.model_validate(payload)
    except ValidationError as e:
        errors = _format_errors(e)
        logger.debug(f"Rejected actor payload: {errors}")
        raise PayloadValidationError("actor", errors) from e
    return validated.to_actor()


def blog_from_payload(payload: Mapping[str, Any]) -> Blog:
    """
    Build a Blog from a persistence payload.

    Raises:
        PayloadValidationError: If the payload is malformed.

    Example:
        >>> blog_from_payload({"id": 1, "user_id": 2, "published": True})
        Blog(id=1, owner_id=2, published=True, title='', description='')
    """
    try:
        validated = BlogPayload.model_validate(payload)
    except ValidationError as e:
        errors = _format_errors(e)
        logger.debug(f"Rejected blog payload: {errors}")
        raise PayloadValidationError("blog", errors) from e
    return validated.to_blog()


def blogs_from_payloads(payloads: Iterable[Mapping[str, Any]]) -> list[Blog]:
    """Build Blogs from persistence payloads, preserving order."""
    return [blog_from_payload(payload) for payload in payloads]
