"""
Core type definitions for blogauthz.

This module defines the values that flow into and out of the policy
layer: the requesting actor and its role, the blog record, and the
decision returned for every authorization check.

An anonymous visitor is represented by ``None`` wherever an actor is
expected. There is no guest ``Actor``.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Role(Enum):
    """
    Closed set of actor roles.

    Values are the ordinals stored by the application's user table
    (reader 0, author 1, admin 2). Roles are compared by identity only.
    """

    READER = 0
    AUTHOR = 1
    ADMIN = 2

    @property
    def label(self) -> str:
        """Lowercase role name, e.g. ``"author"``."""
        return self.name.lower()

    @classmethod
    def coerce(cls, value: Role | str | int) -> Role:
        """
        Convert a role name, ordinal or Role into a Role.

        Args:
            value: ``Role.AUTHOR``, ``"author"`` (any case) or ``1``.

        Returns:
            The matching Role.

        Raises:
            ValueError: If the value names no role.

        Example:
            >>> Role.coerce("Admin")
            <Role.ADMIN: 2>
            >>> Role.coerce(0)
            <Role.READER: 0>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ValueError(
            f"Unknown role {value!r}; expected one of "
            f"{', '.join(role.label for role in cls)}"
        )


@dataclass(frozen=True)
class Actor:
    """
    The authenticated principal making a request.

    Actors are produced by the authenticator before the policy layer is
    called and are trusted as given. The same type is the record checked
    by ``UserPolicy``, since a user account is both principal and
    resource.

    Attributes:
        id: Opaque identifier assigned by the authenticator.
        role: The actor's role. New accounts are readers.
        active: False for deactivated accounts. Policies never grant an
            inactive actor anything extra; the ``Authorizer`` treats them
            as anonymous by default.
        username: Display name, informational only.
        email: Contact address, informational only.

    Example:
        >>> author = Actor(id=2, role=Role.AUTHOR, username="janesmith")
        >>> author.is_author()
        True
    """
    id: Hashable
    role: Role = Role.READER
    active: bool = True
    username: str | None = None
    email: str | None = None

    def is_reader(self) -> bool:
        """Check if the actor is a reader."""
        return self.role is Role.READER

    def is_author(self) -> bool:
        """Check if the actor is an author."""
        return self.role is Role.AUTHOR

    def is_admin(self) -> bool:
        """Check if the actor is an administrator."""
        return self.role is Role.ADMIN

    def is_authenticated(self) -> bool:
        """An Actor instance always represents an authenticated principal."""
        return True

    def is_active(self) -> bool:
        return self.active

    def is_inactive(self) -> bool:
        return not self.active

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "role": self.role.label,
            "active": self.active,
            "username": self.username,
            "email": self.email,
        }


def is_authenticated(actor: Actor | None) -> bool:
    """Return True when an actor is present, False for anonymous requests."""
    return actor is not None


@dataclass(frozen=True)
class Blog:
    """
    A blog post as loaded by the persistence layer.

    Attributes:
        id: Record identifier.
        owner_id: Id of the actor who created the post. Never changes.
        published: True for public posts, False for drafts.
        title: Post title.
        description: Post body.
    """
    id: Hashable
    owner_id: Hashable
    published: bool = False
    title: str = ""
    description: str = ""

    def is_published(self) -> bool:
        return self.published

    def is_draft(self) -> bool:
        return not self.published

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "published": self.published,
            "title": self.title,
            "description": self.description,
        }


@dataclass(frozen=True)
class Decision:
    """
    Result of an authorization check.

    A denied decision is the structured denial handed back to the
    caller: which action was attempted, which policy refused it, and the
    message to show the user. Redirects and flash messages are the
    caller's business.

    Attributes:
        allowed: Whether the action is authorized.
        action: The action that was checked (e.g. ``"edit"``).
        policy: Name of the policy class that decided.
        reason: Denial message, or None when allowed.

    Example:
        >>> decision = Decision.deny(
        ...     action="edit",
        ...     policy="BlogPolicy",
        ...     reason="You can only edit your own blogs.",
        ... )
        >>> decision.denied
        True
    """
    allowed: bool
    action: str
    policy: str
    reason: str | None = None

    @classmethod
    def allow(cls, action: str, policy: str) -> Decision:
        """Create an allowed decision."""
        return cls(allowed=True, action=action, policy=policy)

    @classmethod
    def deny(cls, action: str, policy: str, reason: str) -> Decision:
        """Create a denied decision."""
        return cls(allowed=False, action=action, policy=policy, reason=reason)

    @property
    def denied(self) -> bool:
        return not self.allowed

    def __bool__(self) -> bool:
        return self.allowed

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "allowed": self.allowed,
            "action": self.action,
            "policy": self.policy,
            "reason": self.reason,
        }
