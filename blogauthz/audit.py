"""
In-memory decision log for blogauthz.

Keeps the most recent authorization decisions so an application can
inspect what was allowed or denied, e.g. on an admin page or in tests.
"""

from __future__ import annotations

import threading
import uuid
from collections import deque
from collections.abc import Hashable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from blogauthz.types import Actor, Decision


def _generate_event_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    """Get current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DecisionRecord:
    """
    One logged authorization decision.

    Attributes:
        actor_id: Id of the actor, or None for anonymous requests.
        role: The actor's role label, or None for anonymous requests.
        policy: Name of the policy class that decided.
        action: The action that was checked.
        allowed: Whether the action was authorized.
        reason: Denial message, if denied.
        resource: Resource tag the policy is registered under.
        event_id: Unique identifier for this record.
        timestamp: When the decision was made (UTC).
    """
    actor_id: Hashable | None
    role: str | None
    policy: str
    action: str
    allowed: bool
    reason: str | None = None
    resource: str | None = None
    event_id: str = field(default_factory=_generate_event_id)
    timestamp: datetime = field(default_factory=_utc_now)

    @classmethod
    def from_decision(
        cls,
        actor: Actor | None,
        decision: Decision,
        resource: str | None = None,
    ) -> DecisionRecord:
        return cls(
            actor_id=actor.id if actor is not None else None,
            role=actor.role.label if actor is not None else None,
            policy=decision.policy,
            action=decision.action,
            allowed=decision.allowed,
            reason=decision.reason,
            resource=resource,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "actor_id": self.actor_id,
            "role": self.role,
            "resource": self.resource,
            "policy": self.policy,
            "action": self.action,
            "allowed": self.allowed,
            "reason": self.reason,
        }


class DecisionLog:
    """
    Bounded, thread-safe log of authorization decisions.

    The oldest records are dropped once ``max_events`` is reached.

    Example:
        >>> log = DecisionLog(max_events=100)
        >>> authorizer = Authorizer(decision_log=log)
        >>> authorizer.can(None, "blog", "create")
        False
        >>> log.denials()[0].action
        'create'
    """

    def __init__(self, max_events: int = 1000) -> None:
        if max_events <= 0:
            raise ValueError(f"max_events must be positive, got {max_events}")
        self._events: deque[DecisionRecord] = deque(maxlen=max_events)
        self._lock = threading.RLock()

    @property
    def max_events(self) -> int:
        return self._events.maxlen or 0

    @property
    def events(self) -> list[DecisionRecord]:
        """Get all logged records, oldest first."""
        with self._lock:
            return list(self._events)

    def record(
        self,
        actor: Actor | None,
        decision: Decision,
        resource: str | None = None,
    ) -> DecisionRecord:
        """Append a decision and return the stored record."""
        entry = DecisionRecord.from_decision(actor, decision, resource)
        with self._lock:
            self._events.append(entry)
        return entry

    def denials(self) -> list[DecisionRecord]:
        """Get the denied decisions, oldest first."""
        with self._lock:
            return [entry for entry in self._events if not entry.allowed]

    def for_actor(self, actor_id: Hashable | None) -> list[DecisionRecord]:
        """Get the records for one actor id (None for anonymous requests)."""
        with self._lock:
            return [entry for entry in self._events if entry.actor_id == actor_id]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
