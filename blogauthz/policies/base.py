"""
Policy base classes for blogauthz.

This module implements a Pundit-inspired policy pattern: one policy
class per resource type, answering allow/deny for a closed set of
actions, plus a Scope that filters collections for listing.

Actions are enumerations rather than method names looked up by string.
Each policy maps every action member to a predicate through an explicit
``rules`` table, and anything without a rule is denied.
"""

from __future__ import annotations

import logging
import re
from abc import ABC
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from blogauthz.exceptions import ConfigurationError, UnknownActionError
from blogauthz.types import Decision

if TYPE_CHECKING:
    from blogauthz.types import Actor

logger = logging.getLogger(__name__)

# Type variable for the record being authorized
T = TypeVar("T")

DEFAULT_DENIAL_MESSAGE = "You are not authorized to perform this action."


class PolicyAction(str, Enum):
    """
    Base class for the action enumeration of a policy.

    Coercion accepts the Pundit spellings used by controllers and view
    helpers, so ``BlogAction("destroy?")``, ``BlogAction("can_destroy")``
    and ``BlogAction("DESTROY")`` all return ``BlogAction.DESTROY``.
    Subclasses may override ``aliases()`` to declare synonyms.
    """

    def __str__(self) -> str:
        return self.value

    @classmethod
    def aliases(cls) -> dict[str, str]:
        """Map of synonym -> canonical action value."""
        return {}

    @classmethod
    def _missing_(cls, value: object) -> PolicyAction | None:
        if not isinstance(value, str):
            return None
        name = value.strip().lower()
        if name.endswith("?"):
            name = name[:-1]
        if name.startswith("can_"):
            name = name[4:]
        name = cls.aliases().get(name, name)
        for member in cls:
            if member.value == name:
                return member
        return None


Predicate = Callable[[Any], bool]


class Policy(ABC, Generic[T]):
    """
    Abstract base class for all blogauthz policies.

    A policy is built fresh for every check from the requesting actor
    (``None`` when anonymous) and the record being accessed. It never
    mutates anything and keeps no state beyond those two values.

    Subclasses declare:
        Action: Their ``PolicyAction`` enumeration.
        rules: Mapping from each action member to a predicate taking
            the policy instance.

    They may override ``message_for`` to explain denials.

    Example:
        >>> class NoteAction(PolicyAction):
        ...     SHOW = "show"
        ...     EDIT = "edit"
        >>>
        >>> class NotePolicy(RecordPolicy):
        ...     Action = NoteAction
        ...
        ...     def can_show(self) -> bool:
        ...         return True
        ...
        ...     def can_edit(self) -> bool:
        ...         return self.admin
        ...
        ...     rules = {
        ...         NoteAction.SHOW: can_show,
        ...         NoteAction.EDIT: can_edit,
        ...     }
        >>>
        >>> NotePolicy(None, note).can("edit")
        False
    """

    Action: ClassVar[type[PolicyAction]] = PolicyAction
    rules: ClassVar[Mapping[PolicyAction, Predicate]] = {}

    # Headless policies guard a capability, not a record
    headless: ClassVar[bool] = False
    Scope: ClassVar[type[Scope[Any]] | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for action, predicate in cls.rules.items():
            if not isinstance(action, cls.Action):
                raise ConfigurationError(
                    config_key=f"{cls.__name__}.rules",
                    expected=f"keys of type {cls.Action.__name__}",
                    received=action,
                )
            if not callable(predicate):
                raise ConfigurationError(
                    config_key=f"{cls.__name__}.rules[{action.value}]",
                    expected="a predicate function",
                    received=predicate,
                )

    def __init__(self, actor: Actor | None, record: T | None = None) -> None:
        """
        Initialize a policy instance.

        Args:
            actor: The authenticated actor, or None for an anonymous visitor.
            record: The record being accessed. Can be None for type-level
                checks such as "may this actor create blogs?".
        """
        self.actor = actor
        self.record = record

    @property
    def authenticated(self) -> bool:
        return self.actor is not None

    @property
    def admin(self) -> bool:
        return self.actor is not None and self.actor.is_admin()

    @property
    def author_or_admin(self) -> bool:
        return self.actor is not None and (self.actor.is_author() or self.actor.is_admin())

    @classmethod
    def coerce_action(cls, action: PolicyAction | str) -> PolicyAction:
        """
        Turn a string or enum member into this policy's action member.

        Raises:
            UnknownActionError: If the action is not in ``Action``.
        """
        if isinstance(action, cls.Action):
            return action
        if isinstance(action, PolicyAction):
            action = action.value
        # An Action without members raises TypeError on lookup
        try:
            return cls.Action(action)
        except (ValueError, TypeError):
            raise UnknownActionError(
                cls.__name__, action, cls.get_available_actions()
            ) from None

    def authorize(self, action: PolicyAction | str) -> bool:
        """
        Check if the actor may perform an action.

        Args:
            action: An ``Action`` member or its name (``"edit"``,
                ``"edit?"``).

        Returns:
            True if authorized. Actions without a rule are denied.

        Raises:
            UnknownActionError: If the action is not defined by this policy.

        Example:
            >>> policy = BlogPolicy(author, draft)
            >>> policy.authorize(BlogAction.EDIT)
            True
        """
        member = self.coerce_action(action)
        predicate = self.rules.get(member)
        if predicate is None:
            logger.debug(
                f"{type(self).__name__}: no rule for action '{member.value}', denying"
            )
            return False
        return bool(self._resolve_rule(predicate)(self))

    def _resolve_rule(self, predicate: Predicate) -> Predicate:
        # Rule tables hold the functions of the defining class; a subclass
        # override of the same method name takes precedence
        name = getattr(predicate, "__name__", "")
        candidate = getattr(type(self), name, None) if name else None
        if callable(candidate):
            return candidate
        return predicate

    def can(self, action: PolicyAction | str) -> bool:
        """
        Alias for authorize() for a more fluent API.

        Example:
            >>> if policy.can("destroy"):
            ...     repository.delete(blog)
        """
        return self.authorize(action)

    def check(self, action: PolicyAction | str) -> Decision:
        """
        Check an action and return a Decision.

        Unlike ``can()``, a denied Decision carries the message to show
        the user.

        Example:
            >>> decision = BlogPolicy(None, draft).check("edit")
            >>> decision.reason
            'You must be logged in to edit blogs.'
        """
        member = self.coerce_action(action)
        policy_name = type(self).__name__
        if self.authorize(member):
            return Decision.allow(member.value, policy_name)
        return Decision.deny(member.value, policy_name, self.message_for(member))

    def authorization_message(self, action: PolicyAction | str | None = None) -> str:
        """
        Get the denial message for an action.

        Args:
            action: The denied action, or None for the generic message.

        Returns:
            A human-readable explanation.
        """
        member = self.coerce_action(action) if action is not None else None
        return self.message_for(member)

    def message_for(self, action: PolicyAction | None) -> str:
        """Denial message for an action member; override per policy."""
        return DEFAULT_DENIAL_MESSAGE

    @classmethod
    def get_resource_name(cls) -> str:
        """
        Get the conventional resource tag for this policy.

        Defaults to the class name without its ``Policy`` suffix in
        snake_case. A registry may register the class under another tag;
        ask the registry (``PolicyRegistry.resource_name_for``) for that.

        Example:
            >>> class DashboardPolicy(HeadlessPolicy):
            ...     pass
            >>> DashboardPolicy.get_resource_name()
            'dashboard'
        """
        name = cls.__name__
        if name.endswith("Policy"):
            name = name[:-6]

        return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()

    @classmethod
    def get_available_actions(cls) -> list[str]:
        """
        Get all actions defined by this policy.

        Returns:
            Sorted action values.
        """
        return sorted(action.value for action in cls.Action)


class Scope(Generic[T]):
    """
    Base class for filtering collections for listing operations.

    A scope receives the actor and an already-loaded collection and
    returns the records that actor may list, preserving their order.
    The base class returns nothing.

    Example:
        >>> class NoteScope(Scope[Note]):
        ...     def resolve(self) -> list[Note]:
        ...         if self.actor is not None and self.actor.is_admin():
        ...             return list(self.scope)
        ...         return [note for note in self.scope if note.public]
        >>>
        >>> visible = NoteScope(actor, all_notes).resolve()
    """

    def __init__(self, actor: Actor | None, scope: Iterable[T]) -> None:
        """
        Initialize a scope instance.

        Args:
            actor: The authenticated actor, or None when anonymous.
            scope: The collection to filter.
        """
        self.actor = actor
        self.scope = list(scope)

    def resolve(self) -> list[T]:
        """
        Filter the scope to the records the actor may see.

        Returns:
            Filtered list of records.
        """
        return []


class RecordPolicy(Policy[T]):
    """
    Policy bound to a persisted record, with an associated Scope.

    Following the Pundit convention, subclasses define a nested
    ``Scope`` class next to their rules.
    """

    class Scope(Scope[T]):
        """Default scope that returns empty list."""
        pass


class HeadlessPolicy(Policy[None]):
    """
    Policy for a named capability with no backing record.

    Headless policies ("admin dashboard", "analytics") only gate on the
    actor. A record passed to the constructor is ignored, and they have
    no Scope.
    """

    headless = True
    Scope = None

    def __init__(self, actor: Actor | None, record: Any = None) -> None:
        if record is not None:
            logger.debug(
                f"{type(self).__name__} is headless; ignoring record of type "
                f"{type(record).__name__}"
            )
        super().__init__(actor, None)
