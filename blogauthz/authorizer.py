"""
Authorizer: the entry point the request-handling layer calls.

The Authorizer ties the policy registry, configuration and decision log
together. The actor is always passed in explicitly; there is no
per-thread or per-context "current user".
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from blogauthz.audit import DecisionLog
from blogauthz.config import AuthorizerConfig
from blogauthz.exceptions import AuthorizationNotPerformedError
from blogauthz.policies.base import Policy, PolicyAction
from blogauthz.policies.registry import PolicyRegistry, default_registry
from blogauthz.types import Actor, Decision

logger = logging.getLogger(__name__)


class Authorizer:
    """
    Main entry point for blog authorization.

    Example:
        >>> from blogauthz import Authorizer, Actor, Blog, Role
        >>>
        >>> authorizer = Authorizer()
        >>> author = Actor(id=2, role=Role.AUTHOR)
        >>> draft = Blog(id=10, owner_id=2, published=False)
        >>>
        >>> authorizer.can(author, "blog", "edit", draft)
        True
        >>> decision = authorizer.check(None, "blog", "edit", draft)
        >>> decision.reason
        'You must be logged in to edit blogs.'
        >>>
        >>> authorizer.policy_scope(None, "blog", [draft])
        []
    """

    def __init__(
        self,
        registry: PolicyRegistry | None = None,
        config: AuthorizerConfig | None = None,
        decision_log: DecisionLog | None = None,
    ) -> None:
        """
        Initialize the Authorizer.

        Args:
            registry: Policy registry to use. Defaults to
                ``default_registry()`` with the blog, user, admin and
                dashboard policies.
            config: Authorizer configuration. Defaults to
                ``AuthorizerConfig.default()``.
            decision_log: Decision log to record into. When omitted, one
                is created with ``config.decision_log_size`` entries
                unless that size is 0.
        """
        self._config = config or AuthorizerConfig.default()
        self._registry = registry or default_registry(freeze=False)
        if self._config.freeze_registry and not self._registry.frozen:
            self._registry.freeze()

        if decision_log is None and self._config.decision_log_size > 0:
            decision_log = DecisionLog(max_events=self._config.decision_log_size)
        self._decision_log = decision_log

    @property
    def registry(self) -> PolicyRegistry:
        return self._registry

    @property
    def config(self) -> AuthorizerConfig:
        return self._config

    @property
    def decision_log(self) -> DecisionLog | None:
        return self._decision_log

    def effective_actor(self, actor: Actor | None) -> Actor | None:
        """
        Return the actor policies should see.

        Deactivated actors are evaluated as anonymous unless
        ``treat_inactive_as_anonymous`` is disabled.
        """
        if actor is not None and actor.is_inactive() and self._config.treat_inactive_as_anonymous:
            logger.debug(f"Actor '{actor.id}' is inactive; evaluating as anonymous")
            return None
        return actor

    # ==================== Policy Lookup ====================

    def policy(
        self,
        resource_name: str,
        actor: Actor | None,
        record: Any = None,
    ) -> Policy:
        """
        Build the policy for a resource tag.

        Raises:
            PolicyNotFoundError: If no policy is registered for the tag.
        """
        return self._registry.get_policy_instance(
            resource_name, self.effective_actor(actor), record
        )

    def policy_for(self, actor: Actor | None, record: Any) -> Policy:
        """
        Build the policy for a record, looked up by its class.

        Raises:
            PolicyNotFoundError: If the record's class has no policy.
        """
        policy_class = self._registry.resolve_for(record)
        record_arg = None if isinstance(record, type) else record
        return policy_class(self.effective_actor(actor), record_arg)

    # ==================== Authorization Methods ====================

    def check(
        self,
        actor: Actor | None,
        resource_name: str,
        action: PolicyAction | str,
        record: Any = None,
    ) -> Decision:
        """
        Check an action and return a Decision.

        Args:
            actor: The current actor, or None when anonymous.
            resource_name: Registered resource tag ("blog", "admin", ...).
            action: Action member or name.
            record: The record, or None for type-level and headless checks.

        Returns:
            Decision with the denial message when not allowed.

        Raises:
            PolicyNotFoundError: If no policy is registered for the tag.
            UnknownActionError: If the policy does not define the action.

        Example:
            >>> decision = authorizer.check(reader, "blog", "show", draft)
            >>> if decision.denied:
            ...     flash(decision.reason)
        """
        policy = self.policy(resource_name, actor, record)
        decision = policy.check(action)
        return self._finish(actor, resource_name, decision)

    def can(
        self,
        actor: Actor | None,
        resource_name: str,
        action: PolicyAction | str,
        record: Any = None,
    ) -> bool:
        """
        Check if an actor may perform an action.

        Example:
            >>> if authorizer.can(actor, "admin", "index"):
            ...     show_admin_link()
        """
        return self.check(actor, resource_name, action, record).allowed

    def check_record(
        self,
        actor: Actor | None,
        record: Any,
        action: PolicyAction | str,
    ) -> Decision:
        """
        Check an action on a record whose policy is found by its class.

        Raises:
            PolicyNotFoundError: If the record's class has no policy.
        """
        policy = self.policy_for(actor, record)
        decision = policy.check(action)
        return self._finish(actor, self._registry.resource_name_for(type(policy)), decision)

    def policy_scope(
        self,
        actor: Actor | None,
        resource_name: str,
        collection: Iterable[Any],
    ) -> list[Any]:
        """
        Filter a collection to the records an actor may list.

        Raises:
            PolicyNotFoundError: If no policy is registered for the tag.
            ScopeNotSupportedError: If the policy is headless.

        Example:
            >>> blogs = authorizer.policy_scope(actor, "blog", repository.all())
        """
        visible = self._registry.resolve_scope(
            resource_name, self.effective_actor(actor), collection
        )
        if self._config.log_decisions:
            logger.debug(
                f"Scope '{resource_name}' for actor {_describe(actor)}: "
                f"{len(visible)} visible"
            )
        return visible

    def for_request(self, actor: Actor | None) -> RequestAuthorization:
        """Bind an actor for the lifetime of one request."""
        return RequestAuthorization(self, actor)

    def _finish(
        self,
        actor: Actor | None,
        resource_name: str,
        decision: Decision,
    ) -> Decision:
        if decision.denied and not decision.reason:
            decision = Decision.deny(
                decision.action, decision.policy, self._config.fallback_message
            )

        if self._config.log_decisions:
            if decision.allowed:
                logger.debug(
                    f"{decision.policy}: allowed '{decision.action}' on "
                    f"'{resource_name}' for actor {_describe(actor)}"
                )
            else:
                logger.info(
                    f"{decision.policy}: denied '{decision.action}' on "
                    f"'{resource_name}' for actor {_describe(actor)}: {decision.reason}"
                )

        if self._decision_log is not None:
            self._decision_log.record(actor, decision, resource=resource_name)

        return decision


class RequestAuthorization:
    """
    Authorization state for a single request.

    Holds the request's actor and remembers whether the request checked
    a policy or resolved a scope, so the caller can verify at the end of
    the request that it did not skip authorization.

    Example:
        >>> auth = authorizer.for_request(current_actor)
        >>> blogs = auth.policy_scope("blog", repository.all())
        >>> ...
        >>> auth.verify_policy_scoped()
    """

    def __init__(self, authorizer: Authorizer, actor: Actor | None) -> None:
        self._authorizer = authorizer
        self._actor = actor
        self._authorized = False
        self._scoped = False

    @property
    def actor(self) -> Actor | None:
        return self._actor

    @property
    def authenticated(self) -> bool:
        return self._actor is not None

    def check(
        self,
        resource_name: str,
        action: PolicyAction | str,
        record: Any = None,
    ) -> Decision:
        decision = self._authorizer.check(self._actor, resource_name, action, record)
        self._authorized = True
        return decision

    def can(
        self,
        resource_name: str,
        action: PolicyAction | str,
        record: Any = None,
    ) -> bool:
        return self.check(resource_name, action, record).allowed

    def check_record(self, record: Any, action: PolicyAction | str) -> Decision:
        decision = self._authorizer.check_record(self._actor, record, action)
        self._authorized = True
        return decision

    def policy_scope(self, resource_name: str, collection: Iterable[Any]) -> list[Any]:
        visible = self._authorizer.policy_scope(self._actor, resource_name, collection)
        self._scoped = True
        return visible

    def skip_authorization(self) -> None:
        """Mark the request as intentionally not authorized."""
        self._authorized = True

    def skip_policy_scope(self) -> None:
        """Mark the request as intentionally not scoped."""
        self._scoped = True

    def verify_authorized(self) -> None:
        """
        Raises:
            AuthorizationNotPerformedError: If no check was performed.
        """
        if not self._authorized:
            raise AuthorizationNotPerformedError("authorize", _actor_id(self._actor))

    def verify_policy_scoped(self) -> None:
        """
        Raises:
            AuthorizationNotPerformedError: If no scope was resolved.
        """
        if not self._scoped:
            raise AuthorizationNotPerformedError("policy_scope", _actor_id(self._actor))


def _actor_id(actor: Actor | None) -> Any:
    return actor.id if actor is not None else None


def _describe(actor: Actor | None) -> str:
    if actor is None:
        return "<anonymous>"
    return f"'{actor.id}' ({actor.role.label})"
