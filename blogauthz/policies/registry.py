"""
Policy registry for blogauthz.

This module provides the PolicyRegistry class for registering and
looking up policy classes by resource tag or by record class. A
registry is filled once at start-up and then frozen; lookups against a
frozen registry never change it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from blogauthz.exceptions import (
    ConfigurationError,
    PolicyNotFoundError,
    ScopeNotSupportedError,
)
from blogauthz.policies.admin import AdminPolicy
from blogauthz.policies.blog import BlogPolicy
from blogauthz.policies.dashboard import DashboardPolicy
from blogauthz.policies.user import UserPolicy
from blogauthz.types import Actor, Blog

if TYPE_CHECKING:
    from blogauthz.policies.base import Policy

logger = logging.getLogger(__name__)


class PolicyRegistry:
    """
    Registry for policy classes.

    Features:
        - Decorator-based registration (@registry.policy("blog", model=Blog))
        - Registration by naming convention (BlogPolicy -> "blog")
        - Lookup by resource tag or by record class
        - Freezing once start-up registration is done

    An unknown tag is a programming error and raises PolicyNotFoundError.
    There is no fallback policy.

    Example:
        >>> registry = PolicyRegistry()
        >>>
        >>> @registry.policy("blog", model=Blog)
        ... class BlogPolicy(RecordPolicy):
        ...     ...
        >>>
        >>> registry.freeze()
        >>> policy = registry.get_policy_instance("blog", actor, blog)
        >>> if policy.can("edit"):
        ...     # proceed

    Thread Safety:
        Registration is serialized by an internal lock. Lookups read the
        tables directly; they are safe once the registry is frozen.
    """

    def __init__(self) -> None:
        self._policies: dict[str, type[Policy]] = {}
        self._models: dict[type, str] = {}
        # Policy class -> the tag it is registered under here
        self._names: dict[type[Policy], str] = {}
        self._lock = threading.RLock()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Refuse any further registration changes."""
        with self._lock:
            self._frozen = True
            logger.debug(f"Froze policy registry with {len(self._policies)} policies")

    def _ensure_mutable(self, operation: str) -> None:
        if self._frozen:
            raise ConfigurationError(
                config_key="policy_registry",
                message=f"Cannot {operation}: the policy registry is frozen",
            )

    def policy(
        self,
        resource_name: str,
        model: type | None = None,
    ) -> Callable[[type[Policy]], type[Policy]]:
        """
        Decorator for registering a policy class.

        Args:
            resource_name: The resource tag this policy handles.
            model: Optional record class resolved to this policy by
                ``resolve_for``.

        Returns:
            A decorator function that registers the policy class.

        Example:
            >>> @registry.policy("dashboard")
            ... class DashboardPolicy(HeadlessPolicy):
            ...     ...
        """
        def decorator(policy_class: type[Policy]) -> type[Policy]:
            self.register(resource_name, policy_class, model=model)
            return policy_class
        return decorator

    def register(
        self,
        resource_name: str,
        policy_class: type[Policy],
        model: type | None = None,
    ) -> None:
        """
        Register a policy class for a resource tag.

        Registering the same tag twice overwrites the earlier policy and
        logs a warning.

        Args:
            resource_name: The resource tag.
            policy_class: The policy class to register.
            model: Optional record class mapped to the same tag.

        Raises:
            ConfigurationError: If the registry is frozen.
        """
        with self._lock:
            self._ensure_mutable(f"register '{resource_name}'")

            existing = self._policies.get(resource_name)
            if existing is not None:
                logger.warning(
                    f"Overwriting policy for '{resource_name}': "
                    f"{existing.__name__} -> {policy_class.__name__}"
                )
                if self._names.get(existing) == resource_name:
                    del self._names[existing]

            self._policies[resource_name] = policy_class
            self._names[policy_class] = resource_name
            if model is not None:
                self._models[model] = resource_name

            logger.debug(
                f"Registered policy '{policy_class.__name__}' for resource '{resource_name}'"
            )

    def register_by_convention(
        self,
        policy_class: type[Policy],
        model: type | None = None,
    ) -> None:
        """
        Register a policy class using naming convention.

        - BlogPolicy -> "blog"
        - AdminDashboardPolicy -> "admin_dashboard"
        """
        self.register(policy_class.get_resource_name(), policy_class, model=model)

    def resolve(self, resource_name: str) -> type[Policy]:
        """
        Get the policy class for a resource tag.

        The returned class is the policy factory: call it with
        ``(actor, record)``, or ``(actor)`` for headless policies.

        Raises:
            PolicyNotFoundError: If no policy is registered for the tag.

        Example:
            >>> policy_class = registry.resolve("blog")
            >>> policy = policy_class(actor, blog)
        """
        policy_class = self._policies.get(resource_name)
        if policy_class is None:
            raise PolicyNotFoundError(resource_name, sorted(self._policies))
        return policy_class

    get_policy = resolve

    def resolve_for(self, record: Any) -> type[Policy]:
        """
        Get the policy class for a record, by its class.

        Base classes are consulted in MRO order, so subclasses of a
        registered model share its policy. A record class itself can be
        passed for type-level checks.

        Raises:
            PolicyNotFoundError: If no registered model matches.
        """
        record_type = record if isinstance(record, type) else type(record)
        for klass in record_type.__mro__:
            resource_name = self._models.get(klass)
            if resource_name is not None:
                return self.resolve(resource_name)
        raise PolicyNotFoundError(record_type.__name__, sorted(self._policies))

    def get_policy_instance(
        self,
        resource_name: str,
        actor: Actor | None,
        record: Any = None,
    ) -> Policy:
        """
        Get an instantiated policy for a resource tag.

        Example:
            >>> policy = registry.get_policy_instance("blog", actor, blog)
            >>> if policy.can("show"):
            ...     return render(blog)
        """
        policy_class = self.resolve(resource_name)
        return policy_class(actor, record)

    def resolve_scope(
        self,
        resource_name: str,
        actor: Actor | None,
        collection: Iterable[Any],
    ) -> list[Any]:
        """
        Filter a collection through the policy's Scope.

        Raises:
            PolicyNotFoundError: If no policy is registered for the tag.
            ScopeNotSupportedError: If the policy is headless.
        """
        policy_class = self.resolve(resource_name)
        if policy_class.headless or policy_class.Scope is None:
            raise ScopeNotSupportedError(policy_class.__name__)
        return policy_class.Scope(actor, collection).resolve()

    def resource_name_for(self, policy_class: type[Policy]) -> str:
        """
        Get the tag a policy class is registered under in this registry.

        Falls back to the class's conventional name when it is not
        registered here.

        Example:
            >>> registry.resource_name_for(BlogPolicy)
            'blog'
        """
        return self._names.get(policy_class) or policy_class.get_resource_name()

    def has_policy(self, resource_name: str) -> bool:
        return resource_name in self._policies

    def list_policies(self) -> dict[str, str]:
        """
        List all registered policies.

        Returns:
            Dictionary mapping resource tags to policy class names.

        Example:
            >>> registry.list_policies()
            {'admin': 'AdminPolicy', 'blog': 'BlogPolicy', ...}
        """
        return {
            resource: policy.__name__
            for resource, policy in sorted(self._policies.items())
        }

    def unregister(self, resource_name: str) -> bool:
        """
        Unregister a policy for a resource tag.

        Returns:
            True if a policy was unregistered, False if none was registered.

        Raises:
            ConfigurationError: If the registry is frozen.
        """
        with self._lock:
            self._ensure_mutable(f"unregister '{resource_name}'")
            if resource_name not in self._policies:
                return False
            policy_class = self._policies.pop(resource_name)
            if self._names.get(policy_class) == resource_name:
                del self._names[policy_class]
            self._models = {
                model: name for model, name in self._models.items()
                if name != resource_name
            }
            logger.debug(f"Unregistered policy for resource '{resource_name}'")
            return True


def default_registry(freeze: bool = True) -> PolicyRegistry:
    """
    Build a registry holding the blog application's policies.

    Tags: ``blog`` (records of type Blog), ``user`` (records of type
    Actor), ``admin`` and ``dashboard`` (headless).

    Args:
        freeze: Freeze the registry before returning it.
    """
    registry = PolicyRegistry()
    registry.register("blog", BlogPolicy, model=Blog)
    registry.register("user", UserPolicy, model=Actor)
    registry.register("admin", AdminPolicy)
    registry.register("dashboard", DashboardPolicy)
    if freeze:
        registry.freeze()
    return registry
