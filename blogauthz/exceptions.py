"""
Custom exceptions for blogauthz.

Denied requests are never exceptions: a denial is an ordinary
``Decision`` with ``allowed=False``. The exceptions below signal
programming or configuration errors that should fail fast, such as
asking for a policy that was never registered.
"""

from __future__ import annotations

from typing import Any


class BlogAuthzError(Exception):
    """
    Base exception for all blogauthz errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context about the error.

    Example:
        >>> try:
        ...     registry.resolve("comment")
        ... except BlogAuthzError as e:
        ...     logger.error(f"Authorization setup error: {e}")
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class PolicyNotFoundError(BlogAuthzError):
    """
    Raised when no policy is registered for a resource type.

    This means a policy was never registered at start-up. It is never
    turned into an allow or a deny.

    Attributes:
        resource: The resource tag (or record class name) that was looked up.
        available_policies: Registered resource tags, for debugging.

    Example:
        >>> raise PolicyNotFoundError(
        ...     resource="comment",
        ...     available_policies=["blog", "user"]
        ... )
    """

    def __init__(
        self,
        resource: str,
        available_policies: list[str] | None = None,
    ) -> None:
        self.resource = resource
        self.available_policies = available_policies or []

        message = f"No policy found for resource '{resource}'"
        if available_policies:
            message += f". Available policies: {', '.join(available_policies)}"

        details = {
            "resource": resource,
            "available_policies": self.available_policies,
        }
        super().__init__(message, details)


class UnknownActionError(BlogAuthzError):
    """
    Raised when an action is not part of a policy's action enumeration.

    Attributes:
        policy_name: Name of the policy class.
        action: The action that was requested.
        available_actions: The actions the policy defines.

    Example:
        >>> raise UnknownActionError(
        ...     policy_name="BlogPolicy",
        ...     action="publish",
        ...     available_actions=["create", "destroy", "edit"]
        ... )
    """

    def __init__(
        self,
        policy_name: str,
        action: Any,
        available_actions: list[str] | None = None,
    ) -> None:
        self.policy_name = policy_name
        self.action = action
        self.available_actions = available_actions or []

        message = f"Policy '{policy_name}' does not define action '{action}'"
        if available_actions:
            message += f". Available actions: {', '.join(available_actions)}"

        details = {
            "policy_name": policy_name,
            "action": str(action),
            "available_actions": self.available_actions,
        }
        super().__init__(message, details)


class ScopeNotSupportedError(BlogAuthzError):
    """
    Raised when a collection scope is requested from a headless policy.

    Headless policies guard a named capability and have no collection
    to filter.

    Attributes:
        policy_name: Name of the headless policy class.
    """

    def __init__(self, policy_name: str) -> None:
        self.policy_name = policy_name
        message = (
            f"Policy '{policy_name}' is headless and has no scope; "
            "use a record-bound policy to filter collections"
        )
        super().__init__(message, {"policy_name": policy_name})


class AuthorizationNotPerformedError(BlogAuthzError):
    """
    Raised when a request finished without the expected authorization call.

    Mirrors Pundit's ``verify_authorized`` and ``verify_policy_scoped``
    after-action checks.

    Attributes:
        check: Which verification failed ("authorize" or "policy_scope").
        actor_id: The id of the request's actor, if any.
    """

    def __init__(self, check: str, actor_id: Any = None) -> None:
        self.check = check
        self.actor_id = actor_id

        if check == "policy_scope":
            message = "Request completed without resolving a policy scope"
        else:
            message = "Request completed without performing authorization"

        details = {"check": check, "actor_id": actor_id}
        super().__init__(message, details)


class ConfigurationError(BlogAuthzError):
    """
    Raised when blogauthz is misconfigured.

    Attributes:
        config_key: The configuration key that has an issue.
        expected: What was expected for this configuration.
        received: What was actually provided.

    Example:
        >>> raise ConfigurationError(
        ...     config_key="decision_log_size",
        ...     expected="non-negative integer",
        ...     received=-1
        ... )
    """

    def __init__(
        self,
        config_key: str,
        expected: str | None = None,
        received: Any = None,
        message: str | None = None,
    ) -> None:
        self.config_key = config_key
        self.expected = expected
        self.received = received

        if message is None:
            message = f"Invalid configuration for '{config_key}'"
            if expected:
                message += f": expected {expected}"
            if received is not None:
                message += f", got {received!r}"

        details = {
            "config_key": config_key,
            "expected": expected,
            "received": str(received) if received is not None else None,
        }
        super().__init__(message, details)


class PayloadValidationError(BlogAuthzError):
    """
    Raised when a payload from an external collaborator fails validation.

    Attributes:
        model: Name of the payload model ("actor" or "blog").
        validation_errors: One message per failing field.

    Example:
        >>> raise PayloadValidationError(
        ...     model="blog",
        ...     validation_errors=["Field 'owner_id': Field required"]
        ... )
    """

    def __init__(self, model: str, validation_errors: list[str] | None = None) -> None:
        self.model = model
        self.validation_errors = validation_errors or []

        message = f"Invalid {model} payload"
        if self.validation_errors:
            message += f": {'; '.join(self.validation_errors)}"

        details = {
            "model": model,
            "validation_errors": self.validation_errors,
        }
        super().__init__(message, details)
