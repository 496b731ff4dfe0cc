"""
Configuration for the blogauthz Authorizer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from blogauthz.exceptions import ConfigurationError
from blogauthz.policies.base import DEFAULT_DENIAL_MESSAGE


@dataclass(frozen=True)
class AuthorizerConfig:
    """
    Configuration for the Authorizer.

    Attributes:
        treat_inactive_as_anonymous: Evaluate deactivated actors as if no
            one were signed in. This can only take privileges away.
        log_decisions: Log every decision through the ``logging`` module.
        decision_log_size: Number of decisions kept in the in-memory
            decision log. 0 disables the log.
        fallback_message: Message for a denial that has no reason.
        freeze_registry: Freeze the registry when the Authorizer is built.

    Example:
        >>> config = AuthorizerConfig.from_mapping({
        ...     "decision_log_size": 200,
        ...     "log_decisions": False,
        ... })
    """
    treat_inactive_as_anonymous: bool = True
    log_decisions: bool = True
    decision_log_size: int = 1000
    fallback_message: str = DEFAULT_DENIAL_MESSAGE
    freeze_registry: bool = True

    def __post_init__(self) -> None:
        """Validate field types and ranges."""
        for name in ("treat_inactive_as_anonymous", "log_decisions", "freeze_registry"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(config_key=name, expected="bool", received=value)

        size = self.decision_log_size
        if not isinstance(size, int) or isinstance(size, bool) or size < 0:
            raise ConfigurationError(
                config_key="decision_log_size",
                expected="non-negative integer",
                received=size,
            )

        if not isinstance(self.fallback_message, str) or not self.fallback_message.strip():
            raise ConfigurationError(
                config_key="fallback_message",
                expected="non-empty string",
                received=self.fallback_message,
            )

    @classmethod
    def default(cls) -> AuthorizerConfig:
        """Create default configuration."""
        return cls()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AuthorizerConfig:
        """
        Create configuration from a mapping, e.g. a parsed settings file.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                config_key=unknown[0],
                expected=f"one of: {', '.join(sorted(known))}",
                received=unknown[0],
            )
        return cls(**dict(data))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
