"""Exception hierarchy for programmer and infrastructure errors.

Expected domain failures are returned as ``TeamError`` values inside a
``Result``. The exceptions below are for conditions a caller cannot reasonably
recover from: malformed identifiers, misconfiguration, a broken event bus.
"""

import logging
import uuid
from enum import Enum
from typing import Any

_error_logger = logging.getLogger("teamhub.errors")


class ErrorSeverity(Enum):
    """How loudly a raised error is reported."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def log_level(self) -> int:
        return {
            ErrorSeverity.LOW: logging.INFO,
            ErrorSeverity.MEDIUM: logging.WARNING,
            ErrorSeverity.HIGH: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL,
        }[self]


class TeamHubError(Exception):
    """
    Base exception for all TeamHub errors.

    Every instance gets an ``error_id`` and is reported once, when created, at
    the level its class severity maps to.
    """

    default_code = "TEAMHUB_ERROR"
    severity = ErrorSeverity.MEDIUM
    retryable = False

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details: dict[str, Any] = dict(details or {})
        self.error_id = uuid.uuid4().hex

        _error_logger.log(
            self.severity.log_level,
            "%s raised: %s",
            type(self).__name__,
            message,
            extra={"error_id": self.error_id, "error_code": self.code},
        )

    def with_details(self, **details: Any) -> "TeamHubError":
        """Attach more details and return the error for chaining."""
        self.details.update(details)
        return self

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "error_id": self.error_id,
            "severity": self.severity.value,
        }
        if self.details:
            data["details"] = dict(self.details)
        if self.retryable:
            data["retryable"] = True
        return data

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class DomainError(TeamHubError):
    """A domain object was misused."""

    default_code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """A value could not be constructed from its input."""

    default_code = "VALIDATION_ERROR"
    severity = ErrorSeverity.LOW

    def __init__(self, message: str, field: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        if field:
            self.details["field"] = field


class UnwrapError(DomainError):
    """A Result was unwrapped on the wrong side."""

    default_code = "UNWRAP_ERROR"
    severity = ErrorSeverity.HIGH


class InfrastructureError(TeamHubError):
    default_code = "INFRASTRUCTURE_ERROR"
    severity = ErrorSeverity.HIGH
    retryable = True


class ConfigurationError(InfrastructureError):
    """A setting is missing or invalid; fatal at startup."""

    default_code = "CONFIGURATION_ERROR"
    severity = ErrorSeverity.CRITICAL
    retryable = False

    def __init__(self, message: str, config_key: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        if config_key:
            self.details["config_key"] = config_key


class EventBusError(InfrastructureError):
    default_code = "EVENT_BUS_ERROR"


class EventProcessingError(EventBusError):
    """An event handler failed while the bus runs in fail-fast mode."""

    default_code = "EVENT_PROCESSING_ERROR"


__all__ = [
    "ConfigurationError",
    "DomainError",
    "ErrorSeverity",
    "EventBusError",
    "EventProcessingError",
    "InfrastructureError",
    "TeamHubError",
    "UnwrapError",
    "ValidationError",
]
