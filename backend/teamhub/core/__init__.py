"""Core building blocks shared by every module.

Architecture Components:
- domain: UniqueId, ValueObject, AggregateRoot, DomainEvent and contracts
- events: in-memory event bus implementing the publisher contract
- Cross-cutting: configuration, errors, logging, result values
"""

from .errors import (
    ConfigurationError,
    DomainError,
    EventBusError,
    EventProcessingError,
    InfrastructureError,
    TeamHubError,
    UnwrapError,
    ValidationError,
)
from .result import Err, Ok, Result, err, ok

__all__ = [
    "ConfigurationError",
    "DomainError",
    "Err",
    "EventBusError",
    "EventProcessingError",
    "InfrastructureError",
    "Ok",
    "Result",
    "TeamHubError",
    "UnwrapError",
    "ValidationError",
    "err",
    "ok",
]
