"""Domain layer core classes."""

from teamhub.core.domain.base import AggregateRoot, DomainEvent, ValueObject, utc_now
from teamhub.core.domain.contracts import IEventPublisher, IRepository
from teamhub.core.domain.unique_id import UniqueId

__all__ = [
    "AggregateRoot",
    "DomainEvent",
    "IEventPublisher",
    "IRepository",
    "UniqueId",
    "ValueObject",
    "utc_now",
]
