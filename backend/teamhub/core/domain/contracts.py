"""Core domain contracts."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, TypeVar

from teamhub.core.domain.base import AggregateRoot, DomainEvent
from teamhub.core.domain.unique_id import UniqueId
from teamhub.core.result import Result

T = TypeVar("T", bound=AggregateRoot)
E = TypeVar("E")


class IRepository(ABC, Generic[T, E]):
    """Aggregate repository. Failures are reported as ``Err`` values."""

    @abstractmethod
    async def find_by_id(self, id: UniqueId) -> T | None:
        """Get aggregate by ID."""

    @abstractmethod
    async def save(self, aggregate: T) -> Result[None, E]:
        """Persist aggregate, enforcing its version."""

    @abstractmethod
    async def delete(self, id: UniqueId) -> Result[None, E]:
        """Delete aggregate."""

    @abstractmethod
    async def exists(self, id: UniqueId) -> bool:
        """Check if aggregate exists."""


class IEventPublisher(ABC):
    """Event publisher interface."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Publish single domain event."""

    async def publish_all(self, events: Sequence[DomainEvent]) -> None:
        """Publish events one by one, preserving order."""
        for event in events:
            await self.publish(event)


__all__ = ["IEventPublisher", "IRepository"]
