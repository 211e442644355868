"""Domain primitives.

Architecture:
- ValueObject: immutable objects compared by their attributes
- AggregateRoot: consistency boundary owning an ordered domain event log
- DomainEvent: immutable pydantic record of something that happened
"""

from abc import ABC
from dataclasses import fields, is_dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any, ClassVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from teamhub.core.domain.unique_id import UniqueId


def utc_now() -> datetime:
    return datetime.now(UTC)


# --- value objects ---


class ValueObject(ABC):
    """
    Marker base for frozen dataclass value objects.

    Equality and hashing come from the dataclass. ``to_dict`` flattens the
    object into JSON-friendly values for event payloads and snapshots.
    """

    def to_dict(self) -> dict[str, Any]:
        if not is_dataclass(self):
            raise TypeError(f"{type(self).__name__} is not a dataclass")
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


def _plain(value: Any) -> Any:
    if isinstance(value, ValueObject):
        return value.to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple, frozenset, set)):
        return [_plain(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UniqueId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


# --- events ---


class DomainEvent(BaseModel):
    """
    Base domain event.

    Events are frozen pydantic models. Subclasses pin ``event_type`` to a
    ``Literal`` so a collection of events can be parsed back through a
    discriminated union.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    ENVELOPE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"event_id", "occurred_at", "event_type", "aggregate_id"}
    )

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=utc_now)
    event_type: str
    aggregate_id: str

    @property
    def data(self) -> dict[str, Any]:
        """Variant-specific payload."""
        return self.model_dump(mode="json", exclude=set(self.ENVELOPE_FIELDS))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def __str__(self) -> str:
        return f"{self.event_type}(aggregate_id={self.aggregate_id})"


# --- aggregates ---


class AggregateRoot(ABC):
    """
    Consistency boundary that records the events of its own changes.

    Mutators append to the event log in emission order. The log is drained by
    ``clear_events`` once the events have been published. ``version`` belongs
    to the repository, which bumps it on every successful save.
    """

    def __init__(
        self,
        entity_id: UniqueId | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 0,
    ):
        self.id = entity_id or UniqueId()
        self.created_at = created_at or utc_now()
        self.updated_at = updated_at or self.created_at
        self._pending: list[DomainEvent] = []
        self._version = version

    def _record(self, event: DomainEvent) -> None:
        self._pending.append(event)

    def mark_modified(self, at: datetime | None = None) -> None:
        self.updated_at = at or utc_now()

    # Event log

    def get_domain_events(self) -> list[DomainEvent]:
        """Pending events, oldest first. The log itself is left untouched."""
        return self._pending.copy()

    def clear_events(self) -> list[DomainEvent]:
        """Drain the log and hand back what it held."""
        drained, self._pending = self._pending, []
        return drained

    def has_events(self) -> bool:
        return len(self._pending) > 0

    def event_count(self) -> int:
        return len(self._pending)

    # Concurrency

    @property
    def version(self) -> int:
        return self._version

    def increment_version(self) -> None:
        self._version += 1

    # Identity

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.id == self.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"{name}(id={self.id}, version={self._version}, pending={len(self._pending)})"


__all__ = [
    "AggregateRoot",
    "DomainEvent",
    "ValueObject",
    "utc_now",
]
