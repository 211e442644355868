"""
In-memory event bus.

``IEventPublisher`` for a single process. Handlers run one after another in
subscription order, so every consumer sees events in publish order.

    bus = InMemoryEventBus()
    await bus.start()
    bus.subscribe(TeamMemberJoined, on_member_joined)
    await bus.publish_all(team.get_domain_events())

A failing handler is logged and skipped. With ``fail_fast`` the failure is
raised as ``EventProcessingError`` instead and later handlers do not run.
"""

import inspect
from collections import Counter, defaultdict
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

from teamhub.core.domain.base import DomainEvent, utc_now
from teamhub.core.domain.contracts import IEventPublisher
from teamhub.core.errors import EventProcessingError, ValidationError
from teamhub.core.logging import get_logger

logger = get_logger(__name__)

EventHandlerType = Callable[[DomainEvent], None | Awaitable[None]]

ALL_EVENTS = "*"


def _handler_name(handler: Any) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


def _subscription_key(event_type: type[DomainEvent] | str) -> str:
    if isinstance(event_type, type) and issubclass(event_type, DomainEvent):
        return event_type.__name__
    if isinstance(event_type, str) and event_type.strip():
        return event_type
    raise ValidationError(
        f"Cannot subscribe to {event_type!r}: expected an event class or a non-empty name",
        field="event_type",
    )


def _delivery_keys(event: DomainEvent) -> list[str]:
    """Subscription keys an event is delivered to, most specific first."""
    keys = [event.event_type]
    for cls in type(event).__mro__:
        if issubclass(cls, DomainEvent) and cls.__name__ not in keys:
            keys.append(cls.__name__)
    keys.append(ALL_EVENTS)
    return keys


class InMemoryEventBus(IEventPublisher):
    """
    Ordered, sequential in-process delivery.

    Subscribe by event class, by ``event_type`` name or to ``ALL_EVENTS``.
    Subscribing to a base class also receives its subclasses. A handler
    registered under several matching keys still runs once per event.
    """

    def __init__(self, fail_fast: bool | None = None):
        if fail_fast is None:
            from teamhub.core.config import get_settings

            fail_fast = get_settings().event_bus_fail_fast

        self.fail_fast = fail_fast
        self._subscriptions: defaultdict[str, list[EventHandlerType]] = defaultdict(list)
        self._started_at: datetime | None = None
        self._published: Counter[str] = Counter()
        self._failures = 0

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    async def start(self) -> None:
        if self.is_running:
            return
        self._started_at = utc_now()
        self._published.clear()
        logger.info("event_bus_started", subscriptions=len(self._subscriptions))

    async def stop(self) -> None:
        """Stop delivering. Subscriptions survive a restart."""
        if not self.is_running:
            return
        uptime = (utc_now() - self._started_at).total_seconds()
        self._started_at = None
        logger.info(
            "event_bus_stopped",
            uptime_seconds=uptime,
            events_published=sum(self._published.values()),
        )

    async def publish(self, event: DomainEvent) -> None:
        """
        Deliver ``event`` to each matching handler in subscription order.

        Raises:
            RuntimeError: The bus has not been started.
            ValidationError: ``event`` is not a DomainEvent.
            EventProcessingError: A handler failed and ``fail_fast`` is set.
        """
        if not self.is_running:
            raise RuntimeError("Event bus is not running; call start() first")
        if not isinstance(event, DomainEvent):
            raise ValidationError(f"Cannot publish {type(event).__name__}: not a DomainEvent")

        self._published[event.event_type] += 1
        handlers = self._handlers_for(event)
        logger.debug(
            "event_published",
            event_type=event.event_type,
            event_id=event.event_id,
            aggregate_id=event.aggregate_id,
            handlers=len(handlers),
        )
        for handler in handlers:
            await self._deliver(handler, event)

    async def _deliver(self, handler: EventHandlerType, event: DomainEvent) -> None:
        try:
            outcome = handler(event)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            self._failures += 1
            name = _handler_name(handler)
            logger.exception(
                "event_handler_failed",
                event_type=event.event_type,
                event_id=event.event_id,
                handler=name,
            )
            if self.fail_fast:
                raise EventProcessingError(
                    f"{name} failed handling {event.event_type}: {e}",
                    details={"event_id": event.event_id, "event_type": event.event_type},
                ) from e

    def _handlers_for(self, event: DomainEvent) -> list[EventHandlerType]:
        ordered: list[EventHandlerType] = []
        for key in _delivery_keys(event):
            ordered.extend(h for h in self._subscriptions.get(key, ()) if h not in ordered)
        return ordered

    def subscribe(self, event_type: type[DomainEvent] | str, handler: EventHandlerType) -> None:
        """
        Register ``handler`` for an event class or an ``event_type`` name.

        Raises:
            ValidationError: ``handler`` is not callable or ``event_type`` is
                neither an event class nor a non-empty name.
        """
        key = _subscription_key(event_type)
        if not callable(handler):
            raise ValidationError(f"Handler must be callable, got {type(handler).__name__}")
        self._subscriptions[key].append(handler)
        logger.debug("event_handler_subscribed", event_type=key, handler=_handler_name(handler))

    def unsubscribe(self, event_type: type[DomainEvent] | str, handler: EventHandlerType) -> bool:
        """Returns False when ``handler`` was not subscribed under ``event_type``."""
        handlers = self._subscriptions.get(_subscription_key(event_type), [])
        try:
            handlers.remove(handler)
        except ValueError:
            return False
        return True

    def clear_handlers(self) -> None:
        self._subscriptions.clear()

    def get_statistics(self) -> dict[str, Any]:
        return {
            "running": self.is_running,
            "start_time": self._started_at.isoformat() if self._started_at else None,
            "events_published": sum(self._published.values()),
            "events_by_type": dict(self._published),
            "handler_errors": self._failures,
            "subscriptions": {k: len(v) for k, v in self._subscriptions.items() if v},
            "fail_fast": self.fail_fast,
        }


__all__ = ["ALL_EVENTS", "EventHandlerType", "InMemoryEventBus"]
