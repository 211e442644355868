"""Event delivery."""

from teamhub.core.events.bus import ALL_EVENTS, EventHandlerType, InMemoryEventBus

__all__ = ["ALL_EVENTS", "EventHandlerType", "InMemoryEventBus"]
