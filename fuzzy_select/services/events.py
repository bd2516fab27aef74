"""EventBus: notify the host about what a select widget did.

Each widget owns its own bus; nothing is shared between instances.
The core emits domain events, the host subscribes to what it needs.

Usage:
    bus = EventBus()
    bus.subscribe(ItemSelectedEvent, self._on_item_selected)
    machine = SelectionMachine(config, candidates, events=bus)

    # Cleanup when the host goes away
    bus.unsubscribe(ItemSelectedEvent, self._on_item_selected)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, TypeVar
import inspect
import logging
import weakref

logger = logging.getLogger(__name__)

# Event type variable for generic typing
E = TypeVar("E", bound="Event")


@dataclass
class Event:
    """Base class for all select events."""

    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class FocusEvent(Event):
    """Emitted when the widget gains focus."""


@dataclass
class BlurEvent(Event):
    """Emitted when the widget loses focus."""


@dataclass
class QueryChangedEvent(Event):
    """Emitted when the typed query changes (None = typing cancelled)."""

    query: str | None = None


@dataclass
class ItemSelectedEvent(Event):
    """Emitted when confirm commits an item."""

    item: Any = None


@dataclass
class ItemRemovedEvent(Event):
    """Emitted when an item leaves a multi-select selection."""

    item: Any = None


@dataclass
class SelectionClearedEvent(Event):
    """Emitted when the selection is cleared."""


# Type alias for event handlers
EventHandler = Callable[[Event], None]


class EventBus:
    """Per-widget event bus.

    Supports weak references for automatic cleanup when subscribers are
    garbage collected.
    """

    def __init__(self) -> None:
        self._subscribers: dict[type[Event], list[EventHandler]] = {}
        self._weak_subscribers: dict[type[Event], list[weakref.ref]] = {}

    def subscribe(
        self,
        event_type: type[E],
        handler: Callable[[E], None],
        weak: bool = False,
    ) -> None:
        """Subscribe to an event type.

        Args:
            event_type: The event class to subscribe to
            handler: Callback function to invoke when event is emitted
            weak: Use weak reference (auto-cleanup when handler owner is GC'd)
        """
        if weak:
            ref = weakref.WeakMethod(handler) if inspect.ismethod(handler) else weakref.ref(handler)
            self._weak_subscribers.setdefault(event_type, []).append(ref)
        else:
            handlers = self._subscribers.setdefault(event_type, [])
            if handler not in handlers:
                handlers.append(handler)

    def unsubscribe(
        self,
        event_type: type[E],
        handler: Callable[[E], None],
    ) -> None:
        """Unsubscribe from an event type."""
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(handler)
            except ValueError:
                pass  # Handler not in list
        if event_type in self._weak_subscribers:
            self._weak_subscribers[event_type] = [
                ref for ref in self._weak_subscribers[event_type] if ref() != handler
            ]

    def emit(self, event: Event) -> None:
        """Emit an event to all subscribers.

        Logs errors but doesn't let one subscriber's failure affect others
        or the widget state.
        """
        event_type = type(event)

        for handler in list(self._subscribers.get(event_type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Event handler error for {event_type.__name__}: {e}")

        weak_handlers = self._weak_subscribers.get(event_type, [])
        live_refs = []
        for ref in weak_handlers:
            handler = ref()
            if handler is not None:
                live_refs.append(ref)
                try:
                    handler(event)
                except Exception as e:
                    logger.error(f"Event handler error for {event_type.__name__}: {e}")
        if event_type in self._weak_subscribers:
            self._weak_subscribers[event_type] = live_refs

    def subscriber_count(self, event_type: type[Event]) -> int:
        """Get number of subscribers for an event type (for debugging)."""
        strong = len(self._subscribers.get(event_type, []))
        weak = len([r for r in self._weak_subscribers.get(event_type, []) if r() is not None])
        return strong + weak

    def clear(self) -> None:
        """Clear all subscribers."""
        self._subscribers.clear()
        self._weak_subscribers.clear()
