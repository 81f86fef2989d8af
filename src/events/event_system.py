"""
Publish/subscribe notifications for store-backed services.
"""

from enum import Enum, auto
from typing import Callable, Any, Dict, List, Optional
from dataclasses import dataclass, field
import threading


class EventType(Enum):
    """Event types published by the services."""
    # Store events
    ITEM_ADDED = auto()
    ITEM_REMOVED = auto()
    STOCK_UPDATED = auto()

    # Snapshot events
    SNAPSHOT_SAVED = auto()
    SNAPSHOT_LOADED = auto()

    # Finance and reporting
    TRANSACTION_PROCESSED = auto()
    REPORT_WRITTEN = auto()

    # Error events
    ERROR_OCCURRED = auto()


@dataclass
class Event:
    """An event with type, data, and source."""
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    source: str = ""


Handler = Callable[[Event], None]


class EventBus:
    """
    Thread-safe event bus.

    Handlers run synchronously in the publishing thread, in subscription
    order. A failing handler is reported and does not stop the others.
    """

    def __init__(self):
        self._subscribers: Dict[EventType, List[Handler]] = {}
        self._lock = threading.RLock()

    def subscribe(self, event_type: EventType, handler: Handler) -> None:
        """Register ``handler`` for ``event_type``; duplicates are ignored."""
        with self._lock:
            handlers = self._subscribers.setdefault(event_type, [])
            if handler not in handlers:
                handlers.append(handler)

    def subscribe_all(self, handler: Handler) -> None:
        """Register ``handler`` for every event type."""
        for event_type in EventType:
            self.subscribe(event_type, handler)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        with self._lock:
            handlers = self._subscribers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

    def publish(self, event: Event) -> None:
        """
        Publish an event to all subscribers.

        Parameters
        ----------
        event : Event
            The event to publish.
        """
        with self._lock:
            handlers = list(self._subscribers.get(event.type, []))

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                print(f"[EventBus] Error in handler for {event.type}: {e}")

    def clear(self, event_type: Optional[EventType] = None) -> None:
        """Clear subscribers of one type, or all subscribers if None."""
        with self._lock:
            if event_type is None:
                self._subscribers.clear()
            elif event_type in self._subscribers:
                self._subscribers[event_type].clear()

