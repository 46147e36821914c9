"""
Event bus for GOCO.

The session controller publishes its public event stream here;
presentation code subscribes to it. Delivery is synchronous on the main
loop, so handlers never run concurrently with controller transitions.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Lifecycle events
    STATE_CHANGED = auto()
    LIBRARY_LOADED = auto()
    LIBRARY_UNLOADED = auto()
    SELECTION_CHANGED = auto()
    PROMPT_FRAME = auto()

    # Engine events
    GAME_LAUNCHED = auto()
    LAUNCH_FAILED = auto()
    GAME_KILLED = auto()

    # Volume events
    EJECT_FAILED = auto()

    # Power events
    POWER_OFF = auto()
    POWER_OFF_FAILED = auto()

    # System events
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None]


class EventBus:
    """
    Publish/subscribe hub for session events.

    Handlers are called in subscription order, type-specific ones first.
    A failing handler is logged and skipped; the emitter never sees it.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to one event type.

        Returns:
            Unsubscribe function
        """
        return self._register(self._handlers[event_type], handler)

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to every event. Returns an unsubscribe function."""
        return self._register(self._global_handlers, handler)

    @staticmethod
    def _register(handlers: list[Handler], handler: Handler) -> Callable[[], None]:
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Record the event and deliver it to every matching handler."""
        self._history.append(event)
        for handler in [*self._handlers.get(event.type, ()), *self._global_handlers]:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in handler for {event.type}: {e}")

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events, newest last."""
        history = [e for e in self._history if event_type is None or e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        self._history.clear()
