"""
Event bus system for RODA.

Provides pub/sub messaging between the spin engine, the window and
the feedback sinks. Everything runs on the window thread, so handlers
are called synchronously as events are emitted.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    BUTTON_PRESS = auto()

    # Entrant list events
    ENTRANTS_CHANGED = auto()

    # Wheel events
    SPIN_STARTED = auto()
    WHEEL_TICK = auto()      # Pointer crossed into a new segment
    SPIN_COMPLETE = auto()   # Winner resolved


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: Wall-clock time the event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


# Type alias for handlers
Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Handlers run in subscription order as soon as an event is emitted.
    A failing handler is logged and never propagates to the emitter.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event to its subscribers immediately."""
        self._add_to_history(event)

        # Copy so handlers may unsubscribe while being called
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def _add_to_history(self, event: Event) -> None:
        """Add event to history, maintaining limit."""
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()


# Convenience functions for creating common events
def wheel_tick_event(segment_index: int, rotation: float) -> Event:
    """Create a segment-crossing event."""
    return Event(
        EventType.WHEEL_TICK,
        data={"segment": segment_index, "rotation": rotation},
        source="spin_engine",
    )


def spin_complete_event(winner: Any, winner_index: int, rotation: float) -> Event:
    """Create a spin-completed event carrying the winning entrant."""
    return Event(
        EventType.SPIN_COMPLETE,
        data={"winner": winner, "index": winner_index, "rotation": rotation},
        source="spin_engine",
    )
