"""Feedback sink: turns spin events into sounds.

The sink only listens to the event bus, so the spin engine never knows
whether (or how) feedback is produced, and a failing player can never
interrupt a spin.
"""

from typing import Callable, List, Optional, Protocol
import logging

from roda.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)


class FeedbackPlayer(Protocol):
    """What the sink needs from a sound backend (e.g. ``AudioEngine``)."""

    def play_wheel_tick(self) -> None: ...

    def play_win(self) -> None: ...


class FeedbackSink:
    """Plays a tick per segment crossing and a jingle per winner."""

    def __init__(self, event_bus: EventBus, player: FeedbackPlayer) -> None:
        self._event_bus = event_bus
        self._player = player
        self._unsubscribers: List[Callable[[], None]] = []
        self.ticks_played = 0
        self.wins_played = 0

    @property
    def attached(self) -> bool:
        return bool(self._unsubscribers)

    def attach(self) -> "FeedbackSink":
        """Subscribe to wheel events. Attaching twice is a no-op."""
        if self.attached:
            return self
        self._unsubscribers = [
            self._event_bus.subscribe(EventType.WHEEL_TICK, self._on_tick),
            self._event_bus.subscribe(EventType.SPIN_COMPLETE, self._on_complete),
        ]
        logger.debug("Feedback sink attached")
        return self

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        logger.debug("Feedback sink detached")

    def _on_tick(self, event: Event) -> None:
        self._player.play_wheel_tick()
        self.ticks_played += 1

    def _on_complete(self, event: Event) -> None:
        winner = event.data.get("winner")
        logger.debug(f"Playing win sound for {getattr(winner, 'name', winner)}")
        self._player.play_win()
        self.wins_played += 1


def attach_feedback(event_bus: EventBus, player: Optional[FeedbackPlayer]) -> Optional[FeedbackSink]:
    """Attach a sink when a player is available; None runs the wheel silent."""
    if player is None:
        logger.warning("No audio player available, running without sound")
        return None
    return FeedbackSink(event_bus, player).attach()
