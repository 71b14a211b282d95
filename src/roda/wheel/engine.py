"""Spin engine - eased wheel rotation, segment ticks and winner resolution.

Flow:
1. ``spin()`` captures the start angle, draws a random delta and registers
   a frame callback with the scheduler (IDLE -> SPINNING)
2. Each frame, rotation follows the easing curve over elapsed wall-clock
   time; a WHEEL_TICK event fires whenever the pointer enters a new segment
3. At progress 1 the winner is read off the final angle, the engine goes
   back to IDLE, SPIN_COMPLETE is emitted and the completion future and
   callback fire exactly once

Rotation accumulates across spins: it is never reset, only folded modulo
360 at the start of the next spin.
"""

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Sequence, Tuple, TypeVar
import logging
import random

from roda.animation.easing import EasingFunc, get_easing
from roda.animation.scheduler import Clock, FrameScheduler, monotonic_ms
from roda.config.settings import SpinSettings
from roda.core.events import (
    Event,
    EventBus,
    EventType,
    spin_complete_event,
    wheel_tick_event,
)
from roda.core.state import SpinState, StateMachine
from roda.wheel.layout import FULL_TURN_DEGREES, arc_width_degrees, segment_under_pointer

logger = logging.getLogger(__name__)

T = TypeVar("T")

SPIN_FRAME_NAME = "wheel_spin"


class RandomSource(Protocol):
    """Anything with ``uniform(a, b)``, e.g. ``random.Random``."""

    def uniform(self, a: float, b: float) -> float: ...


@dataclass
class SpinSession:
    """State of the one in-flight spin."""

    entrants: Tuple
    start_degrees: float
    total_delta_degrees: float
    start_time_ms: float
    duration_ms: float
    arc_width_degrees: float
    last_crossed_index: int
    completion: Future = field(default_factory=Future, repr=False)
    on_finish: Optional[Callable] = field(default=None, repr=False)

    @property
    def final_degrees(self) -> float:
        return self.start_degrees + self.total_delta_degrees

    def progress_at(self, now_ms: float) -> float:
        """Elapsed fraction of the spin, clamped to [0, 1]."""
        elapsed = now_ms - self.start_time_ms
        return max(0.0, min(1.0, elapsed / self.duration_ms))


class SpinEngine:
    """Owns wheel rotation and the active spin animation.

    Collaborators are passed in explicitly: the scheduler that ticks the
    animation, the bus that receives tick/win events, the random source for
    the spin delta and the clock used to timestamp the start.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        event_bus: Optional[EventBus] = None,
        settings: Optional[SpinSettings] = None,
        rng: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
        initial_rotation: float = 0.0,
    ) -> None:
        self._scheduler = scheduler
        self._event_bus = event_bus or EventBus()
        self._settings = settings or SpinSettings()
        self._rng: RandomSource = rng or random.Random()
        self._clock: Clock = clock or monotonic_ms
        self._easing: EasingFunc = get_easing(self._settings.easing)

        self._state = StateMachine()
        self._rotation = initial_rotation
        self._session: Optional[SpinSession] = None

    # ===== STATE =====

    @property
    def rotation(self) -> float:
        """Current visual rotation in degrees (accumulated, not folded)."""
        return self._rotation

    @property
    def state(self) -> SpinState:
        return self._state.state

    @property
    def session(self) -> Optional[SpinSession]:
        """The in-flight session, or None when idle."""
        return self._session

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def is_spinning(self) -> bool:
        return self._state.state == SpinState.SPINNING

    def segment_at_rest(self, count: int) -> int:
        """Segment currently under the pointer for a wheel of ``count`` entrants."""
        return segment_under_pointer(self._rotation, count, self._settings.pointer_degrees)

    # ===== SPIN =====

    def spin(
        self,
        entrants: Sequence[T],
        on_finish: Optional[Callable[[T], None]] = None,
    ) -> Optional["Future[T]"]:
        """Start a spin over an ordered snapshot of entrants.

        Spinning while a spin is in flight, or with no entrants, is a silent
        no-op and returns None. Otherwise returns a future resolved with the
        winning entrant when the animation ends; ``on_finish`` is called
        with the same entrant.
        """
        if self.is_spinning() or len(entrants) == 0:
            logger.debug(
                f"Spin ignored (spinning={self.is_spinning()}, entrants={len(entrants)})"
            )
            return None

        # Flag first, so nothing below can start a second session
        self._state.transition(SpinState.SPINNING)

        snapshot = tuple(entrants)
        start_degrees = self._rotation % FULL_TURN_DEGREES
        extra_turns = self._rng.uniform(self._settings.min_turns, self._settings.max_turns)
        offset = self._rng.uniform(0.0, FULL_TURN_DEGREES)
        arc = arc_width_degrees(len(snapshot))

        session = SpinSession(
            entrants=snapshot,
            start_degrees=start_degrees,
            total_delta_degrees=extra_turns * FULL_TURN_DEGREES + offset,
            start_time_ms=self._clock(),
            duration_ms=self._settings.duration_ms,
            arc_width_degrees=arc,
            last_crossed_index=segment_under_pointer(
                start_degrees, len(snapshot), self._settings.pointer_degrees
            ),
            on_finish=on_finish,
        )
        session.completion.set_running_or_notify_cancel()

        self._session = session
        self._rotation = start_degrees
        self._scheduler.add(SPIN_FRAME_NAME, self.advance)

        self._event_bus.emit(Event(
            EventType.SPIN_STARTED,
            data={
                "entrants": len(snapshot),
                "start_degrees": start_degrees,
                "total_delta_degrees": session.total_delta_degrees,
            },
            source="spin_engine",
        ))
        logger.info(
            f"Spin started: {len(snapshot)} entrants, "
            f"{session.total_delta_degrees:.1f} deg over {session.duration_ms:.0f} ms"
        )
        return session.completion

    def advance(self, now_ms: float) -> bool:
        """Advance the active spin to ``now_ms``.

        Scheduler frame callback. Returns True while the spin should keep
        receiving frames.
        """
        session = self._session
        if session is None:
            return False

        progress = session.progress_at(now_ms)
        eased = self._easing(progress)
        self._rotation = session.start_degrees + session.total_delta_degrees * eased

        current = segment_under_pointer(
            self._rotation, len(session.entrants), self._settings.pointer_degrees
        )
        if current != session.last_crossed_index:
            session.last_crossed_index = current
            self._event_bus.emit(wheel_tick_event(current, self._rotation))

        if progress < 1.0:
            return True

        self._complete(session)
        return False

    def _complete(self, session: SpinSession) -> None:
        """Resolve the winner and return to IDLE."""
        winner_index = segment_under_pointer(
            self._rotation, len(session.entrants), self._settings.pointer_degrees
        )
        winner = session.entrants[winner_index]

        self._session = None
        self._state.transition(SpinState.IDLE)

        logger.info(f"Spin complete: index {winner_index} at {self._rotation % FULL_TURN_DEGREES:.1f} deg")
        self._event_bus.emit(spin_complete_event(winner, winner_index, self._rotation))

        session.completion.set_result(winner)
        if session.on_finish:
            try:
                session.on_finish(winner)
            except Exception as e:
                logger.error(f"Error in spin completion callback: {e}")
