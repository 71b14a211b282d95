"""Frame scheduler driving time-based animations.

The host calls ``tick(now_ms)`` once per display refresh. Registered frame
callbacks receive the timestamp and return True to stay scheduled or False
once they are done. Motion must be derived from the timestamp, never from
the number of ticks, since no fixed refresh rate is guaranteed.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
import logging
import time

logger = logging.getLogger(__name__)

# Returns True to keep running
FrameCallback = Callable[[float], bool]
Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


@dataclass
class ScheduledFrame:
    """A registered frame callback with metadata."""

    callback: FrameCallback
    frames: int = 0
    _marked_for_removal: bool = field(default=False, repr=False)


class FrameScheduler:
    """Single-threaded tick source for frame callbacks.

    Callbacks registered during a tick first run on the next tick, and a
    callback removed during a tick is not invoked again.
    """

    def __init__(self) -> None:
        self._frames: Dict[str, ScheduledFrame] = {}
        self._tick_count = 0
        self._last_tick_ms: Optional[float] = None

    def add(self, name: str, callback: FrameCallback) -> str:
        """Register a frame callback under a unique name.

        An existing callback with the same name is replaced.
        """
        if name in self._frames:
            self.remove(name)
        self._frames[name] = ScheduledFrame(callback=callback)
        logger.debug(f"Frame callback scheduled: {name}")
        return name

    def remove(self, name: str) -> bool:
        """Unregister a callback. Returns False if it was not scheduled."""
        frame = self._frames.pop(name, None)
        if frame is None:
            return False
        frame._marked_for_removal = True
        logger.debug(f"Frame callback removed: {name}")
        return True

    def has(self, name: str) -> bool:
        return name in self._frames

    @property
    def active_count(self) -> int:
        return len(self._frames)

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def last_tick_ms(self) -> Optional[float]:
        return self._last_tick_ms

    def tick(self, now_ms: float) -> int:
        """Run every scheduled callback once with the given timestamp.

        Returns:
            Number of callbacks that finished on this tick
        """
        self._tick_count += 1
        self._last_tick_ms = now_ms

        completed: List[tuple[str, ScheduledFrame]] = []
        for name, frame in list(self._frames.items()):
            if frame._marked_for_removal:
                continue
            frame.frames += 1
            if not frame.callback(now_ms):
                completed.append((name, frame))

        for name, frame in completed:
            # The callback may have re-registered the name for a new run
            if self._frames.get(name) is frame:
                del self._frames[name]
            logger.debug(f"Frame callback finished: {name} after {frame.frames} frames")

        return len(completed)

    def clear(self) -> int:
        """Drop all callbacks. Returns how many were scheduled."""
        count = len(self._frames)
        for frame in self._frames.values():
            frame._marked_for_removal = True
        self._frames.clear()
        return count
