"""Animation module for RODA."""

from roda.animation.easing import Easing, get_easing
from roda.animation.scheduler import FrameScheduler, FrameCallback, Clock, monotonic_ms

__all__ = [
    # Easing
    "Easing",
    "get_easing",
    # Scheduler
    "FrameScheduler",
    "FrameCallback",
    "Clock",
    "monotonic_ms",
]
