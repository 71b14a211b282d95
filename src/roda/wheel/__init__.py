"""Wheel geometry and spin engine."""

from roda.wheel.layout import (
    Segment,
    compute_layout,
    arc_width_degrees,
    segment_under_pointer,
    POINTER_DEGREES,
)
from roda.wheel.engine import SpinEngine, SpinSession, RandomSource

__all__ = [
    "Segment",
    "compute_layout",
    "arc_width_degrees",
    "segment_under_pointer",
    "POINTER_DEGREES",
    "SpinEngine",
    "SpinSession",
    "RandomSource",
]
