"""Wheel geometry.

Segment angle 0 sits at the 3 o'clock position and angles grow clockwise
on screen (y axis pointing down), which is the convention the renderer
draws in. The fixed pointer is at the top of the screen, i.e. 270 degrees
in the unrotated wheel frame.
"""

from dataclasses import dataclass
from typing import List
import math

FULL_TURN_DEGREES = 360.0
POINTER_DEGREES = 270.0


@dataclass(frozen=True)
class Segment:
    """One angular slice of the wheel, one per entrant."""

    index: int
    start_angle: float    # radians, in [0, 2*pi)
    angular_width: float  # radians

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.angular_width

    @property
    def mid_angle(self) -> float:
        """Bisecting angle, where the label is drawn."""
        return self.start_angle + self.angular_width / 2


def compute_layout(count: int) -> List[Segment]:
    """Lay out ``count`` equal segments consecutively from angle 0.

    Zero (or negative) counts give an empty wheel; the caller draws a
    placeholder ring instead.
    """
    if count <= 0:
        return []

    width = 2 * math.pi / count
    return [Segment(index=i, start_angle=i * width, angular_width=width) for i in range(count)]


def arc_width_degrees(count: int) -> float:
    """Angular width of one segment in degrees (0.0 for an empty wheel)."""
    if count <= 0:
        return 0.0
    return FULL_TURN_DEGREES / count


def segment_under_pointer(
    rotation_degrees: float,
    count: int,
    pointer_degrees: float = POINTER_DEGREES,
) -> int:
    """Index of the segment under the fixed pointer for a given rotation.

    Rotating the wheel clockwise by ``r`` degrees brings the wheel-frame
    angle ``pointer - r`` under the pointer. Python's ``%`` is floored, so
    negative rotations and rotations beyond a full turn fold into
    [0, 360) without special cases. The trailing ``% count`` guards the
    float edge where the folded angle rounds up to exactly 360.

    Used both while animating (tick detection) and at rest (winner), so
    the two can never disagree.

    Raises:
        ValueError: If ``count`` is less than 1
    """
    if count < 1:
        raise ValueError(f"Cannot resolve a segment on a wheel with {count} segments")

    arc = FULL_TURN_DEGREES / count
    wheel_angle = (pointer_degrees - rotation_degrees % FULL_TURN_DEGREES) % FULL_TURN_DEGREES
    return int(math.floor(wheel_angle / arc)) % count
