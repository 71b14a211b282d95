"""Graphics: numpy drawing primitives and the wheel renderer."""

from roda.graphics.renderer import (
    DEFAULT_PALETTE,
    SegmentColors,
    WheelRenderer,
    WheelStyle,
    new_surface,
    render_wheel,
)

__all__ = [
    "DEFAULT_PALETTE",
    "SegmentColors",
    "WheelRenderer",
    "WheelStyle",
    "new_surface",
    "render_wheel",
]
