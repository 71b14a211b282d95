"""Wheel renderer for RODA.

Draws the static, unrotated wheel into a numpy buffer. Rotation is never
baked in: the host applies the engine's rotation as a transform, so the
wheel only needs redrawing when the entrant list changes or the surface is
resized.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import logging

import numpy as np

from roda.config.settings import WheelSettings
from roda.graphics.primitives import (
    Buffer,
    Color,
    angle_mask,
    clear,
    draw_radial_line,
    draw_ring,
    draw_text_rotated,
    hex_to_rgb,
    polar_grid,
)
from roda.wheel.layout import compute_layout

logger = logging.getLogger(__name__)

# Geometry is specified against a 1000px reference wheel and scaled
REFERENCE_SIZE = 1000.0


@dataclass(frozen=True)
class SegmentColors:
    """Fill (gradient rim color) and accent (outline) for one segment."""

    base: Color
    accent: Color


def _pair(base: str, accent: str) -> SegmentColors:
    return SegmentColors(hex_to_rgb(base), hex_to_rgb(accent))


DEFAULT_PALETTE: Tuple[SegmentColors, ...] = (
    _pair("#0c4a6e", "#0ea5e9"),  # Sky
    _pair("#701a75", "#d946ef"),  # Fuchsia
    _pair("#312e81", "#6366f1"),  # Indigo
    _pair("#064e3b", "#10b981"),  # Emerald
    _pair("#7c2d12", "#f97316"),  # Orange
)


@dataclass
class WheelStyle:
    """Colors shared by every segment."""

    background: Color = (0, 0, 0)
    hub: Color = field(default_factory=lambda: hex_to_rgb("#0f172a"))
    label: Color = (255, 255, 255)
    label_shadow: Optional[Color] = (0, 0, 0)
    border: Color = field(default_factory=lambda: hex_to_rgb("#22d3ee"))
    empty_ring: Color = field(default_factory=lambda: hex_to_rgb("#1e293b"))


class WheelRenderer:
    """Paints a segmented, labeled wheel sized to the drawing surface.

    Rendering is a pure function of (buffer shape, entrant names): the
    buffer is cleared first and nothing random is used, so two renders with
    the same inputs are pixel-identical.
    """

    def __init__(
        self,
        settings: Optional[WheelSettings] = None,
        palette: Sequence[SegmentColors] = DEFAULT_PALETTE,
        style: Optional[WheelStyle] = None,
    ) -> None:
        if not palette:
            raise ValueError("Palette must contain at least one color pair")
        self.settings = settings or WheelSettings()
        self.palette = tuple(palette)
        self.style = style or WheelStyle()

    def colors_for(self, index: int) -> SegmentColors:
        return self.palette[index % len(self.palette)]

    def label_for(self, name: str) -> str:
        """Upper-case and truncate a name so it fits inside its segment."""
        return name[: self.settings.label_max_chars].upper()

    def render(self, buffer: Buffer, entrants: Sequence) -> None:
        """Draw the wheel for ``entrants`` onto ``buffer``.

        Entrants may be objects with a ``name`` attribute or plain strings.
        With no entrants only an empty ring is drawn.
        """
        h, w = buffer.shape[:2]
        size = min(h, w)
        cx, cy = w / 2, h / 2
        k = size / REFERENCE_SIZE

        clear(buffer, self.style.background)

        if len(entrants) == 0:
            draw_ring(
                buffer, cx, cy,
                size / 2 - 20 * k,
                max(1.0, self.settings.empty_ring_width * k),
                self.style.empty_ring,
            )
            return

        radius = size / 2 - 20 * k
        self._fill_segments(buffer, len(entrants), cx, cy, radius, size / 2, 100 * k)
        self._outline_segments(buffer, len(entrants), cx, cy, radius, k)
        self._draw_labels(buffer, entrants, cx, cy, radius - 60 * k, k)

        draw_ring(
            buffer, cx, cy,
            size / 2 - 10 * k,
            max(1.0, self.settings.border_width * k),
            self.style.border,
        )
        logger.debug(f"Wheel rendered: {len(entrants)} segments at {w}x{h}")

    def _fill_segments(
        self,
        buffer: Buffer,
        count: int,
        cx: float,
        cy: float,
        radius: float,
        gradient_outer: float,
        gradient_inner: float,
    ) -> None:
        """Fill every segment with a radial gradient in one pass.

        Each pixel inside the wheel is assigned to exactly one segment by
        its angle, so segments tile the disc with no gaps or overlaps.
        """
        h, w = buffer.shape[:2]
        dist, angle = polar_grid(h, w, cx, cy)
        inside = dist <= radius

        arc = 2 * np.pi / count
        index = np.minimum((angle // arc).astype(np.int64), count - 1)

        # Per-segment rim colors, looked up by segment index
        bases = np.array(
            [self.colors_for(i).base for i in range(count)], dtype=np.float64
        )
        hub = np.array(self.style.hub, dtype=np.float64)

        t = np.clip((dist - gradient_inner) / (gradient_outer - gradient_inner), 0.0, 1.0)
        colors = hub + (bases[index] - hub) * t[..., None]
        buffer[inside] = np.rint(colors[inside]).astype(np.uint8)

    def _outline_segments(
        self,
        buffer: Buffer,
        count: int,
        cx: float,
        cy: float,
        radius: float,
        k: float,
    ) -> None:
        """Stroke each segment's edges and rim arc in its accent color."""
        h, w = buffer.shape[:2]
        width = max(1.0, self.settings.outline_width * k)
        dist, angle = polar_grid(h, w, cx, cy)
        rim = np.abs(dist - radius) <= width / 2

        for segment in compute_layout(count):
            accent = self.colors_for(segment.index).accent
            draw_radial_line(buffer, cx, cy, segment.start_angle, 0, radius, accent, width)
            draw_radial_line(buffer, cx, cy, segment.end_angle, 0, radius, accent, width)
            buffer[rim & angle_mask(angle, segment.start_angle, segment.end_angle)] = accent

    def _draw_labels(
        self,
        buffer: Buffer,
        entrants: Sequence,
        cx: float,
        cy: float,
        right: float,
        k: float,
    ) -> None:
        scale = max(1, int(round(self.settings.label_scale * k)))
        for segment, entrant in zip(compute_layout(len(entrants)), entrants):
            name = getattr(entrant, "name", entrant)
            draw_text_rotated(
                buffer,
                self.label_for(str(name)),
                cx, cy,
                segment.mid_angle,
                right,
                self.style.label,
                scale=scale,
                shadow=self.style.label_shadow,
            )


def new_surface(size: int) -> Buffer:
    """Allocate a square RGB drawing surface."""
    return np.zeros((size, size, 3), dtype=np.uint8)


def render_wheel(
    entrants: Sequence,
    size: Optional[int] = None,
    settings: Optional[WheelSettings] = None,
) -> Buffer:
    """Render a wheel into a fresh square buffer (``settings.size`` by default)."""
    settings = settings or WheelSettings()
    buffer = new_surface(size or settings.size)
    WheelRenderer(settings=settings).render(buffer, entrants)
    return buffer


__all__: List[str] = [
    "SegmentColors",
    "WheelStyle",
    "WheelRenderer",
    "DEFAULT_PALETTE",
    "new_surface",
    "render_wheel",
]
