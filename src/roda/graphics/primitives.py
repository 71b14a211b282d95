"""Basic drawing primitives for RODA wheel buffers.

Buffers are numpy arrays of shape (height, width, 3), dtype uint8. Angles
are in radians, measured from the +x axis and growing clockwise on screen
(the y axis points down). Every primitive is deterministic: the same call
on the same buffer always produces the same pixels.
"""

from typing import Tuple, Optional
import unicodedata

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]

TWO_PI = 2 * np.pi


def hex_to_rgb(value: str) -> Color:
    """Convert '#rrggbb' to an RGB tuple."""
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #rrggbb color, got {value!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def polar_grid(
    height: int,
    width: int,
    cx: float,
    cy: float,
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Distance and angle of every pixel center from (cx, cy).

    Returns:
        (dist, angle) arrays of shape (height, width); angle in [0, 2*pi)
    """
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    dx = xs + 0.5 - cx
    dy = ys + 0.5 - cy
    dist = np.hypot(dx, dy)
    angle = np.mod(np.arctan2(dy, dx), TWO_PI)
    return dist, angle


def angle_mask(angle: NDArray[np.float64], start: float, end: float) -> NDArray[np.bool_]:
    """Pixels whose angle lies in [start, end), wrapping past 2*pi."""
    if end - start >= TWO_PI:
        return np.ones_like(angle, dtype=bool)
    rel = np.mod(angle - start, TWO_PI)
    return rel < (end - start)


def draw_ring(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    width: float,
    color: Color,
) -> None:
    """Stroke a full circle of the given line width centered on ``radius``."""
    h, w = buffer.shape[:2]
    dist, _ = polar_grid(h, w, cx, cy)
    mask = np.abs(dist - radius) <= width / 2
    buffer[mask] = color


def draw_line(
    buffer: Buffer,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    color: Color,
    thickness: float = 1,
) -> None:
    """Draw a thick line segment.

    Pixels whose center lies within thickness/2 of the segment are set,
    so the result does not depend on the drawing direction.
    """
    h, w = buffer.shape[:2]
    half = max(thickness, 1) / 2

    # Only scan the bounding box of the segment
    x_lo = max(0, int(np.floor(min(x1, x2) - half)))
    x_hi = min(w, int(np.ceil(max(x1, x2) + half)) + 1)
    y_lo = max(0, int(np.floor(min(y1, y2) - half)))
    y_hi = min(h, int(np.ceil(max(y1, y2) + half)) + 1)
    if x_hi <= x_lo or y_hi <= y_lo:
        return

    ys, xs = np.mgrid[y_lo:y_hi, x_lo:x_hi].astype(np.float64)
    px = xs + 0.5 - x1
    py = ys + 0.5 - y1
    sx, sy = x2 - x1, y2 - y1
    length_sq = sx * sx + sy * sy
    if length_sq == 0:
        t = np.zeros_like(px)
    else:
        t = np.clip((px * sx + py * sy) / length_sq, 0.0, 1.0)
    dist = np.hypot(px - t * sx, py - t * sy)

    region = buffer[y_lo:y_hi, x_lo:x_hi]
    region[dist <= half] = color


def draw_radial_line(
    buffer: Buffer,
    cx: float,
    cy: float,
    angle: float,
    inner: float,
    outer: float,
    color: Color,
    thickness: float = 1,
) -> None:
    """Draw a line along a radius, from ``inner`` to ``outer`` distance."""
    cos_a, sin_a = np.cos(angle), np.sin(angle)
    draw_line(
        buffer,
        cx + inner * cos_a, cy + inner * sin_a,
        cx + outer * cos_a, cy + outer * sin_a,
        color, thickness,
    )


# ===== TEXT =====

def fold_text(text: str) -> str:
    """Upper-case and strip accents so names fit the bitmap font."""
    decomposed = unicodedata.normalize("NFKD", text.upper())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def text_mask(text: str, scale: int = 1, font: Optional[dict] = None) -> NDArray[np.bool_]:
    """Render text into a boolean mask using a bitmap font.

    Characters missing from the font render as '?'. Letter spacing is one
    font pixel; a space is three font pixels wide.
    """
    if font is None:
        font = _get_default_font()

    columns: list[NDArray[np.bool_]] = []
    for char in fold_text(text):
        if char == " ":
            columns.append(np.zeros((5, 3), dtype=bool))
        else:
            glyph = font.get(char, font["?"])
            columns.append(np.array(glyph, dtype=bool))
        columns.append(np.zeros((5, 1), dtype=bool))

    if not columns:
        return np.zeros((5 * scale, 0), dtype=bool)

    # Drop trailing letter spacing
    mask = np.hstack(columns[:-1])
    if scale > 1:
        mask = np.kron(mask, np.ones((scale, scale), dtype=bool))
    return mask


def dilate(mask: NDArray[np.bool_], radius: int = 1) -> NDArray[np.bool_]:
    """Grow a mask by ``radius`` pixels in every direction (square kernel).

    The result is ``radius`` pixels larger on each side than the input.
    """
    if radius <= 0:
        return mask.copy()
    h, w = mask.shape
    out = np.zeros((h + 2 * radius, w + 2 * radius), dtype=bool)
    for dy in range(2 * radius + 1):
        for dx in range(2 * radius + 1):
            out[dy:dy + h, dx:dx + w] |= mask
    return out


def draw_text_rotated(
    buffer: Buffer,
    text: str,
    cx: float,
    cy: float,
    angle: float,
    right: float,
    color: Color,
    scale: int = 1,
    shadow: Optional[Color] = None,
    shadow_radius: int = 1,
) -> None:
    """Draw text along a radius of a circle centered at (cx, cy).

    The text baseline runs outward along ``angle``; its right edge sits
    ``right`` pixels from the center and it is vertically centered on the
    radius. With ``shadow`` set, a dilated copy of the glyphs is drawn
    underneath in that color.
    """
    mask = text_mask(text, scale)
    if mask.size == 0:
        return
    if shadow is not None:
        pad = shadow_radius * max(1, scale // 2)
        _blit_radial(buffer, dilate(mask, pad), cx, cy, angle, right + pad, shadow)
    _blit_radial(buffer, mask, cx, cy, angle, right, color)


def _blit_radial(
    buffer: Buffer,
    mask: NDArray[np.bool_],
    cx: float,
    cy: float,
    angle: float,
    right: float,
    color: Color,
) -> None:
    """Inverse-map a mask placed along a radius onto the buffer."""
    h, w = buffer.shape[:2]
    mh, mw = mask.shape
    cos_a, sin_a = float(np.cos(angle)), float(np.sin(angle))
    left = right - mw

    # Rotated rectangle corners in screen space -> bounding box
    corners_along = (left, right, left, right)
    corners_across = (-mh / 2, -mh / 2, mh / 2, mh / 2)
    xs_c = [cx + a * cos_a - b * sin_a for a, b in zip(corners_along, corners_across)]
    ys_c = [cy + a * sin_a + b * cos_a for a, b in zip(corners_along, corners_across)]
    x_lo, x_hi = max(0, int(np.floor(min(xs_c)))), min(w, int(np.ceil(max(xs_c))) + 1)
    y_lo, y_hi = max(0, int(np.floor(min(ys_c)))), min(h, int(np.ceil(max(ys_c))) + 1)
    if x_hi <= x_lo or y_hi <= y_lo:
        return

    ys, xs = np.mgrid[y_lo:y_hi, x_lo:x_hi].astype(np.float64)
    dx = xs + 0.5 - cx
    dy = ys + 0.5 - cy
    along = dx * cos_a + dy * sin_a
    across = -dx * sin_a + dy * cos_a

    u = np.floor(along - left).astype(np.int64)
    v = np.floor(across + mh / 2).astype(np.int64)
    inside = (u >= 0) & (u < mw) & (v >= 0) & (v < mh)

    hit = np.zeros(u.shape, dtype=bool)
    hit[inside] = mask[v[inside], u[inside]]
    buffer[y_lo:y_hi, x_lo:x_hi][hit] = color


def _get_default_font() -> dict:
    """Return a simple 3x5 bitmap font for basic characters."""
    # Each character is a list of rows, each row is a list of 0/1 pixels
    return {
        'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
        'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
        'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
        'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
        'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
        'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
        'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
        'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
        'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
        'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
        'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
        'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
        'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
        'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
        'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
        'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
        'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
        'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
        'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
        'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
        'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
        'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
        'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
        'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
        'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
        'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
        '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
        '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
        '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
        '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
        '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
        '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
        '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
        '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
        '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
        '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
        '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
        '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
        '.': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,1,0]],
        ',': [[0,0,0], [0,0,0], [0,0,0], [0,1,0], [1,0,0]],
        ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
        '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
        '+': [[0,0,0], [0,1,0], [1,1,1], [0,1,0], [0,0,0]],
        '*': [[0,0,0], [1,0,1], [0,1,0], [1,0,1], [0,0,0]],
        '#': [[1,0,1], [1,1,1], [1,0,1], [1,1,1], [1,0,1]],
        '&': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,1]],
        "'": [[0,1,0], [0,1,0], [0,0,0], [0,0,0], [0,0,0]],
        '/': [[0,0,1], [0,0,1], [0,1,0], [1,0,0], [1,0,0]],
        '_': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [1,1,1]],
    }
