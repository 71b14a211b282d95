"""Easing functions for the wheel spin.

A spin starts fast and decelerates to rest, so only ease-out curves (plus
linear, useful for debugging) are offered. All functions take a normalized
time t (0.0 to 1.0) and return a normalized value with f(0) == 0 and
f(1) == 1.
"""

from enum import Enum, auto
from typing import Callable
import math


class Easing(Enum):
    """Available easing function types."""

    LINEAR = auto()
    EASE_OUT_QUAD = auto()
    EASE_OUT_CUBIC = auto()
    EASE_OUT_QUART = auto()
    EASE_OUT_QUINT = auto()
    EASE_OUT_SINE = auto()
    EASE_OUT_EXPO = auto()
    EASE_OUT_CIRC = auto()


# Type alias for easing functions
EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


def ease_out_quad(t: float) -> float:
    """Decelerate to zero velocity."""
    return 1 - (1 - t) * (1 - t)


def ease_out_cubic(t: float) -> float:
    """Decelerate to zero velocity (cubic). Default spin curve."""
    return 1 - pow(1 - t, 3)


def ease_out_quart(t: float) -> float:
    """Decelerate to zero velocity (quartic)."""
    return 1 - pow(1 - t, 4)


def ease_out_quint(t: float) -> float:
    """Decelerate to zero velocity (quintic)."""
    return 1 - pow(1 - t, 5)


def ease_out_sine(t: float) -> float:
    """Decelerate using sine curve."""
    return math.sin((t * math.pi) / 2)


def ease_out_expo(t: float) -> float:
    """Decelerate exponentially; returns exactly 1 at t == 1."""
    return 1 if t == 1 else 1 - pow(2, -10 * t)


def ease_out_circ(t: float) -> float:
    """Decelerate along circular curve."""
    return math.sqrt(1 - pow(t - 1, 2))


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
    Easing.EASE_OUT_QUART: ease_out_quart,
    Easing.EASE_OUT_QUINT: ease_out_quint,
    Easing.EASE_OUT_SINE: ease_out_sine,
    Easing.EASE_OUT_EXPO: ease_out_expo,
    Easing.EASE_OUT_CIRC: ease_out_circ,
}

# String name mapping, as used by settings ("ease_out_cubic")
_EASING_BY_NAME: dict[str, Easing] = {e.name.lower(): e for e in Easing}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Get an easing function by enum or name.

    Args:
        easing: Easing enum value or string name (e.g., "ease_out_cubic")

    Returns:
        The easing function

    Raises:
        ValueError: If easing name is not recognized
    """
    if isinstance(easing, str):
        easing_enum = _EASING_BY_NAME.get(easing.lower())
        if easing_enum is None:
            raise ValueError(f"Unknown easing function: {easing}")
        easing = easing_enum

    func = _EASING_FUNCTIONS.get(easing)
    if func is None:
        raise ValueError(f"No function registered for: {easing}")

    return func