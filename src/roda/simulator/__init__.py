"""Desktop pygame window for the wheel."""

from roda.simulator.window import SpinWindow, WindowConfig

__all__ = ["SpinWindow", "WindowConfig"]
