"""Configuration for RODA."""

from .settings import Settings, SpinSettings, WheelSettings, AudioSettings, get_settings

__all__ = ["Settings", "SpinSettings", "WheelSettings", "AudioSettings", "get_settings"]
