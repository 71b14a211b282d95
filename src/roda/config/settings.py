"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SpinSettings(BaseSettings):
    """Spin animation parameters."""

    duration_ms: float = Field(default=5000.0, gt=0)

    # Extra full turns are drawn uniformly from [min_turns, max_turns)
    min_turns: float = 8.0
    max_turns: float = 13.0

    # Pointer sits at the top of the screen, which is 270 degrees in the
    # wheel frame (0 at 3 o'clock, clockwise)
    pointer_degrees: float = 270.0

    easing: str = "ease_out_cubic"


class WheelSettings(BaseSettings):
    """Wheel drawing parameters."""

    size: int = 1000
    label_max_chars: int = 16
    label_scale: int = 6
    outline_width: int = 4
    border_width: int = 20
    empty_ring_width: int = 10


class AudioSettings(BaseSettings):
    """Feedback sound settings."""

    enabled: bool = True
    volume: float = Field(default=1.0, ge=0.0, le=1.0)
    tick_volume: float = Field(default=0.5, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="RODA_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Initial entrants as comma-joined names; overrides the stored list
    entrants: str = ""

    # Persistence
    storage_path: Path = Field(default_factory=lambda: Path.home() / ".roda" / "state.json")
    share_base_url: str = "http://localhost:5173/"

    # Window
    window_width: int = 1100
    window_height: int = 720
    window_title: str = "RODA"
    fps: int = 60
    fullscreen: bool = False

    # Nested settings
    spin: SpinSettings = Field(default_factory=SpinSettings)
    wheel: WheelSettings = Field(default_factory=WheelSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
