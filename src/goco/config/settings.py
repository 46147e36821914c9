"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
They are built once by the entry point and passed into the components
that need them; nothing else reads the environment.
"""

import sys
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HardwareSettings(BaseSettings):
    """GPIO pin assignments (BCM numbering)."""

    # Output pins (indicator LEDs)
    power_led_gpio: int = 23
    volume_led_gpio: int = 24

    # Input pins (buttons, wired active LOW with pull-up)
    eject_button_gpio: int = 25
    home_button_gpio: int = 27
    power_button_gpio: int = 22

    # Debounce time in seconds
    bounce_time: Optional[float] = Field(default=0.05, ge=0.0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="GOCO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "hardware"] = "simulator"
    debug: bool = False

    # Base directory for bundled assets (idle animation frames)
    root: Path = Path(".")

    # Window
    no_fullscreen: bool = False
    fps: int = 30

    # External engine
    godot_path: str = "godot"
    # None = decide from the host platform
    liveness_check: Optional[bool] = None

    # Removable volume
    media_root: Path = Path("/media")
    volumes_root: Path = Path("/Volumes")
    volume_label: str = "GAMESTICK"

    # Tick periods in seconds
    scan_interval: float = Field(default=1.0, gt=0.0)
    io_interval: float = Field(default=0.1, gt=0.0)

    power_command: list[str] = Field(default=["shutdown", "-h", "now"])

    # Nested settings
    hardware: HardwareSettings = Field(default_factory=HardwareSettings)

    @field_validator("no_fullscreen", mode="before")
    @classmethod
    def no_fullscreen_when_set(cls, value: object) -> object:
        # GOCO_NO_FULLSCREEN disables fullscreen whatever its value, even empty
        if isinstance(value, str):
            return True
        return value

    @property
    def is_simulator(self) -> bool:
        """Check if running without physical I/O."""
        return self.env == "simulator"

    @property
    def is_hardware(self) -> bool:
        """Check if running on the console hardware."""
        return self.env == "hardware"

    @property
    def fullscreen(self) -> bool:
        return not self.no_fullscreen

    @property
    def engine_liveness(self) -> bool:
        """Whether the engine supervisor inspects its child process.

        Defaults to Linux only; on macOS the engine may legitimately
        hand off to a second process, so liveness is assumed until killed.
        """
        if self.liveness_check is not None:
            return self.liveness_check
        return sys.platform.startswith("linux")

    @property
    def assets_path(self) -> Path:
        return self.root / "assets"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
