"""Configuration for GOCO."""

from .settings import HardwareSettings, Settings, get_settings

__all__ = ["HardwareSettings", "Settings", "get_settings"]
