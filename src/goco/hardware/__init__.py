"""Hardware abstraction layer for GOCO."""

import logging

from ..config.settings import Settings
from ..errors import IoConfigurationError
from .base import Button, IoInterface
from .inert import InertInterface
from .pins import ButtonFlag, InputPin, OutputPin, Pin, PinMode, UnboundPin

logger = logging.getLogger(__name__)


def create_io(settings: Settings) -> IoInterface:
    """
    Build the I/O interface for this run.

    Hardware builds bind the GPIO header and fall back to the inert
    interface if binding fails; simulator builds are always inert.
    """
    if not settings.is_hardware:
        return InertInterface()

    from .gpio import GpioInterface

    try:
        return GpioInterface.configure(settings.hardware)
    except IoConfigurationError as e:
        logger.warning(f"{e} - continuing without physical I/O")
        return InertInterface()


__all__ = [
    "Button",
    "ButtonFlag",
    "IoInterface",
    "InertInterface",
    "InputPin",
    "OutputPin",
    "Pin",
    "PinMode",
    "UnboundPin",
    "create_io",
]
