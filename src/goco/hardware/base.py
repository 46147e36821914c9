"""
Abstract base class for the physical I/O interface.

Both the real GPIO driver and the inert (unwired) implementation follow
this contract, so the session controller never branches on which build
it is running in.
"""

from abc import ABC, abstractmethod
from enum import Enum
import logging

from .pins import ButtonFlag, Pin, close_pins

logger = logging.getLogger(__name__)


class Button(Enum):
    """Physical buttons on the console."""
    EJECT = "eject"
    HOME = "home"
    POWER = "power"


class IoInterface(ABC):
    """
    Owns the indicator outputs and the button inputs.

    Each button has a flag that its falling-edge callback sets; the main
    loop consumes presses with poll_and_clear(). Output state is tracked
    as last commanded so callers can read it back on any build.
    """

    def __init__(
        self,
        power_led: Pin,
        volume_led: Pin,
        buttons: dict[Button, Pin],
    ) -> None:
        self._power_led = power_led
        self._volume_led = volume_led
        self._buttons = buttons
        self._flags = {button: ButtonFlag(button.value) for button in Button}
        self._power_status = False
        self._volume_present = False

        for button, pin in self._buttons.items():
            pin.on_falling_edge(self._flags[button].set)

    @property
    @abstractmethod
    def is_bound(self) -> bool:
        """True when pins drive real hardware."""
        ...

    def poll_and_clear(self, button: Button) -> bool:
        """Return True once for each press since the previous poll."""
        return self._flags[button].poll_and_clear()

    def trigger(self, button: Button) -> None:
        """Record a press as the button's interrupt callback would."""
        self._flags[button].set()

    def is_pending(self, button: Button) -> bool:
        return self._flags[button].is_set

    def set_power_status(self, on: bool) -> None:
        self._power_status = on
        if on:
            self._power_led.set_high()
        else:
            self._power_led.set_low()

    def set_volume_present(self, present: bool) -> None:
        self._volume_present = present
        if present:
            self._volume_led.set_high()
        else:
            self._volume_led.set_low()

    @property
    def power_status(self) -> bool:
        return self._power_status

    @property
    def volume_present(self) -> bool:
        return self._volume_present

    @property
    def pins(self) -> list[Pin]:
        return [self._power_led, self._volume_led, *self._buttons.values()]

    def close(self) -> None:
        """Release any hardware held by the pins."""
        close_pins(self.pins)
        logger.debug(f"{type(self).__name__} closed")
