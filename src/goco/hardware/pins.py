"""
Pin abstractions for the console's GPIO header.

A pin is either bound as an output, bound as an input, or left unbound
(present in code but not wired). Unbound pins accept every call and do
nothing, so builds without GPIO run the same code paths.
"""

from enum import Enum, auto
from typing import Any, Callable, Optional
import logging
import threading

logger = logging.getLogger(__name__)


class PinMode(Enum):
    OUTPUT = auto()
    INPUT = auto()
    UNBOUND = auto()


class Pin:
    """Base pin. Every operation is a no-op unless a subclass binds it."""

    mode = PinMode.UNBOUND

    def __init__(self, name: str) -> None:
        self.name = name

    def set_high(self) -> None:
        pass

    def set_low(self) -> None:
        pass

    def on_falling_edge(self, callback: Callable[[], None]) -> None:
        pass

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class UnboundPin(Pin):
    """A pin that is not wired to hardware."""


class OutputPin(Pin):
    """Output pin driving an indicator (gpiozero LED or compatible)."""

    mode = PinMode.OUTPUT

    def __init__(self, name: str, device: Any) -> None:
        super().__init__(name)
        self._device = device

    def set_high(self) -> None:
        self._device.on()

    def set_low(self) -> None:
        self._device.off()

    def close(self) -> None:
        self._device.close()


class InputPin(Pin):
    """Input pin reading a button (gpiozero Button or compatible).

    The button is pulled up and wired to ground, so a press is the
    falling edge and maps onto the device's ``when_pressed`` hook.
    """

    mode = PinMode.INPUT

    def __init__(self, name: str, device: Any) -> None:
        super().__init__(name)
        self._device = device

    def on_falling_edge(self, callback: Callable[[], None]) -> None:
        self._device.when_pressed = callback

    def close(self) -> None:
        self._device.close()


class ButtonFlag:
    """
    Edge-event record for one button.

    Set from the interrupt (callback thread) side, read and cleared from
    the main loop. The lock makes poll_and_clear a single atomic step, so
    a press that lands between two polls is seen by exactly one of them.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = threading.Lock()
        self._set = False

    def set(self) -> None:
        """Record a press. Safe to call from any thread; never blocks long."""
        with self._lock:
            self._set = True

    def poll_and_clear(self) -> bool:
        with self._lock:
            was_set = self._set
            self._set = False
        return was_set

    @property
    def is_set(self) -> bool:
        """Peek at the flag without consuming it."""
        with self._lock:
            return self._set

    def __repr__(self) -> str:
        return f"ButtonFlag({self.name!r}, set={self.is_set})"


def close_pins(pins: list[Optional[Pin]]) -> None:
    """Release bound pins, logging rather than raising on failure."""
    for pin in pins:
        if pin is None:
            continue
        try:
            pin.close()
        except Exception as e:
            logger.warning(f"Failed to release {pin}: {e}")
