"""I/O interface with every pin unbound, for builds without GPIO."""

from .base import Button, IoInterface
from .pins import UnboundPin


class InertInterface(IoInterface):
    """
    Identical API to the GPIO interface with no physical effect.

    Presses can still be recorded through trigger(), which feeds the
    same flags the GPIO callbacks set.
    """

    def __init__(self) -> None:
        super().__init__(
            power_led=UnboundPin("power_led"),
            volume_led=UnboundPin("volume_led"),
            buttons={button: UnboundPin(f"{button.value}_button") for button in Button},
        )

    @property
    def is_bound(self) -> bool:
        return False
