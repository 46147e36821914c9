"""
GPIO driver for the GOCO console using gpiozero.

Outputs:
    power status LED on GPIO 23 (Pin 16)
    GAMESTICK present LED on GPIO 24 (Pin 18)

Inputs (active LOW, internal pull-up, press = falling edge):
    eject button on GPIO 25 (Pin 22)
    home button on GPIO 27 (Pin 13)
    power button on GPIO 22 (Pin 15)

gpiozero runs press callbacks on its own thread; the callbacks only set
the button flags owned by IoInterface.
"""

from typing import Any, Optional
import logging

import gpiozero

from ..config.settings import HardwareSettings
from ..errors import IoConfigurationError
from .base import Button, IoInterface
from .pins import InputPin, OutputPin, Pin, close_pins

logger = logging.getLogger(__name__)


class GpioInterface(IoInterface):
    """Physical I/O bound to the Raspberry Pi header."""

    def __init__(
        self,
        power_led: OutputPin,
        volume_led: OutputPin,
        buttons: dict[Button, InputPin],
    ) -> None:
        super().__init__(power_led, volume_led, dict(buttons))

    @property
    def is_bound(self) -> bool:
        return True

    @classmethod
    def configure(
        cls,
        config: HardwareSettings,
        pin_factory: Optional[Any] = None,
    ) -> "GpioInterface":
        """
        Bind every pin to its hardware mode.

        On success the power LED is lit (the application is running) and
        the GAMESTICK LED is off (no volume seen yet).

        Args:
            config: Pin assignments
            pin_factory: gpiozero pin factory, None for the default

        Raises:
            IoConfigurationError: if any pin fails to bind. Pins bound
                before the failure are released.
        """
        bound: list[Optional[Pin]] = []
        try:
            power_led = OutputPin(
                "power_led",
                gpiozero.LED(config.power_led_gpio, pin_factory=pin_factory),
            )
            bound.append(power_led)
            volume_led = OutputPin(
                "volume_led",
                gpiozero.LED(config.volume_led_gpio, pin_factory=pin_factory),
            )
            bound.append(volume_led)

            buttons: dict[Button, InputPin] = {}
            for button, gpio in (
                (Button.EJECT, config.eject_button_gpio),
                (Button.HOME, config.home_button_gpio),
                (Button.POWER, config.power_button_gpio),
            ):
                pin = InputPin(
                    f"{button.value}_button",
                    gpiozero.Button(
                        gpio,
                        pull_up=True,
                        bounce_time=config.bounce_time,
                        pin_factory=pin_factory,
                    ),
                )
                bound.append(pin)
                buttons[button] = pin

        except Exception as e:
            close_pins(bound)
            raise IoConfigurationError(f"GPIO binding failed: {e}") from e

        io = cls(power_led, volume_led, buttons)
        io.set_power_status(True)
        io.set_volume_present(False)

        logger.info(
            f"GPIO initialized: PWR=GPIO{config.power_led_gpio}, "
            f"GSK=GPIO{config.volume_led_gpio}, "
            f"EJECT=GPIO{config.eject_button_gpio}, "
            f"HOME=GPIO{config.home_button_gpio}, "
            f"POWER=GPIO{config.power_button_gpio}"
        )
        return io
