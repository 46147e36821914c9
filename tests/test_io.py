from __future__ import annotations

import threading
from collections.abc import Generator

import pytest
from gpiozero.exc import CallbackSetToNone
from gpiozero.pins.mock import MockFactory

from goco.config.settings import HardwareSettings, Settings
from goco.errors import IoConfigurationError
from goco.hardware import Button, InertInterface, create_io
from goco.hardware import gpio as gpio_module
from goco.hardware.gpio import GpioInterface
from goco.hardware.pins import ButtonFlag, PinMode


@pytest.fixture()
def pin_factory() -> Generator[MockFactory, None, None]:
    factory = MockFactory()
    yield factory
    factory.reset()


@pytest.fixture()
def hardware() -> HardwareSettings:
    return HardwareSettings(_env_file=None, bounce_time=None)


@pytest.fixture()
def gpio(hardware: HardwareSettings, pin_factory: MockFactory) -> Generator[GpioInterface, None, None]:
    interface = GpioInterface.configure(hardware, pin_factory=pin_factory)
    yield interface
    interface.close()


def test_flag_reports_each_press_once() -> None:
    flag = ButtonFlag("eject")
    assert not flag.poll_and_clear()

    flag.set()
    flag.set()
    assert flag.is_set
    assert flag.poll_and_clear()
    assert not flag.poll_and_clear()


def test_flag_set_from_another_thread() -> None:
    flag = ButtonFlag("home")
    worker = threading.Thread(target=flag.set)
    worker.start()
    worker.join()

    assert flag.poll_and_clear()
    assert not flag.is_set


def test_inert_interface_accepts_everything(io: InertInterface) -> None:
    assert not io.is_bound
    assert all(pin.mode == PinMode.UNBOUND for pin in io.pins)

    io.set_power_status(True)
    io.set_volume_present(True)
    assert io.power_status
    assert io.volume_present

    for button in Button:
        assert not io.poll_and_clear(button)


def test_inert_trigger_is_polled_once(io: InertInterface) -> None:
    io.trigger(Button.HOME)

    assert io.is_pending(Button.HOME)
    assert not io.poll_and_clear(Button.EJECT)
    assert io.poll_and_clear(Button.HOME)
    assert not io.poll_and_clear(Button.HOME)


def test_configure_lights_power_led_only(gpio: GpioInterface, pin_factory: MockFactory) -> None:
    assert gpio.is_bound
    assert pin_factory.pin(23).state
    assert not pin_factory.pin(24).state
    assert gpio.power_status
    assert not gpio.volume_present


def test_volume_led_follows_commands(gpio: GpioInterface, pin_factory: MockFactory) -> None:
    gpio.set_volume_present(True)
    assert pin_factory.pin(24).state

    gpio.set_volume_present(False)
    assert not pin_factory.pin(24).state

    gpio.set_power_status(False)
    assert not pin_factory.pin(23).state


@pytest.mark.parametrize(
    ("button", "gpio_number"),
    [(Button.EJECT, 25), (Button.HOME, 27), (Button.POWER, 22)],
)
def test_falling_edge_sets_flag(
    gpio: GpioInterface, pin_factory: MockFactory, button: Button, gpio_number: int
) -> None:
    pin = pin_factory.pin(gpio_number)

    pin.drive_low()
    pin.drive_high()

    assert gpio.poll_and_clear(button)
    assert not gpio.poll_and_clear(button)
    for other in Button:
        if other is not button:
            assert not gpio.poll_and_clear(other)


def test_pin_conflict_raises_and_releases(pin_factory: MockFactory) -> None:
    conflicting = HardwareSettings(_env_file=None, bounce_time=None, home_button_gpio=23)

    with pytest.raises(IoConfigurationError):
        GpioInterface.configure(conflicting, pin_factory=pin_factory)

    # Everything bound before the failure was released, so a clean
    # configuration can claim the same pins again
    interface = GpioInterface.configure(
        HardwareSettings(_env_file=None, bounce_time=None), pin_factory=pin_factory
    )
    interface.close()


def test_create_io_simulator_is_inert() -> None:
    io = create_io(Settings(_env_file=None, env="simulator"))
    assert isinstance(io, InertInterface)


def test_create_io_falls_back_when_binding_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(cls, config, pin_factory=None):
        raise IoConfigurationError("GPIO binding failed: no header")

    monkeypatch.setattr(gpio_module.GpioInterface, "configure", classmethod(refuse))

    io = create_io(Settings(_env_file=None, env="hardware"))

    assert isinstance(io, InertInterface)
    assert not io.is_bound


def test_close_releases_pins_without_callback_warnings(
    hardware: HardwareSettings, pin_factory: MockFactory, recwarn: pytest.WarningsRecorder
) -> None:
    GpioInterface.configure(hardware, pin_factory=pin_factory).close()

    assert not [w for w in recwarn if issubclass(w.category, CallbackSetToNone)]
    GpioInterface.configure(hardware, pin_factory=pin_factory).close()
