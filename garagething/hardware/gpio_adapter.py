"""
GPIO adapter for the garage door.

Owns the two pins of the device: the door sensor input (pulled up, HIGH
when the door is open) and the active-low relay output. Pin access and
debouncing are gpiozero's job; this module only translates pin changes
into controller events and executes relay pulses.
"""

import asyncio
import importlib
import logging
from typing import Any, Dict, Optional

from gpiozero import DigitalInputDevice, DigitalOutputDevice
from gpiozero.exc import GPIOZeroError

from garagething.core.exceptions import HardwareInitError
from garagething.models import DoorState, RelayFeedback, RelayState, SensorEdge

PIN_FACTORIES: Dict[str, str] = {
    "mock":    "gpiozero.pins.mock:MockFactory",
    "lgpio":   "gpiozero.pins.lgpio:LGPIOFactory",
    "rpigpio": "gpiozero.pins.rpigpio:RPiGPIOFactory",
    "pigpio":  "gpiozero.pins.pigpio:PiGPIOFactory",
    "native":  "gpiozero.pins.native:NativeFactory",
}


def create_pin_factory(name: Optional[str]) -> Any:
    """Instantiate a gpiozero pin factory by short name; ``None`` keeps gpiozero's default."""
    if not name:
        return None
    target = PIN_FACTORIES.get(name.lower())
    if target is None:
        raise HardwareInitError(f"Unknown GPIO pin factory: {name}")
    module_name, class_name = target.split(":")
    try:
        return getattr(importlib.import_module(module_name), class_name)()
    except (ImportError, GPIOZeroError, OSError) as e:
        raise HardwareInitError(f"GPIO pin factory '{name}' unavailable: {e}") from e


class GpioDoorHardware:

    def __init__(self, sensor_pin: int, relay_pin: int,
                 debounce: Optional[float] = 1.0, pin_factory: Any = None):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._sequencer: Any = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._release_handle: Optional[asyncio.TimerHandle] = None

        try:
            self.sensor = DigitalInputDevice(sensor_pin, pull_up=True,
                                             bounce_time=debounce or None,
                                             pin_factory=pin_factory)
        except (GPIOZeroError, OSError) as e:
            raise HardwareInitError(f"Cannot provision door sensor pin {sensor_pin}: {e}") from e
        try:
            self.relay = DigitalOutputDevice(relay_pin, active_high=False,
                                             initial_value=False,
                                             pin_factory=pin_factory)
        except (GPIOZeroError, OSError) as e:
            self.sensor.close()
            raise HardwareInitError(f"Cannot provision relay pin {relay_pin}: {e}") from e

        self.logger.info(f"Door sensor pin={sensor_pin}, state={self.read_door_state().name}")
        self.logger.info(f"Relay pin={relay_pin}, state={self.read_relay_state().name}")

    # ------------------------------------------------------------------ #
    #  Initial levels
    # ------------------------------------------------------------------ #
    def read_door_state(self) -> DoorState:
        # pulled up: an active (LOW) input means the contact is closed
        return DoorState.CLOSED if self.sensor.is_active else DoorState.OPEN

    def read_relay_state(self) -> RelayState:
        return RelayState.ACTIVE if self.relay.is_active else RelayState.INACTIVE

    # ------------------------------------------------------------------ #
    #  Event delivery
    # ------------------------------------------------------------------ #
    def attach(self, sequencer: Any) -> None:
        """Start forwarding sensor edges into ``sequencer``. Call from the event loop."""
        self._sequencer = sequencer
        self._loop = asyncio.get_running_loop()
        self.sensor.when_activated = self._on_sensor_closed
        self.sensor.when_deactivated = self._on_sensor_opened

    def _on_sensor_opened(self) -> None:
        self._sequencer.submit_threadsafe(SensorEdge(DoorState.OPEN))

    def _on_sensor_closed(self) -> None:
        self._sequencer.submit_threadsafe(SensorEdge(DoorState.CLOSED))

    # ------------------------------------------------------------------ #
    #  Pulse port
    # ------------------------------------------------------------------ #
    def pulse(self, duration: float) -> None:
        """Drive the relay active now and release it ``duration`` seconds later.

        Must be called on the event loop thread; never blocks.
        """
        if self._loop is None:
            raise RuntimeError("GPIO adapter is not attached to an event loop")
        if self._release_handle is not None:
            self._release_handle.cancel()

        self.relay.on()
        self._report_relay()
        self._release_handle = self._loop.call_later(duration, self._release)

    def _release(self) -> None:
        self._release_handle = None
        self.relay.off()
        self._report_relay()

    def _report_relay(self) -> None:
        if self._sequencer is not None:
            self._sequencer.submit(RelayFeedback(self.read_relay_state()))

    def close(self) -> None:
        if self._release_handle is not None:
            self._release_handle.cancel()
            self._release_handle = None
        self.sensor.when_activated = None
        self.sensor.when_deactivated = None
        self.relay.off()
        self.relay.close()
        self.sensor.close()
        self.logger.info("GPIO pins released")
