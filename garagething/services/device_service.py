"""Wires the door controller to its hardware, tick source and exposure layer."""
from __future__ import annotations
import asyncio
import logging
import time
from typing import Any, Optional

from config.app_config import Settings
from garagething.controller import ActivationGate, CommandRegistry, DoorController
from garagething.controller.door_controller import Clock
from garagething.core.exceptions import GarageThingError
from garagething.core.patterns import EventSequencer, ServiceState, StateMachine
from garagething.hardware import GpioDoorHardware, create_pin_factory
from garagething.models import ACTION_ACTIVATE, SensorEdge
from garagething.protocols import FanOutSink, LoggingSink, MqttExposure, MqttExposureConfig
from garagething.triggers import PeriodicTickSource, TickSource


class DeviceService:
    def __init__(self, settings: Settings,
                 hardware: Optional[GpioDoorHardware] = None,
                 tick_source: Optional[TickSource] = None,
                 clock: Clock = time.time):
        self.settings = settings
        self.clock    = clock
        self.log      = logging.getLogger(self.__class__.__name__)
        self.state_machine = StateMachine(ServiceState.INITIALIZING)

        self.hardware: Optional[GpioDoorHardware] = hardware
        self.ticker: TickSource = tick_source or PeriodicTickSource(settings.TICK_SECONDS)
        self.sequencer  = EventSequencer(self._handle)
        self.commands   = CommandRegistry(self.sequencer.submit_threadsafe)
        self.exposure: Optional[MqttExposure] = None
        self.controller: Optional[DoorController] = None
        self._stop_requested = asyncio.Event()

    @property
    def state(self) -> ServiceState:
        return self.state_machine.state

    # --------------------------------------------------------------------- #
    #  Public API
    # --------------------------------------------------------------------- #
    async def startup(self) -> None:
        if not self.state_machine.transition(ServiceState.STARTING):
            raise RuntimeError(f"Cannot start from state {self.state.name}")
        try:
            await self._startup()
        except GarageThingError:
            self.state_machine.transition(ServiceState.ERROR)
            await self.shutdown()
            raise
        self.state_machine.transition(ServiceState.RUNNING)
        self.log.info("garage door service ready")

    async def run(self) -> None:
        """Block until ``request_stop`` is called or the event consumer fails."""
        stop_waiter = asyncio.create_task(self._stop_requested.wait())
        consumer = self.sequencer.task
        try:
            done, _ = await asyncio.wait({stop_waiter, consumer},
                                         return_when=asyncio.FIRST_COMPLETED)
        finally:
            stop_waiter.cancel()
        if consumer in done and not consumer.cancelled() and consumer.exception():
            self.state_machine.transition(ServiceState.ERROR)
            raise consumer.exception()

    def request_stop(self) -> None:
        self._stop_requested.set()

    def activate(self) -> None:
        """In-process entry point for the ``activate`` action."""
        self.commands.dispatch(ACTION_ACTIVATE)

    async def shutdown(self) -> None:
        if self.state in (ServiceState.STOPPING, ServiceState.STOPPED):
            return
        self.state_machine.transition(ServiceState.STOPPING)

        await self.ticker.stop()
        if self.sequencer.running:
            await self.sequencer.stop()
        if self.exposure is not None:
            await self.exposure.disconnect()
        if self.hardware is not None:
            self.hardware.close()

        self.state_machine.transition(ServiceState.STOPPED)
        self.log.info("garage door service stopped")

    # --------------------------------------------------------------------- #
    #  Private helpers
    # --------------------------------------------------------------------- #
    async def _startup(self) -> None:
        cfg = self.settings
        if self.hardware is None:
            self.hardware = GpioDoorHardware(
                cfg.DOOR_SENSOR_PIN, cfg.RELAY_PIN,
                debounce=cfg.debounce,
                pin_factory=create_pin_factory(cfg.GPIO_PIN_FACTORY),
            )

        sink: Any = LoggingSink()
        if cfg.MQTT_ENABLED:
            self.exposure = MqttExposure(MqttExposureConfig(
                host=cfg.MQTT_HOST, port=cfg.MQTT_PORT,
                base_topic=cfg.MQTT_BASE_TOPIC, client_id=cfg.MQTT_CLIENT_ID,
                username=cfg.MQTT_USERNAME, password=cfg.MQTT_PASSWORD,
                timeout=cfg.MQTT_TIMEOUT,
            ), self.commands)
            sink = FanOutSink(LoggingSink(logging.DEBUG), self.exposure)

        self.controller = DoorController(
            properties=sink, events=sink, pulser=self.hardware,
            gate=ActivationGate(cfg.pulse_duration, cfg.min_activation_interval),
            initial_door=self.hardware.read_door_state(),
            initial_relay=self.hardware.read_relay_state(),
            clock=self.clock,
        )
        # retained values are replayed by the exposure once it connects
        self.controller.publish_snapshot()

        # consumer and pin callbacks go live before anything that can wait
        await self.sequencer.start()
        self.hardware.attach(self.sequencer)
        # an edge between the initial read and attach is caught here; repeats are no-ops
        self.sequencer.submit(SensorEdge(self.hardware.read_door_state()))

        if self.exposure is not None:
            await self.exposure.connect()
        await self.ticker.start(self.sequencer.submit)

    def _handle(self, event: Any) -> None:
        self.controller.handle(event)
