"""Single owner of the garage door state.

Every inbound event reaches ``DoorController.handle`` through one event
sequencer, so the fields below are only ever mutated from that consumer.
"""
from __future__ import annotations
import logging
import math
import time
from typing import Any, Callable, Dict, Optional, Protocol

from garagething.controller.activation_gate import ActivationGate
from garagething.core.exceptions import UnexpectedEventError
from garagething.models import (
    ActivateRequest, ActivationDecision, DoorState, OpenEpisode, RelayFeedback,
    RelayState, SensorEdge, TimerTick,
    EVENT_ACTIVATED, EVENT_CLOSED, EVENT_OPENED, MAX_OPEN_DURATION,
    PROP_OPEN, PROP_OPEN_DURATION, PROP_RELAY,
)
from garagething.protocols.sinks import EventSink, PropertySink

Clock = Callable[[], float]


class PulsePort(Protocol):
    """Outbound pulse intent. The hardware layer owns the timed de-activation."""

    def pulse(self, duration: float) -> None: ...


class DoorController:

    def __init__(self,
                 properties: PropertySink,
                 events: EventSink,
                 pulser: PulsePort,
                 gate: Optional[ActivationGate] = None,
                 initial_door: DoorState = DoorState.CLOSED,
                 initial_relay: RelayState = RelayState.INACTIVE,
                 clock: Clock = time.time):
        self.properties = properties
        self.events     = events
        self.pulser     = pulser
        self.clock      = clock
        self.log        = logging.getLogger(self.__class__.__name__)

        self._gate  = gate or ActivationGate()
        self._door  = initial_door
        self._relay = initial_relay
        self._episode: Optional[OpenEpisode] = (
            OpenEpisode(opened_at=clock()) if initial_door is DoorState.OPEN else None)
        self._open_duration = 0

        self._handlers: Dict[type, Callable[[Any], None]] = {
            SensorEdge:      self._on_sensor_edge,
            RelayFeedback:   self._on_relay_feedback,
            TimerTick:       self._on_tick,
            ActivateRequest: self._on_activate,
        }

    # --------------------------------------------------------------------- #
    #  Read-only view
    # --------------------------------------------------------------------- #
    @property
    def door_state(self) -> DoorState: return self._door

    @property
    def relay_state(self) -> RelayState: return self._relay

    @property
    def open_episode(self) -> Optional[OpenEpisode]: return self._episode

    @property
    def open_duration(self) -> int: return self._open_duration

    @property
    def gate(self) -> ActivationGate: return self._gate

    # --------------------------------------------------------------------- #
    #  Public API
    # --------------------------------------------------------------------- #
    def publish_snapshot(self) -> None:
        """Push every property value, used once at startup."""
        self.properties.publish_property(PROP_OPEN, self._door is DoorState.OPEN)
        self.properties.publish_property(PROP_RELAY, self._relay is RelayState.ACTIVE)
        self.properties.publish_property(PROP_OPEN_DURATION, self._open_duration)

    def handle(self, event: Any) -> None:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise UnexpectedEventError(f"controller cannot handle event {event!r}")
        handler(event)

    # --------------------------------------------------------------------- #
    #  Event handlers
    # --------------------------------------------------------------------- #
    def _on_sensor_edge(self, event: SensorEdge) -> None:
        if not isinstance(event.level, DoorState):
            raise UnexpectedEventError(f"unknown door level {event.level!r}")
        if event.level is self._door:
            self.log.debug("Ignoring repeated door sensor level %s", event.level.name)
            return

        opened = event.level is DoorState.OPEN
        self.log.info("Door sensor state changed to: %s", "Opened" if opened else "Closed")
        self._door = event.level
        self._episode = OpenEpisode(opened_at=self.clock()) if opened else None
        self._open_duration = 0

        self.properties.publish_property(PROP_OPEN, opened)
        self.events.emit_event(EVENT_OPENED if opened else EVENT_CLOSED)
        self.properties.publish_property(PROP_OPEN_DURATION, 0)

    def _on_relay_feedback(self, event: RelayFeedback) -> None:
        if not isinstance(event.level, RelayState):
            raise UnexpectedEventError(f"unknown relay level {event.level!r}")
        if event.level is self._relay:
            return
        self.log.info("Relay pin state changed to: %s", event.level.name)
        self._relay = event.level
        self.properties.publish_property(PROP_RELAY, event.level is RelayState.ACTIVE)

    def _on_tick(self, _event: TimerTick) -> None:
        if self._episode is None:
            return
        elapsed = math.floor(self.clock() - self._episode.opened_at)
        duration = min(max(elapsed, 0), MAX_OPEN_DURATION)
        if duration == self._open_duration:
            return
        self._open_duration = duration
        self.log.debug("Door open for %ds", duration)
        self.properties.publish_property(PROP_OPEN_DURATION, duration)

    def _on_activate(self, _event: ActivateRequest) -> None:
        if self._gate.try_activate(self.clock()) is ActivationDecision.DENIED:
            return
        self.log.info("Performing relay activation")
        self.events.emit_event(EVENT_ACTIVATED)
        self.pulser.pulse(self._gate.pulse_duration)
