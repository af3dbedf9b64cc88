from typing import Any, List, Tuple

import pytest

from garagething.controller import ActivationGate, DoorController
from garagething.models import DoorState, RelayState


class ManualClock:
    """Wall clock that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSink:
    """PropertySink + EventSink that keeps everything it was given."""

    def __init__(self):
        self.records: List[Tuple[Any, ...]] = []

    def publish_property(self, name, value):
        self.records.append(("property", name, value))

    def emit_event(self, name):
        self.records.append(("event", name))

    def properties(self, name=None):
        return [(r[1], r[2]) for r in self.records
                if r[0] == "property" and (name is None or r[1] == name)]

    def events(self):
        return [r[1] for r in self.records if r[0] == "event"]

    def clear(self):
        self.records.clear()


class RecordingPulser:
    def __init__(self):
        self.pulses: List[float] = []

    def pulse(self, duration):
        self.pulses.append(duration)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def pulser():
    return RecordingPulser()


@pytest.fixture
def controller(clock, sink, pulser):
    return DoorController(
        properties=sink, events=sink, pulser=pulser,
        gate=ActivationGate(pulse_duration=0.5),
        initial_door=DoorState.CLOSED,
        initial_relay=RelayState.INACTIVE,
        clock=clock,
    )
