import pytest

from garagething.controller import ActivationGate
from garagething.core.exceptions import ConfigurationError
from garagething.models import ActivationDecision

GRANTED, DENIED = ActivationDecision.GRANTED, ActivationDecision.DENIED


def test_min_interval_defaults_to_twice_the_pulse():
    gate = ActivationGate(pulse_duration=0.5)
    assert gate.min_interval == 1.0


def test_rate_limit_sequence_with_inclusive_boundary():
    gate = ActivationGate(pulse_duration=0.5, min_interval=1.0)

    assert gate.try_activate(0.0) is GRANTED
    assert gate.try_activate(0.9) is DENIED
    assert gate.try_activate(1.0) is GRANTED
    assert gate.try_activate(1.5) is DENIED


def test_denied_request_does_not_move_the_window():
    gate = ActivationGate(pulse_duration=0.5, min_interval=1.0)
    gate.try_activate(100.0)
    gate.try_activate(100.6)

    assert gate.last_activation_at == 100.0
    assert gate.try_activate(101.0) is GRANTED


def test_first_request_at_wall_clock_time_is_granted():
    gate = ActivationGate(pulse_duration=0.5)
    assert gate.try_activate(1_700_000_000.0) is GRANTED


@pytest.mark.parametrize("pulse, interval", [(0.5, 0.4), (-0.1, 1.0), (0.5, -1.0)])
def test_invalid_timing_is_rejected(pulse, interval):
    with pytest.raises(ConfigurationError):
        ActivationGate(pulse_duration=pulse, min_interval=interval)
