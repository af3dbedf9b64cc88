from __future__ import annotations
import logging
from typing import Optional

from garagething.core.exceptions import ConfigurationError
from garagething.models import ActivationDecision


class ActivationGate:
    """Rate limiter for relay activations.

    A request is denied when less than ``min_interval`` seconds have passed
    since the last granted one. A request exactly ``min_interval`` after the
    previous grant is granted. The caller is responsible for issuing the
    ``pulse_duration`` relay pulse that follows a grant.
    """

    def __init__(self, pulse_duration: float = 0.5, min_interval: Optional[float] = None):
        if min_interval is None:
            min_interval = 2 * pulse_duration
        if pulse_duration < 0 or min_interval < 0:
            raise ConfigurationError("pulse duration and activation interval must not be negative")
        if min_interval < pulse_duration:
            raise ConfigurationError(
                f"min activation interval {min_interval}s is shorter than pulse {pulse_duration}s")

        self.pulse_duration     = pulse_duration
        self.min_interval       = min_interval
        self.last_activation_at: Optional[float] = None  # never activated
        self.log = logging.getLogger(self.__class__.__name__)

    def try_activate(self, now: float) -> ActivationDecision:
        if self.last_activation_at is not None and now - self.last_activation_at < self.min_interval:
            self.log.info("Not enough time has passed since last activation, so skipping action.")
            return ActivationDecision.DENIED
        self.last_activation_at = now
        return ActivationDecision.GRANTED
