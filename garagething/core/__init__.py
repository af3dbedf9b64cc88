# garagething/core/__init__.py
"""Core infrastructure components for the garage door operator."""

# Import order: most fundamental to most specific

from .exceptions import (
    GarageThingError,
    ConfigurationError,
    HardwareInitError,
    ExposureError,
    UnexpectedEventError,
    UnknownCommandError,
)

from .patterns.state_machine import StateMachine, ServiceState
from .patterns.event_queue import EventSequencer


__all__ = [
    "StateMachine",
    "ServiceState",
    "EventSequencer",
    "GarageThingError",
    "ConfigurationError",
    "HardwareInitError",
    "ExposureError",
    "UnexpectedEventError",
    "UnknownCommandError",
]
