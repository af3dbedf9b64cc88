"""Garage door operator - Main Package"""

__version__ = '1.0.0'
__description__ = 'Event-serializing garage door controller with MQTT exposure'

# Core patterns - most fundamental
from .core import EventSequencer, StateMachine, GarageThingError

# Models - domain objects
from .models import DoorState, RelayState, SensorEdge, RelayFeedback, TimerTick, ActivateRequest

# Controller - the single owner of device state
from .controller import ActivationGate, DoorController, CommandRegistry

# Sinks / network exposure
from .protocols import PropertySink, EventSink, MqttExposure

# Ticks
from .triggers import PeriodicTickSource

__all__ = [
    # Core
    'EventSequencer',
    'StateMachine',
    'GarageThingError',

    # Models
    'DoorState',
    'RelayState',
    'SensorEdge',
    'RelayFeedback',
    'TimerTick',
    'ActivateRequest',

    # Controller
    'ActivationGate',
    'DoorController',
    'CommandRegistry',

    # Exposure
    'PropertySink',
    'EventSink',
    'MqttExposure',

    # Ticks
    'PeriodicTickSource',
]
