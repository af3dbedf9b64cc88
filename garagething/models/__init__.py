"""Data models and domain objects."""

from .door_models import (
    DoorState,
    RelayState,
    ActivationDecision,
    OpenEpisode,
    SensorEdge,
    RelayFeedback,
    TimerTick,
    ActivateRequest,
    MAX_OPEN_DURATION,
    PROP_OPEN,
    PROP_RELAY,
    PROP_OPEN_DURATION,
    EVENT_OPENED,
    EVENT_CLOSED,
    EVENT_ACTIVATED,
    ACTION_ACTIVATE,
    describe_device,
)

__all__ = [
    # State
    'DoorState',
    'RelayState',
    'ActivationDecision',
    'OpenEpisode',
    'MAX_OPEN_DURATION',

    # Inbound events
    'SensorEdge',
    'RelayFeedback',
    'TimerTick',
    'ActivateRequest',

    # Exposed names
    'PROP_OPEN',
    'PROP_RELAY',
    'PROP_OPEN_DURATION',
    'EVENT_OPENED',
    'EVENT_CLOSED',
    'EVENT_ACTIVATED',
    'ACTION_ACTIVATE',
    'describe_device',
]
