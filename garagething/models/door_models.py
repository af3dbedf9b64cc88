from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


###############################################################################
# 1. DEVICE STATE -------------------------------------------------------------
###############################################################################

class DoorState(Enum):
    """Door position as reported by the (debounced) door sensor."""
    OPEN   = "open"
    CLOSED = "closed"


class RelayState(Enum):
    """Observed level of the relay control line."""
    ACTIVE   = "active"
    INACTIVE = "inactive"


class ActivationDecision(Enum):
    GRANTED = "granted"
    DENIED  = "denied"


@dataclass(frozen=True, slots=True)
class OpenEpisode:
    """The interval during which the door has been continuously open."""
    opened_at: float                  # epoch seconds


MAX_OPEN_DURATION = 60 * 60           # 1 hour

###############################################################################
# 2. INBOUND EVENTS -----------------------------------------------------------
###############################################################################

@dataclass(frozen=True, slots=True)
class SensorEdge:
    level: DoorState


@dataclass(frozen=True, slots=True)
class RelayFeedback:
    level: RelayState


@dataclass(frozen=True, slots=True)
class TimerTick:
    pass


@dataclass(frozen=True, slots=True)
class ActivateRequest:
    pass


###############################################################################
# 3. EXPOSED SURFACE ----------------------------------------------------------
###############################################################################

PROP_OPEN          = "open"
PROP_RELAY         = "relay"
PROP_OPEN_DURATION = "openduration"

EVENT_OPENED    = "Opened"
EVENT_CLOSED    = "Closed"
EVENT_ACTIVATED = "Activated"

ACTION_ACTIVATE = "activate"

PROPERTY_DESCRIPTIONS: Dict[str, Dict[str, Any]] = {
    PROP_OPEN: {
        "@type": "OpenProperty",
        "title": "State",
        "type": "boolean",
        "description": "Whether the door is open",
        "readOnly": True,
    },
    PROP_RELAY: {
        "@type": "OnOffProperty",
        "title": "Relay active",
        "type": "boolean",
        "description": "Door relay active status",
        "readOnly": True,
    },
    PROP_OPEN_DURATION: {
        "@type": "LevelProperty",
        "title": "Open time",
        "type": "integer",
        "unit": "seconds",
        "minimum": 0,
        "maximum": MAX_OPEN_DURATION,
        "description": "Door has been open this long",
        "readOnly": True,
    },
}

ACTION_DESCRIPTIONS: Dict[str, Dict[str, Any]] = {
    ACTION_ACTIVATE: {"title": "Activate", "description": "Open, Close or Stop door"},
}

EVENT_DESCRIPTIONS: Dict[str, Dict[str, Any]] = {
    EVENT_OPENED:    {"title": "Door opened", "description": "Previously closed door was opened"},
    EVENT_CLOSED:    {"title": "Door closed", "description": "Previously opened door was closed"},
    EVENT_ACTIVATED: {"title": "Door activated", "description": "Door relay was activated"},
}


def describe_device(title: str = "Garage door",
                    thing_id: str = "urn:dev:ops:garagedoor",
                    base_topic: Optional[str] = None) -> Dict[str, Any]:
    """Build the JSON-serialisable device description published to observers."""
    description: Dict[str, Any] = {
        "id": thing_id,
        "title": title,
        "@type": ["DoorSensor", "OnOffSwitch"],
        "description": "Door stuff",
        "properties": PROPERTY_DESCRIPTIONS,
        "actions": ACTION_DESCRIPTIONS,
        "events": EVENT_DESCRIPTIONS,
    }
    if base_topic:
        description["base_topic"] = base_topic
    return description
