# garagething/controller/__init__.py
"""Door controller, activation gate and command table."""

from .activation_gate import ActivationGate
from .door_controller import DoorController, PulsePort, Clock
from .commands import CommandRegistry

__all__ = [
    'ActivationGate',
    'DoorController',
    'PulsePort',
    'Clock',
    'CommandRegistry',
]
