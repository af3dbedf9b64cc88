from .state_machine import StateMachine, ServiceState
from .event_queue import EventSequencer

__all__ = ["StateMachine", "ServiceState", "EventSequencer"]
