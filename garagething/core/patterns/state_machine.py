from enum import Enum, auto
from typing import Dict, List
import logging

class ServiceState(Enum):
    INITIALIZING = auto()
    STARTING     = auto()
    RUNNING      = auto()
    STOPPING     = auto()
    STOPPED      = auto()
    ERROR        = auto()

class StateMachine:
    def __init__(self, initial: ServiceState = ServiceState.INITIALIZING):
        self._state = initial
        self.log    = logging.getLogger(self.__class__.__name__)
        self._trans: Dict[ServiceState, List[ServiceState]] = {
            ServiceState.INITIALIZING: [ServiceState.STARTING, ServiceState.STOPPED],
            ServiceState.STARTING:     [ServiceState.RUNNING, ServiceState.ERROR,
                                        ServiceState.STOPPING],
            ServiceState.RUNNING:      [ServiceState.STOPPING, ServiceState.ERROR],
            ServiceState.STOPPING:     [ServiceState.STOPPED],
            ServiceState.ERROR:        [ServiceState.STOPPING],
            ServiceState.STOPPED:      [],
        }

    @property
    def state(self) -> ServiceState: return self._state

    def can(self, nxt: ServiceState) -> bool: return nxt in self._trans[self._state]

    def transition(self, nxt: ServiceState) -> bool:
        if self.can(nxt):
            self.log.info("State transition: %s -> %s", self._state.name, nxt.name)
            self._state = nxt
            return True
        self.log.error("Invalid state transition: %s -> %s", self._state.name, nxt.name)
        return False
