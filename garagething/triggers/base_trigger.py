# garagething/triggers/base_trigger.py
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

class TickSource(ABC):
    """Abstract producer of periodic ``TimerTick`` events"""

    def __init__(self, interval: float = 1.0):
        if interval <= 0:
            raise ValueError("tick interval must be positive")
        self.interval: float = interval
        self.tick_count: int = 0

    @abstractmethod
    async def start(self, submit: Callable[[Any], None]) -> None:
        """Begin feeding ticks into ``submit``"""
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Stop producing ticks"""
        pass

    def get_execution_metadata(self) -> Dict[str, Any]:
        return {
            "interval": self.interval,
            "tick_count": self.tick_count,
            "trigger_type": self.__class__.__name__
        }
