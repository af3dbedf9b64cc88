from typing import Any, Callable, Dict, List
import logging

from garagething.core.exceptions import UnknownCommandError
from garagething.models import ACTION_ACTIVATE, ActivateRequest

CommandHandler = Callable[[], None]


class CommandRegistry:
    """Closed table of externally invocable commands.

    Handlers only turn a command into an event for the sequencer, so
    ``dispatch`` is safe to call from any thread as long as ``submit`` is.
    """

    def __init__(self, submit: Callable[[Any], None]):
        self._submit = submit
        self.logger = logging.getLogger(self.__class__.__name__)
        self._registry: Dict[str, CommandHandler] = {
            ACTION_ACTIVATE: self._activate,
        }

    def dispatch(self, name: str) -> None:
        handler = self._registry.get(name)
        if handler is None:
            raise UnknownCommandError(f"No handler registered for command: {name}")
        self.logger.info(f"Dispatching command: {name}")
        handler()

    def get_available_commands(self) -> List[str]:
        return list(self._registry.keys())

    def _activate(self) -> None:
        self._submit(ActivateRequest())
