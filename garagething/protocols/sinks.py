"""
Outbound surfaces of the door controller.

The controller pushes property values and fires named events; it never
reads anything back. Implementations are called from the single event
consumer and must not block.
"""

import logging
from typing import Any, List, Protocol, runtime_checkable


@runtime_checkable
class PropertySink(Protocol):
    """Receives the current value of an exposed property after every change."""

    def publish_property(self, name: str, value: Any) -> None: ...


@runtime_checkable
class EventSink(Protocol):
    """Receives name-only domain events (``Opened``, ``Closed``, ``Activated``)."""

    def emit_event(self, name: str) -> None: ...


class LoggingSink:
    """Sink that only writes to the log. Used when network exposure is disabled."""

    def __init__(self, level: int = logging.INFO):
        self.level = level
        self.logger = logging.getLogger(self.__class__.__name__)

    def publish_property(self, name: str, value: Any) -> None:
        self.logger.log(self.level, f"property {name} = {value}")

    def emit_event(self, name: str) -> None:
        self.logger.log(self.level, f"event {name}")


class FanOutSink:
    """Forwards every write to each of ``sinks`` in order."""

    def __init__(self, *sinks: Any):
        self.sinks: List[Any] = list(sinks)

    def publish_property(self, name: str, value: Any) -> None:
        for sink in self.sinks:
            sink.publish_property(name, value)

    def emit_event(self, name: str) -> None:
        for sink in self.sinks:
            sink.emit_event(name)
