"""
Event Sequencer

Merges the independent event sources of the device (door sensor edges,
relay feedback, timer ticks and activation requests) into one ordered
stream that is consumed by exactly one task.

Producers may live on the event loop (``submit``) or on foreign threads
such as the gpiozero and paho callback threads (``submit_threadsafe``).
The consumer hands every event, in arrival order, to a single handler.
No other execution context ever calls that handler.
"""

import asyncio
import logging
from typing import Any, Callable, Optional


class EventSequencer:
    """Multi-producer / single-consumer event queue."""

    def __init__(self, handler: Callable[[Any], None],
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self._handler = handler
        self._loop = loop
        self._event_queue: "asyncio.Queue[Any]" = asyncio.Queue()
        self._processing_task: Optional[asyncio.Task] = None
        self._running = False
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def task(self) -> Optional[asyncio.Task]:
        """The consumer task, finished with an exception if the handler failed."""
        return self._processing_task

    async def start(self) -> None:
        """Start the event processing loop."""
        if self._running:
            self._logger.warning("Event sequencer is already running")
            return

        self._loop = asyncio.get_running_loop()
        self._running = True
        self._processing_task = asyncio.create_task(self._process_events(),
                                                    name="event-sequencer")
        self._logger.info("Event sequencer started")

    async def stop(self) -> None:
        """Stop the event processing loop. Pending events are discarded."""
        if not self._running:
            self._logger.warning("Event sequencer is not running")
            return

        self._running = False

        if self._processing_task and not self._processing_task.done():
            self._processing_task.cancel()
            try:
                await self._processing_task
            except asyncio.CancelledError:
                pass

        dropped = self._event_queue.qsize()
        if dropped:
            self._logger.info(f"Discarding {dropped} unprocessed events")
        self._logger.info("Event sequencer stopped")

    def submit(self, event: Any) -> None:
        """Enqueue an event from a coroutine or callback running on the loop."""
        self._event_queue.put_nowait(event)
        self._logger.debug(f"Queued event: {event}")

    def submit_threadsafe(self, event: Any) -> None:
        """Enqueue an event from any thread."""
        if self._loop is None:
            raise RuntimeError("Event sequencer has no event loop; call start() first")
        self._loop.call_soon_threadsafe(self.submit, event)

    async def drain(self) -> None:
        """Wait until every event queued so far has been handled."""
        await self._event_queue.join()

    async def _process_events(self) -> None:
        """Hand queued events to the handler, strictly in arrival order."""
        self._logger.info("Started event processing loop")

        while True:
            event = await self._event_queue.get()
            try:
                self._handler(event)
            except Exception:
                self._logger.error(f"Error processing event {event}", exc_info=True)
                self._running = False
                raise
            finally:
                self._event_queue.task_done()

    def get_queue_size(self) -> int:
        """Get current event queue size."""
        return self._event_queue.qsize()
