import asyncio
import logging
from typing import Any, Callable, Optional
from garagething.models import TimerTick
from .base_trigger import TickSource

class PeriodicTickSource(TickSource):
    """Submits a ``TimerTick`` every ``interval`` seconds from an asyncio task"""

    def __init__(self, interval: float = 1.0):
        super().__init__(interval)
        self._task: Optional[asyncio.Task] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self, submit: Callable[[Any], None]) -> None:
        if self.running:
            self.logger.warning("Tick source is already running")
            return
        self._task = asyncio.create_task(self._run(submit), name="tick-source")
        self.logger.info(f"Tick source started ({self.interval}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self.logger.info(f"Tick source stopped: {self.get_execution_metadata()}")

    async def _run(self, submit: Callable[[Any], None]) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time()
        while True:
            next_at += self.interval
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            self.tick_count += 1
            submit(TimerTick())
