"""
Elapsed Timer - Whole seconds since the presentation started

Runs as a tracked task that ticks once per `tick_s`; the presenter console
shows it as MM:SS.
"""

import asyncio
import time
from typing import Callable, Optional

from lifecycle.task_registry import create_tracked_task, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PLAYBACK)


def format_elapsed(seconds: int) -> str:
    """125 -> '02:05'; minutes keep counting past 59"""
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes:02d}:{secs:02d}"


class ElapsedTimer:
    def __init__(self, tick_s: float = 1.0, clock: Callable[[], float] = time.monotonic):
        self.tick_s = tick_s
        self._clock = clock
        self._started_at: Optional[float] = None
        self._task: Optional[asyncio.Task] = None
        self.elapsed_s = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def formatted(self) -> str:
        return format_elapsed(self.elapsed_s)

    def start(self) -> None:
        self.stop()
        self._started_at = self._clock()
        self.elapsed_s = 0
        self._task = create_tracked_task(
            self._run(),
            category=TaskCategory.TIMER,
            description="Presentation elapsed timer"
        )

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.tick_s)
            self._tick()

    def _tick(self) -> None:
        if self._started_at is not None:
            self.elapsed_s = int(self._clock() - self._started_at)

    def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            log.debug("Elapsed timer stopped", elapsed=self.formatted)
        self._task = None
        self._started_at = None
