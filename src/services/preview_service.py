"""
Preview Service - Runs editor animation previews in wall-clock time

Schedules come from engine.preview_scheduler; this service owns the timers:
  - auto-clear once the longest animation ends (+ margin)
  - click-boundary flash: on at each flash time, off after flash_duration_ms

Starting a new preview or closing the service cancels all pending timers.
"""

import asyncio
from typing import List, Optional, Sequence

from engine.preview_scheduler import preview_one, preview_all
from models.config import PlaybackConfig
from models.domain.animation import Animation
from models.domain.playback import PreviewSchedule
from models.events import PreviewStartedEvent, PreviewClearedEvent
from services.event_bus import EventBus
from lifecycle.task_registry import create_tracked_task, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PREVIEW)


class PreviewService:
    """
    Editor preview playback

    Example:
        preview = PreviewService(config.playback, event_bus)
        schedule = await preview.start_all(slide.animations)
        ...
        preview.close()
    """

    def __init__(self, config: Optional[PlaybackConfig] = None, event_bus: Optional[EventBus] = None):
        self.config = config or PlaybackConfig()
        self.event_bus = event_bus
        self.schedule: Optional[PreviewSchedule] = None
        self.flashing = False
        self._handles: List[asyncio.TimerHandle] = []

    @property
    def active(self) -> bool:
        return self.schedule is not None

    async def start_one(self, animations: Sequence[Animation]) -> PreviewSchedule:
        """Sequential preview of a selection"""
        schedule = preview_one(animations, self.config.preview_one_duration_ms)
        await self._start("one", schedule)
        return schedule

    async def start_all(self, animations: Sequence[Animation]) -> PreviewSchedule:
        """Whole-slide preview with simulated clicks"""
        schedule = preview_all(animations, self.config.default_duration_ms)
        await self._start("all", schedule)
        return schedule

    async def _start(self, mode: str, schedule: PreviewSchedule) -> None:
        self._cancel_timers()
        loop = asyncio.get_running_loop()

        self.schedule = schedule
        self.flashing = False

        clear_after_ms = schedule.clear_after_ms(self.config.preview_clear_margin_ms)
        self._handles.append(loop.call_later(clear_after_ms / 1000, self._on_clear_timer))

        for t in schedule.flash_times:
            self._handles.append(loop.call_later(t / 1000, self._set_flash, True))
            self._handles.append(
                loop.call_later((t + self.config.flash_duration_ms) / 1000, self._set_flash, False)
            )

        log.info(
            "Preview started",
            mode=mode,
            animations=len(schedule.animations),
            flashes=len(schedule.flash_times),
            clear_after_ms=clear_after_ms
        )
        if self.event_bus:
            await self.event_bus.publish(PreviewStartedEvent(mode, clear_after_ms))

    def _set_flash(self, on: bool) -> None:
        self.flashing = on

    def _on_clear_timer(self) -> None:
        self._handles.clear()
        self._reset()
        log.debug("Preview auto-cleared")
        if self.event_bus:
            create_tracked_task(
                self.event_bus.publish(PreviewClearedEvent()),
                category=TaskCategory.PREVIEW,
                description="Publish preview cleared"
            )

    def _reset(self) -> None:
        self.schedule = None
        self.flashing = False

    def _cancel_timers(self) -> None:
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()

    def clear(self) -> None:
        """Stop the running preview immediately"""
        if self.schedule is None:
            return
        self._cancel_timers()
        self._reset()
        log.debug("Preview cleared")

    def close(self) -> None:
        self._cancel_timers()
        self._reset()
