"""
PreviewScheduler — Editor preview timing for a slide's animations.

Two modes:
  - preview_one: plays a selection back to back, ignoring triggers
  - preview_all: plays the whole slide as if every step were clicked the
    moment the previous one finished

Both are pure: they return a PreviewSchedule and leave timers to
services.preview_service.
"""

from __future__ import annotations
from typing import Dict, List, Sequence

from engine.step_compiler import compile_steps, on_enter_animations
from models.domain.animation import Animation, DEFAULT_DURATION_MS
from models.domain.playback import PreviewSchedule
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.PREVIEW)


def preview_one(
    animations: Sequence[Animation],
    default_duration_ms: int = DEFAULT_DURATION_MS
) -> PreviewSchedule:
    """
    Sequential preview: each animation starts after the previous one ends.

    delay[a] = cursor + a.delay, then cursor advances by a.delay + duration.
    """
    delays: Dict[Animation, int] = {}
    cursor = 0
    for animation in animations:
        delays[animation] = cursor + animation.delay
        cursor += animation.delay + animation.duration_or(default_duration_ms)

    log.debug("Preview one scheduled", animations=len(animations), total_ms=cursor)
    return PreviewSchedule(
        animations=tuple(animations),
        delays=delays,
        flash_times=[],
        default_duration_ms=default_duration_ms,
    )


def preview_all(
    animations: Sequence[Animation],
    default_duration_ms: int = DEFAULT_DURATION_MS
) -> PreviewSchedule:
    """
    Whole-slide preview with simulated clicks.

    onEnter animations play first at their own delays. Steps then follow one
    after another starting at the end of the onEnter group; the start of each
    onClick/onKey step is recorded in `flash_times`.

    Raises:
        AnimationConfigError: the list does not compile
    """
    on_enter_end = max(
        (a.delay + a.duration_or(default_duration_ms) for a in on_enter_animations(animations)),
        default=0
    )

    delays: Dict[Animation, int] = {}
    flash_times: List[int] = []
    cursor = on_enter_end

    for step in compile_steps(animations, default_duration_ms):
        if step.trigger.is_anchor:
            flash_times.append(cursor)

        step_end = cursor
        for animation in step.animations:
            total_delay = cursor + step.start_offset(animation)
            delays[animation] = total_delay
            step_end = max(step_end, total_delay + animation.duration_or(default_duration_ms))
        cursor = step_end

    log.debug(
        "Preview all scheduled",
        animations=len(animations),
        on_enter_end=on_enter_end,
        flashes=len(flash_times),
        total_ms=cursor
    )
    return PreviewSchedule(
        animations=tuple(animations),
        delays=delays,
        flash_times=flash_times,
        default_duration_ms=default_duration_ms,
    )
