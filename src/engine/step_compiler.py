"""
AnimationStepCompiler — Turns a slide's flat animation list into ordered steps.

A step is what one "advance" reveals: an onClick/onKey anchor followed by any
afterPrevious/withPrevious entries chained to it. Chained entries get a start
offset relative to the step start (delay override); the anchor keeps its own
authored delay.

The scan is a fold over the authored list. Each stage is an immutable tuple of
steps; the last one is the only one that can still grow.

Warstwa: ENGINE / PLAYBACK
"""

from __future__ import annotations
from functools import reduce
from typing import Dict, Iterable, List, Sequence, Tuple

from models.domain.animation import Animation, AnimationStep, DEFAULT_DURATION_MS
from models.enums import AnimationTrigger, LogCategory
from models.errors import AnimationConfigError
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.PLAYBACK)

_Scan = Tuple[AnimationStep, ...]


def _chain_offset(step: AnimationStep, animation: Animation, default_duration_ms: int) -> int:
    """
    Start of a chained entry relative to its step.

    The anchor is the most recently appended animation of the step, whose own
    start is its override if it has one (it is itself chained), else its delay.
    """
    anchor = step.animations[-1]
    anchor_start = step.start_offset(anchor)

    if animation.trigger == AnimationTrigger.WITH_PREVIOUS:
        return anchor_start + animation.delay
    return anchor_start + anchor.duration_or(default_duration_ms) + animation.delay


def _fold_entry(steps: _Scan, entry: Tuple[int, Animation], default_duration_ms: int) -> _Scan:
    index, animation = entry

    if animation.trigger.is_anchor:
        step = AnimationStep(
            trigger=animation.trigger,
            animations=(animation,),
            key=animation.key if animation.trigger == AnimationTrigger.ON_KEY else None,
        )
        return steps + (step,)

    if not steps:
        raise AnimationConfigError(
            f"Animation on '{animation.target}' is {animation.trigger.value} "
            f"but no onClick/onKey animation precedes it",
            index=index,
            target=animation.target
        )

    current = steps[-1]
    overrides: Dict[Animation, int] = dict(current.delay_overrides)
    overrides[animation] = _chain_offset(current, animation, default_duration_ms)

    grown = AnimationStep(
        trigger=current.trigger,
        animations=current.animations + (animation,),
        key=current.key,
        delay_overrides=overrides,
    )
    return steps[:-1] + (grown,)


def _sort_key(scan_index: int, step: AnimationStep) -> Tuple[int, int]:
    order = step.anchor.sort_order
    return (order if order is not None else scan_index, scan_index)


def compile_steps(
    animations: Sequence[Animation],
    default_duration_ms: int = DEFAULT_DURATION_MS
) -> List[AnimationStep]:
    """
    Compile authored animations into playback steps.

    onEnter entries are not steps and are dropped. Steps are ordered by the
    anchor's `order` (onClick only), falling back to their scan position, with
    the scan position as tie-break.

    Args:
        animations: Slide animations in authored order
        default_duration_ms: Duration used for anchors with no duration

    Returns:
        Steps in playback order

    Raises:
        AnimationConfigError: a chained entry appears before any onClick/onKey
            entry; `index` is its position in `animations`
    """
    entries: Iterable[Tuple[int, Animation]] = (
        (i, a) for i, a in enumerate(animations) if a.trigger != AnimationTrigger.ON_ENTER
    )

    scanned: _Scan = reduce(
        lambda steps, entry: _fold_entry(steps, entry, default_duration_ms),
        entries,
        ()
    )

    ordered = sorted(enumerate(scanned), key=lambda pair: _sort_key(*pair))
    steps = [step for _, step in ordered]

    log.debug(
        "Compiled animation steps",
        animations=len(animations),
        steps=len(steps),
        triggers=[s.trigger.value for s in steps]
    )
    return steps


def on_enter_animations(animations: Sequence[Animation]) -> List[Animation]:
    """Animations that play automatically when the slide appears"""
    return [a for a in animations if a.trigger == AnimationTrigger.ON_ENTER]
