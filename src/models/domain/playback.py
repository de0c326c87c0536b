"""
Playback runtime models

Ephemeral: nothing here is persisted, it lives for one presentation session.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from models.domain.animation import Animation, DEFAULT_DURATION_MS


@dataclass(frozen=True)
class PlaybackState:
    """(slideIndex, activeStep) snapshot; activeStep == len(steps) means all steps consumed"""
    slide_index: int = 0
    active_step: int = 0


def _unit(value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class PointerState:
    """Laser pointer position in slide-relative coordinates [0, 1]"""
    x: float = 0.0
    y: float = 0.0
    visible: bool = False

    @classmethod
    def clamped(cls, x: float, y: float, visible: bool) -> "PointerState":
        """Non-finite coordinates collapse to 0"""
        return cls(x=_unit(x), y=_unit(y), visible=bool(visible))


HIDDEN_POINTER = PointerState()


@dataclass(frozen=True)
class NoteSegment:
    """Speaker-notes fragment; `step` None means always shown un-highlighted"""
    text: str
    step: Optional[int] = None

    def is_highlighted(self, active_step: int) -> bool:
        return self.step is not None and active_step >= self.step


@dataclass(frozen=True)
class PreviewSchedule:
    """
    Editor preview of an animation list.

    `delays` maps an animation to its absolute start (ms from preview start);
    animations absent from it start at their authored delay.
    `flash_times` are the simulated click boundaries.
    """
    animations: Tuple[Animation, ...]
    delays: Dict[Animation, int] = field(default_factory=dict)
    flash_times: List[int] = field(default_factory=list)
    default_duration_ms: int = DEFAULT_DURATION_MS

    def delay_for(self, animation: Animation) -> int:
        return self.delays.get(animation, animation.delay)

    @property
    def end_ms(self) -> int:
        """When the longest animation finishes"""
        return max(
            (self.delay_for(a) + a.duration_or(self.default_duration_ms) for a in self.animations),
            default=0
        )

    def clear_after_ms(self, margin_ms: int = 100) -> int:
        return self.end_ms + margin_ms
