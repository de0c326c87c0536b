"""
Animation domain models

Authored animations are immutable and compared by identity: two entries with
the same fields are still different animations (they may sit at different
positions of the list), so they are usable as distinct mapping keys.
Compiled steps are rebuilt whenever the animation list changes.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from models.enums import AnimationEffect, AnimationTrigger
from models.errors import AnimationConfigError

DEFAULT_DURATION_MS = 500


@dataclass(frozen=True, eq=False)
class Animation:
    """One authored animation entry of a slide"""
    target: str
    trigger: AnimationTrigger
    effect: AnimationEffect
    delay: int = 0
    duration: Optional[int] = None
    order: Optional[int] = None
    key: Optional[str] = None

    def __post_init__(self):
        if self.trigger == AnimationTrigger.ON_KEY and not self.key:
            raise AnimationConfigError(
                f"Animation on '{self.target}' uses onKey but has no key",
                target=self.target
            )
        if self.trigger != AnimationTrigger.ON_KEY and self.key is not None:
            raise AnimationConfigError(
                f"Animation on '{self.target}' has key '{self.key}' but trigger is {self.trigger.value}",
                target=self.target
            )
        if self.delay < 0 or (self.duration is not None and self.duration < 0):
            raise AnimationConfigError(
                f"Animation on '{self.target}' has a negative delay or duration",
                target=self.target
            )

    def duration_or(self, default: int = DEFAULT_DURATION_MS) -> int:
        """Authored duration, or the caller's default when unset"""
        return self.duration if self.duration is not None else default

    @property
    def sort_order(self) -> Optional[int]:
        """`order` is only meaningful on onClick anchors"""
        return self.order if self.trigger == AnimationTrigger.ON_CLICK else None


@dataclass(frozen=True)
class AnimationStep:
    """
    One discrete advance unit.

    `animations[0]` is the onClick/onKey anchor; the rest are chained entries.
    `delay_overrides` holds each chained entry's start offset relative to the
    step's own start. The anchor keeps its authored delay.
    """
    trigger: AnimationTrigger
    animations: Tuple[Animation, ...]
    key: Optional[str] = None
    delay_overrides: Mapping[Animation, int] = field(default_factory=dict)

    @property
    def anchor(self) -> Animation:
        return self.animations[0]

    def start_offset(self, animation: Animation) -> int:
        """Resolved start of `animation` relative to the step start"""
        return self.delay_overrides.get(animation, animation.delay)

    def matches_key(self, char: str) -> bool:
        return self.trigger == AnimationTrigger.ON_KEY and self.key == char
