"""
SlideRenderState — What a renderer needs to paint one slide at one step.

Runtime only (not persisted). Built by the controllers after every local or
received state change and handed to the renderer callback.

Warstwa: ENGINE / RENDER STATE
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional, Sequence

from engine.step_compiler import on_enter_animations
from models.domain.animation import Animation, AnimationStep
from models.domain.slide import Slide


@dataclass(frozen=True)
class SlideRenderState:
    """
    Attributes:
        slide: Slide being shown
        active_step: Number of steps already revealed
        steps: Compiled steps of the slide
        active_animations: onEnter animations plus all animations of steps[:active_step]
        on_advance: Callback for click-to-advance surfaces (None on the audience side)
    """

    slide: Slide
    active_step: int
    steps: Sequence[AnimationStep]
    active_animations: FrozenSet[Animation] = field(default_factory=frozenset)
    on_advance: Optional[Callable[[], None]] = None

    def is_active(self, animation: Animation) -> bool:
        return animation in self.active_animations

    def start_delay(self, animation: Animation) -> int:
        """Override from the owning step if any, else the authored delay"""
        for step in self.steps:
            if animation in step.delay_overrides:
                return step.delay_overrides[animation]
        return animation.delay

    def hidden_targets(self) -> List[str]:
        """Elements whose entrance animation has not played yet"""
        return [
            a.target for step in self.steps[self.active_step:] for a in step.animations
        ]


def build_render_state(
    slide: Slide,
    steps: Sequence[AnimationStep],
    active_step: int,
    on_advance: Optional[Callable[[], None]] = None
) -> SlideRenderState:
    active = set(on_enter_animations(slide.animations))
    for step in steps[:active_step]:
        active.update(step.animations)

    return SlideRenderState(
        slide=slide,
        active_step=active_step,
        steps=tuple(steps),
        active_animations=frozenset(active),
        on_advance=on_advance,
    )
