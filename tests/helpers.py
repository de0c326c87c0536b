"""Builders shared by the test modules"""

import asyncio
from typing import Optional

from models.domain.animation import Animation
from models.domain.slide import Deck, DeckMeta, Slide
from models.enums import AnimationEffect, AnimationTrigger

T = AnimationTrigger


def anim(
    target: str,
    trigger: AnimationTrigger = T.ON_CLICK,
    effect: AnimationEffect = AnimationEffect.FADE_IN,
    delay: int = 0,
    duration: Optional[int] = None,
    order: Optional[int] = None,
    key: Optional[str] = None,
) -> Animation:
    return Animation(target, trigger, effect, delay=delay, duration=duration, order=order, key=key)


def slide(slide_id: str, *animations: Animation, notes: str = "") -> Slide:
    elements = tuple({"id": a.target, "type": "text"} for a in animations)
    return Slide(id=slide_id, elements=elements, animations=tuple(animations), notes=notes)


def deck(*slides: Slide) -> Deck:
    return Deck(meta=DeckMeta(title="Test deck"), slides=tuple(slides))


async def settle(rounds: int = 10) -> None:
    """Let channel pumps and tracked tasks run"""
    for _ in range(rounds):
        await asyncio.sleep(0)
