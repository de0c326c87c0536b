"""
Slide and deck models

Only what the playback engine reads. Elements stay opaque dicts: painting
them is the renderer's job.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from models.domain.animation import Animation
from models.enums import TransitionType

DEFAULT_TRANSITION_MS = 300


@dataclass(frozen=True)
class SlideTransition:
    """Transition used when this slide appears on the audience display"""
    type: TransitionType = TransitionType.FADE
    duration: int = DEFAULT_TRANSITION_MS


@dataclass(frozen=True)
class Slide:
    id: str
    elements: Tuple[Dict[str, Any], ...] = ()
    animations: Tuple[Animation, ...] = ()
    notes: str = ""
    transition: SlideTransition = field(default_factory=SlideTransition)


@dataclass(frozen=True)
class DeckMeta:
    title: str
    author: Optional[str] = None
    aspect_ratio: str = "16:9"


@dataclass(frozen=True)
class Deck:
    meta: DeckMeta
    slides: Tuple[Slide, ...]

    @property
    def slide_count(self) -> int:
        return len(self.slides)
