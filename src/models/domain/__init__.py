"""Domain models - authored deck data and playback runtime state"""

from models.domain.animation import Animation, AnimationStep, DEFAULT_DURATION_MS
from models.domain.slide import Slide, SlideTransition, Deck, DeckMeta
from models.domain.playback import PlaybackState, PointerState, NoteSegment, PreviewSchedule

__all__ = [
    "Animation",
    "AnimationStep",
    "DEFAULT_DURATION_MS",
    "Slide",
    "SlideTransition",
    "Deck",
    "DeckMeta",
    "PlaybackState",
    "PointerState",
    "NoteSegment",
    "PreviewSchedule",
]
