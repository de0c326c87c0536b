"""Local playback and preview events"""

from dataclasses import dataclass

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class PlaybackStateChangedEvent(Event):
    """(slide_index, active_step) changed; `remote` is True when a received Navigate caused it"""
    slide_index: int
    active_step: int
    remote: bool

    def __init__(self, slide_index: int, active_step: int, remote: bool = False):
        super().__init__(type=EventType.PLAYBACK_STATE_CHANGED, source=EventSource.PLAYBACK)
        self.slide_index = slide_index
        self.active_step = active_step
        self.remote = remote


@dataclass(init=False)
class PresentationStartedEvent(Event):
    slide_index: int

    def __init__(self, slide_index: int):
        super().__init__(type=EventType.PRESENTATION_STARTED, source=EventSource.PLAYBACK)
        self.slide_index = slide_index


@dataclass(init=False)
class PresentationEndedEvent(Event):
    """Presentation left; `remote` is True when the other window sent Exit"""
    remote: bool

    def __init__(self, remote: bool = False):
        super().__init__(type=EventType.PRESENTATION_ENDED, source=EventSource.PLAYBACK)
        self.remote = remote


@dataclass(init=False)
class PreviewStartedEvent(Event):
    mode: str
    clear_after_ms: int

    def __init__(self, mode: str, clear_after_ms: int):
        super().__init__(type=EventType.PREVIEW_STARTED, source=EventSource.PREVIEW)
        self.mode = mode
        self.clear_after_ms = clear_after_ms


@dataclass(init=False)
class PreviewClearedEvent(Event):
    def __init__(self):
        super().__init__(type=EventType.PREVIEW_CLEARED, source=EventSource.PREVIEW)
