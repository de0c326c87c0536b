from enum import Enum, auto


class EventType(Enum):
    # Input
    KEYBOARD_KEYPRESS = auto()

    # Presentation channel (paired-window protocol)
    CHANNEL_NAVIGATE = auto()
    CHANNEL_EXIT = auto()
    CHANNEL_SYNC_REQUEST = auto()
    CHANNEL_POINTER = auto()

    # Local playback
    PLAYBACK_STATE_CHANGED = auto()
    PRESENTATION_STARTED = auto()
    PRESENTATION_ENDED = auto()

    # Editor preview
    PREVIEW_STARTED = auto()
    PREVIEW_CLEARED = auto()
