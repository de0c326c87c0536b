from enum import Enum, auto


class KeyboardSource(Enum):
    STDIN = auto()
    API = auto()
    DUMMY = auto()


class EventSource(Enum):
    """Event source identifiers for application events"""
    INPUT = auto()          # Keyboard / pointer input
    CHANNEL = auto()        # Received from the paired window
    PLAYBACK = auto()       # Local playback state machine
    PREVIEW = auto()        # Editor preview service
    API = auto()            # HTTP / Socket.IO clients
