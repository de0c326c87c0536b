"""
Event system for the presentation playback engine

Each window owns an EventBus; input and received channel messages are
published on it as events.
"""

# Event type, base class, and sources
from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource, KeyboardSource

# Input events
from models.events.input import KeyboardKeyPressEvent

# Playback events
from models.events.playback import (
    PlaybackStateChangedEvent,
    PresentationStartedEvent,
    PresentationEndedEvent,
    PreviewStartedEvent,
    PreviewClearedEvent,
)

# Channel messages
from models.events.channel import (
    ChannelMessage,
    NavigateMessage,
    ExitMessage,
    SyncRequestMessage,
    PointerMessage,
    decode_message,
)

__all__ = [
    # Type, base, and sources
    "EventType",
    "Event",
    "EventSource",
    "KeyboardSource",

    # Input
    "KeyboardKeyPressEvent",

    # Playback
    "PlaybackStateChangedEvent",
    "PresentationStartedEvent",
    "PresentationEndedEvent",
    "PreviewStartedEvent",
    "PreviewClearedEvent",

    # Channel
    "ChannelMessage",
    "NavigateMessage",
    "ExitMessage",
    "SyncRequestMessage",
    "PointerMessage",
    "decode_message",
]
