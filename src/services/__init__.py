"""Services layer"""

from .event_bus import EventBus
from .presentation_channel import ChannelHub, ChannelPort, PresentationChannel
from .deck_service import DeckService, DeckNavigator
from .preview_service import PreviewService
from .elapsed_timer import ElapsedTimer, format_elapsed
from .service_container import ServiceContainer

__all__ = [
    "EventBus",
    "ChannelHub",
    "ChannelPort",
    "PresentationChannel",
    "DeckService",
    "DeckNavigator",
    "PreviewService",
    "ElapsedTimer",
    "format_elapsed",
    "ServiceContainer",
]
