"""
Presentation channel messages

Four variants travel between the driver and passenger windows. On the wire a
message is a plain dict tagged by "type" with camelCase fields, e.g.
    {"type": "navigate", "slideIndex": 2, "activeStep": 1}
Once received it is decoded into the matching event and published on the
receiving window's EventBus.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource
from models.domain.playback import PointerState

WIRE_NAVIGATE = "navigate"
WIRE_EXIT = "exit"
WIRE_SYNC_REQUEST = "sync-request"
WIRE_POINTER = "pointer"


@dataclass(init=False)
class NavigateMessage(Event):
    """Sender's current (slideIndex, activeStep)"""
    slide_index: int
    active_step: int

    def __init__(self, slide_index: int, active_step: int):
        super().__init__(type=EventType.CHANNEL_NAVIGATE, source=EventSource.CHANNEL)
        self.slide_index = slide_index
        self.active_step = active_step

    def to_wire(self) -> Dict[str, Any]:
        return {"type": WIRE_NAVIGATE, "slideIndex": self.slide_index, "activeStep": self.active_step}


@dataclass(init=False)
class ExitMessage(Event):
    """The other side left the presentation"""

    def __init__(self):
        super().__init__(type=EventType.CHANNEL_EXIT, source=EventSource.CHANNEL)

    def to_wire(self) -> Dict[str, Any]:
        return {"type": WIRE_EXIT}


@dataclass(init=False)
class SyncRequestMessage(Event):
    """Ask the other side to send its current Navigate"""

    def __init__(self):
        super().__init__(type=EventType.CHANNEL_SYNC_REQUEST, source=EventSource.CHANNEL)

    def to_wire(self) -> Dict[str, Any]:
        return {"type": WIRE_SYNC_REQUEST}


@dataclass(init=False)
class PointerMessage(Event):
    """Laser pointer position, mirrored only"""
    pointer: PointerState

    def __init__(self, x: float, y: float, visible: bool):
        super().__init__(type=EventType.CHANNEL_POINTER, source=EventSource.CHANNEL)
        self.pointer = PointerState.clamped(x, y, visible)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": WIRE_POINTER,
            "x": self.pointer.x,
            "y": self.pointer.y,
            "visible": self.pointer.visible,
        }


ChannelMessage = Union[NavigateMessage, ExitMessage, SyncRequestMessage, PointerMessage]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def decode_message(wire: Any) -> Optional[ChannelMessage]:
    """
    Decode a wire dict into a channel message.

    Returns None for anything unrecognized or malformed; callers ignore those
    so that newer peers can add message kinds.
    """
    if not isinstance(wire, dict):
        return None

    kind = wire.get("type")
    if kind == WIRE_NAVIGATE:
        slide_index = wire.get("slideIndex")
        active_step = wire.get("activeStep")
        if not (_is_int(slide_index) and _is_int(active_step)):
            return None
        if slide_index < 0 or active_step < 0:
            return None
        return NavigateMessage(slide_index, active_step)

    if kind == WIRE_EXIT:
        return ExitMessage()

    if kind == WIRE_SYNC_REQUEST:
        return SyncRequestMessage()

    if kind == WIRE_POINTER:
        x, y, visible = wire.get("x"), wire.get("y"), wire.get("visible")
        if not (_is_number(x) and _is_number(y) and isinstance(visible, bool)):
            return None
        return PointerMessage(x, y, visible)

    return None
