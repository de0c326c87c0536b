"""Input events (keyboard)"""

from dataclasses import dataclass
from typing import List, Optional

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource, KeyboardSource


@dataclass(init=False)
class KeyboardKeyPressEvent(Event):
    """Keyboard key press event"""
    key: str
    modifiers: List[str]
    keyboard: KeyboardSource

    def __init__(self, key: str, modifiers: Optional[List[str]] = None, keyboard: KeyboardSource = KeyboardSource.STDIN):
        """
        Args:
            key: Printable character as typed ('v', 'V') or a named key
                 ('RIGHT', 'LEFT', 'SPACE', 'ESCAPE', 'ENTER', ...)
            modifiers: List of modifier keys (e.g., ['CTRL'])
            keyboard: Where the key press came from
        """
        super().__init__(
            type=EventType.KEYBOARD_KEYPRESS,
            source=EventSource.INPUT,
        )
        self.key = key
        self.modifiers = modifiers or []
        self.keyboard = keyboard
