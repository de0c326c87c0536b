"""
Dummy keyboard adapter for platforms without terminal key input (e.g., Windows,
or a driver controlled only through the API).
Does nothing - just keeps the input task alive.
"""

import asyncio
from typing import TYPE_CHECKING
from .base import IKeyboardAdapter

if TYPE_CHECKING:
    from services.event_bus import EventBus


class DummyKeyboardAdapter(IKeyboardAdapter):
    """
    Dummy keyboard adapter that does nothing.

    Used when no real keyboard adapter is available. Keys can still arrive
    through POST /presentation/keys/{key}.
    """

    def __init__(self, event_bus: "EventBus"):
        self.event_bus = event_bus

    async def run(self) -> None:
        """
        Main loop that does nothing.
        Just yields to event loop until cancelled.
        """
        while True:
            await asyncio.sleep(1.0)
