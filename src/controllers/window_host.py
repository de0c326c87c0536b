"""
Window Host - Surface the driver uses to manage the audience window

The driver never creates windows itself; it asks a WindowHost. The
in-process host spawns an AudienceController on the same ChannelHub with its
own EventBus and deck view, the same shape as a second browser window on the
same origin.
"""

from typing import Callable, Optional, Protocol, TYPE_CHECKING

from models.config import DEFAULT_CHANNEL_NAME
from services.event_bus import EventBus
from services.presentation_channel import ChannelHub
from utils.logger import get_category_logger, LogCategory

if TYPE_CHECKING:
    from controllers.audience_controller import AudienceController
    from engine.render_state import SlideRenderState
    from services.deck_service import DeckService

log = get_category_logger(LogCategory.PLAYBACK)


class WindowHost(Protocol):
    """Window and full-screen operations available to the driver"""

    @property
    def passenger_open(self) -> bool: ...

    @property
    def fullscreen(self) -> bool: ...

    async def open_passenger(self) -> None: ...

    def focus_passenger(self) -> None: ...

    def close_passenger(self) -> None: ...

    def request_fullscreen(self) -> None: ...

    def exit_fullscreen(self) -> None: ...


class InProcessWindowHost:
    """
    Runs the audience window as objects in this process.

    Args:
        hub: Channel hub shared with the driver
        deck_service: Driver's deck; the passenger gets an independent fork
        channel_name: Topic both windows open
        renderer: Optional callback for the passenger's render state
    """

    def __init__(
        self,
        hub: ChannelHub,
        deck_service: "DeckService",
        channel_name: str = DEFAULT_CHANNEL_NAME,
        renderer: Optional[Callable[["SlideRenderState"], None]] = None
    ):
        self.hub = hub
        self.deck_service = deck_service
        self.channel_name = channel_name
        self.renderer = renderer
        self.passenger: Optional["AudienceController"] = None
        self._fullscreen = False
        self.focus_count = 0

    @property
    def passenger_open(self) -> bool:
        return self.passenger is not None and not self.passenger.closed

    @property
    def fullscreen(self) -> bool:
        return self._fullscreen

    async def open_passenger(self) -> None:
        if self.passenger_open:
            self.focus_passenger()
            return

        from controllers.audience_controller import AudienceController

        self.passenger = AudienceController(
            hub=self.hub,
            deck=self.deck_service.fork(),
            event_bus=EventBus(name="passenger"),
            channel_name=self.channel_name,
            renderer=self.renderer,
        )
        await self.passenger.mount()
        log.info("Audience window opened", channel=self.channel_name)

    def focus_passenger(self) -> None:
        if self.passenger_open:
            self.focus_count += 1
            log.debug("Audience window focused")

    def close_passenger(self) -> None:
        if self.passenger_open:
            self.passenger.close()
            log.info("Audience window closed")
        self.passenger = None

    def request_fullscreen(self) -> None:
        self._fullscreen = True

    def exit_fullscreen(self) -> None:
        self._fullscreen = False
