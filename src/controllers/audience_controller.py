"""
Audience window controller (passenger).

Mirrors the driver: it never navigates on its own and never broadcasts
navigation. On mount it asks the driver for the current position.

Channel handling:
- Navigate: apply slide (step resets to 0), then the step
- Pointer: mirror
- Exit: close this window
Keys: Escape leaves full-screen, or closes when not full-screen; F toggles it.
"""

from typing import Callable, List, Optional, TYPE_CHECKING

from engine.render_state import SlideRenderState, build_render_state
from models.domain.animation import AnimationStep
from models.domain.playback import PlaybackState, PointerState, HIDDEN_POINTER
from models.enums import WindowRole
from models.events import (
    EventType,
    KeyboardKeyPressEvent,
    NavigateMessage,
    PointerMessage,
    ExitMessage,
    SyncRequestMessage,
)
from services.event_bus import EventBus
from services.presentation_channel import ChannelHub, PresentationChannel
from models.config import DEFAULT_CHANNEL_NAME
from utils.logger import get_category_logger, LogCategory

if TYPE_CHECKING:
    from services.deck_service import DeckNavigator

log = get_category_logger(LogCategory.PLAYBACK)


class AudienceController:
    """
    Passenger side of the paired-window protocol.

    Usage:
        audience = AudienceController(hub, deck.fork(), EventBus("passenger"))
        await audience.mount()   # posts SyncRequest
    """

    def __init__(
        self,
        hub: ChannelHub,
        deck: "DeckNavigator",
        event_bus: EventBus,
        channel_name: str = DEFAULT_CHANNEL_NAME,
        renderer: Optional[Callable[[SlideRenderState], None]] = None
    ) -> None:
        self.deck = deck
        self.event_bus = event_bus
        self.renderer = renderer
        self.channel = PresentationChannel(hub, event_bus, WindowRole.PASSENGER, channel_name)

        self._active_step = 0
        self.pointer: PointerState = HIDDEN_POINTER
        self.fullscreen = True
        self.closed = False

        self.event_bus.subscribe(EventType.CHANNEL_NAVIGATE, self._on_navigate)
        self.event_bus.subscribe(EventType.CHANNEL_POINTER, self._on_pointer)
        self.event_bus.subscribe(EventType.CHANNEL_EXIT, self._on_exit)
        self.event_bus.subscribe(
            EventType.KEYBOARD_KEYPRESS,
            self._on_key,
            filter_fn=lambda e: not self.closed
        )

    # ============================================================
    # Lifecycle
    # ============================================================

    async def mount(self) -> None:
        """Start receiving and ask the driver where it is"""
        self.channel.start()
        self.channel.post(SyncRequestMessage())
        self._render()
        log.debug("Audience mounted, sync requested")

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.fullscreen = False
        self.channel.close()
        log.info("Audience window closing")

    # ============================================================
    # State
    # ============================================================

    @property
    def state(self) -> PlaybackState:
        return PlaybackState(self.deck.current_slide_index, self._active_step)

    @property
    def steps(self) -> List[AnimationStep]:
        return self.deck.steps_for(self.deck.current_slide_index)

    def render_state(self) -> SlideRenderState:
        index = self.deck.current_slide_index
        return build_render_state(self.deck.get_slide(index), self.steps, self._active_step)

    def _render(self) -> None:
        if self.renderer and self.deck.slide_count:
            self.renderer(self.render_state())

    # ============================================================
    # Channel handlers
    # ============================================================

    def _on_navigate(self, message: NavigateMessage) -> None:
        if self.closed:
            return
        if not 0 <= message.slide_index < self.deck.slide_count:
            log.debug("Navigate to unknown slide ignored", slide=message.slide_index)
            return

        if message.slide_index != self.deck.current_slide_index:
            self.deck.set_current_slide(message.slide_index)
            self._active_step = 0

        self._active_step = min(message.active_step, len(self.steps))
        log.debug("Audience navigated", slide=message.slide_index, step=self._active_step)
        self._render()

    def _on_pointer(self, message: PointerMessage) -> None:
        self.pointer = message.pointer

    def _on_exit(self, message: ExitMessage) -> None:
        log.info("Driver ended the presentation")
        self.close()

    # ============================================================
    # Keys
    # ============================================================

    def _on_key(self, event: KeyboardKeyPressEvent) -> None:
        key = event.key
        if key == "ESCAPE":
            if self.fullscreen:
                self.fullscreen = False
            else:
                self.close()
        elif key in ("f", "F"):
            self.fullscreen = not self.fullscreen
