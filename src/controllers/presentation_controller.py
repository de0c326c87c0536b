"""
Presentation controller (driver) - playback state machine.

States: IDLE -> PRESENTING(slide_index, active_step) -> IDLE

Owns navigation. Every local (slide, step) change is broadcast to the audience
window as Navigate, except a change that came from a received Navigate: the
receive handler arms a skip flag which the next state-change check consumes.
The flag is only armed when the received position differs from the local
one, so a redundant Navigate cannot swallow the next real change.

Architecture:
- Subscribes to CHANNEL_NAVIGATE / CHANNEL_EXIT / CHANNEL_SYNC_REQUEST on the
  window's EventBus (active only while presenting)
- Opens its channel endpoint on start(), closes it on exit
- Asks the WindowHost for the audience window and full-screen
- Publishes PlaybackStateChanged / PresentationStarted / PresentationEnded
"""

from typing import Callable, List, Optional, TYPE_CHECKING

from engine.notes import parse_notes
from engine.render_state import SlideRenderState, build_render_state
from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.config import PresenterConfig, DEFAULT_CHANNEL_NAME
from models.domain.animation import AnimationStep
from models.domain.playback import PlaybackState, PointerState, NoteSegment, HIDDEN_POINTER
from models.enums import PlaybackMode, ViewMode, WindowRole
from models.events import (
    EventType,
    NavigateMessage,
    ExitMessage,
    SyncRequestMessage,
    PointerMessage,
    PlaybackStateChangedEvent,
    PresentationStartedEvent,
    PresentationEndedEvent,
)
from services.elapsed_timer import ElapsedTimer
from services.event_bus import EventBus
from services.presentation_channel import ChannelHub, PresentationChannel
from utils.logger import get_category_logger, LogCategory

if TYPE_CHECKING:
    from controllers.window_host import WindowHost
    from services.deck_service import DeckNavigator

log = get_category_logger(LogCategory.PLAYBACK)


class PresentationController:
    """
    Driver side of the paired-window protocol and the playback state machine.

    All operations are no-ops while IDLE.

    Usage:
        controller = PresentationController(deck_service, hub, event_bus, window_host)

        await controller.start()       # opens audience window, timer, channel
        await controller.advance()     # next step, or next slide at step 0
        await controller.on_key("v")   # advances only if the current step is onKey "v"
        await controller.exit()        # broadcasts Exit, back to IDLE
    """

    def __init__(
        self,
        deck: "DeckNavigator",
        hub: ChannelHub,
        event_bus: EventBus,
        window_host: Optional["WindowHost"] = None,
        config: Optional[PresenterConfig] = None,
        channel_name: str = DEFAULT_CHANNEL_NAME,
        renderer: Optional[Callable[[SlideRenderState], None]] = None,
        timer: Optional[ElapsedTimer] = None
    ) -> None:
        self.deck = deck
        self.hub = hub
        self.event_bus = event_bus
        self.window_host = window_host
        self.config = config or PresenterConfig()
        self.channel_name = channel_name
        self.renderer = renderer
        self.timer = timer or ElapsedTimer(self.config.elapsed_tick_s)

        self.mode = PlaybackMode.IDLE
        self.view_mode = ViewMode.PRESENTER
        self.channel: Optional[PresentationChannel] = None

        self._active_step = 0
        self._skip_next_broadcast = False
        self._last_state: Optional[PlaybackState] = None

        # Laser pointer
        self.pointer_active = False
        self.pointer: PointerState = HIDDEN_POINTER

        self.event_bus.subscribe(EventType.CHANNEL_NAVIGATE, self._on_navigate, filter_fn=self._while_presenting)
        self.event_bus.subscribe(EventType.CHANNEL_EXIT, self._on_exit, filter_fn=self._while_presenting)
        self.event_bus.subscribe(EventType.CHANNEL_SYNC_REQUEST, self._on_sync_request, filter_fn=self._while_presenting)

        log.debug("PresentationController initialized", channel=channel_name)

    # ============================================================
    # State
    # ============================================================

    @property
    def is_presenting(self) -> bool:
        return self.mode == PlaybackMode.PRESENTING

    def _while_presenting(self, event) -> bool:
        return self.is_presenting

    @property
    def active_step(self) -> int:
        return self._active_step

    @property
    def slide_index(self) -> int:
        return self.deck.current_slide_index

    @property
    def state(self) -> PlaybackState:
        return PlaybackState(self.deck.current_slide_index, self._active_step)

    @property
    def steps(self) -> List[AnimationStep]:
        return self.deck.steps_for(self.deck.current_slide_index)

    @property
    def note_segments(self) -> List[NoteSegment]:
        return parse_notes(self.deck.get_slide(self.deck.current_slide_index).notes)

    @property
    def next_preview_label(self) -> str:
        steps = self.steps
        if self._active_step < len(steps):
            return f"Next Step ({self._active_step + 1}/{len(steps)})"
        if self.deck.current_slide_index < self.deck.slide_count - 1:
            return "Next Slide"
        return "End of presentation"

    def render_state(self) -> SlideRenderState:
        return build_render_state(
            self.deck.get_slide(self.deck.current_slide_index),
            self.steps,
            self._active_step,
            on_advance=self.request_advance
        )

    # ============================================================
    # Lifecycle
    # ============================================================

    async def start(self) -> None:
        """Enter PRESENTING at the current slide, step 0"""
        if self.is_presenting:
            log.debug("start() ignored: already presenting")
            return
        if self.deck.slide_count == 0:
            log.warn("start() ignored: deck has no slides")
            return

        self._active_step = 0
        self._skip_next_broadcast = False
        self._last_state = None
        self.view_mode = ViewMode.PRESENTER
        self.pointer_active = False
        self.pointer = HIDDEN_POINTER
        self.mode = PlaybackMode.PRESENTING

        self.channel = PresentationChannel(self.hub, self.event_bus, WindowRole.DRIVER, self.channel_name)
        self.channel.start()

        if self.window_host:
            if self.config.open_passenger_on_start:
                await self.window_host.open_passenger()
            if self.config.request_fullscreen:
                self.window_host.request_fullscreen()

        self.timer.start()

        log.info("Presentation started", slide=self.slide_index, slides=self.deck.slide_count)
        await self.event_bus.publish(PresentationStartedEvent(self.slide_index))
        await self._state_changed()

    async def exit(self) -> None:
        """Broadcast Exit, close the audience window, return to IDLE"""
        if not self.is_presenting:
            return

        if self.channel:
            self.channel.post(ExitMessage())
        if self.window_host:
            self.window_host.close_passenger()
        await self._leave(remote=False)

    async def _leave(self, remote: bool) -> None:
        if self.window_host:
            self.window_host.exit_fullscreen()
        self.timer.stop()
        if self.channel:
            self.channel.close()
            self.channel = None

        self.mode = PlaybackMode.IDLE
        self._skip_next_broadcast = False
        self.pointer_active = False
        self.pointer = HIDDEN_POINTER

        log.info("Presentation ended", remote=remote, slide=self.slide_index)
        await self.event_bus.publish(PresentationEndedEvent(remote=remote))

    # ============================================================
    # Navigation
    # ============================================================

    async def advance(self) -> None:
        """Next step; past the last step, next slide at step 0; at the very end, nothing"""
        if not self.is_presenting:
            return

        if self._active_step < len(self.steps):
            self._active_step += 1
        elif self.deck.next_slide():
            self._active_step = 0
        else:
            log.debug("advance() at end of presentation")
            return

        await self._state_changed()

    async def go_back(self) -> None:
        """Previous step; at step 0, previous slide at step 0"""
        if not self.is_presenting:
            return

        if self._active_step > 0:
            self._active_step -= 1
        elif self.deck.prev_slide():
            self._active_step = 0
        else:
            return

        await self._state_changed()

    async def on_key(self, char: str) -> bool:
        """Advance if the current step waits for exactly this key; returns whether it did"""
        if not self.is_presenting:
            return False

        steps = self.steps
        if self._active_step < len(steps) and steps[self._active_step].matches_key(char):
            await self.advance()
            return True
        return False

    def request_advance(self) -> None:
        """Click-to-advance for renderers (sync callback)"""
        create_tracked_task(self.advance(), category=TaskCategory.SYSTEM, description="Click advance")

    def _set_slide(self, index: int) -> None:
        if index != self.deck.current_slide_index:
            self.deck.set_current_slide(index)
            self._active_step = 0

    async def _state_changed(self) -> None:
        """Broadcast Navigate for a new (slide, step) unless it was received"""
        state = self.state
        if state == self._last_state:
            return
        self._last_state = state

        remote = self._skip_next_broadcast
        if remote:
            self._skip_next_broadcast = False
        else:
            self.post_navigate()

        log.debug(
            "Playback state changed",
            slide=state.slide_index,
            step=f"{state.active_step}/{len(self.steps)}",
            remote=remote
        )
        if self.renderer:
            self.renderer(self.render_state())
        await self.event_bus.publish(
            PlaybackStateChangedEvent(state.slide_index, state.active_step, remote=remote)
        )

    def post_navigate(self) -> None:
        if self.channel:
            self.channel.post(NavigateMessage(self.slide_index, self._active_step))

    # ============================================================
    # Channel handlers
    # ============================================================

    async def _on_navigate(self, message: NavigateMessage) -> None:
        if not 0 <= message.slide_index < self.deck.slide_count:
            log.debug("Navigate to unknown slide ignored", slide=message.slide_index)
            return

        if message.slide_index == self.deck.current_slide_index:
            target_step = min(message.active_step, len(self.steps))
        else:
            target_step = min(message.active_step, len(self.deck.steps_for(message.slide_index)))

        if PlaybackState(message.slide_index, target_step) == self.state:
            return

        self._skip_next_broadcast = True
        self._set_slide(message.slide_index)
        self._active_step = target_step
        await self._state_changed()

    async def _on_exit(self, message: ExitMessage) -> None:
        log.info("Audience window ended the presentation")
        if self.window_host:
            self.window_host.close_passenger()
        await self._leave(remote=True)

    def _on_sync_request(self, message: SyncRequestMessage) -> None:
        log.debug("Sync requested", slide=self.slide_index, step=self._active_step)
        self.post_navigate()

    # ============================================================
    # Presenter features
    # ============================================================

    def toggle_view(self) -> ViewMode:
        if not self.is_presenting:
            return self.view_mode
        self.view_mode = ViewMode.AUDIENCE if self.view_mode == ViewMode.PRESENTER else ViewMode.PRESENTER
        log.debug("View mode toggled", view=self.view_mode.name)
        return self.view_mode

    async def open_window(self) -> None:
        """Open the audience window, or focus it if already open"""
        if not self.is_presenting or not self.window_host:
            return
        if self.window_host.passenger_open:
            self.window_host.focus_passenger()
        else:
            await self.window_host.open_passenger()

    def toggle_pointer(self) -> bool:
        if not self.is_presenting:
            return False
        self.pointer_active = not self.pointer_active
        if not self.pointer_active:
            self._post_hidden_pointer()
        log.debug("Laser pointer toggled", active=self.pointer_active)
        return self.pointer_active

    def move_pointer(self, x: float, y: float) -> None:
        """Pointer moved over the slide (slide-relative coordinates)"""
        if not self.is_presenting or not self.pointer_active:
            return
        message = PointerMessage(x, y, True)
        self.pointer = message.pointer
        if self.channel:
            self.channel.post(message)

    def hide_pointer(self) -> None:
        """Pointer left the slide area"""
        if self.is_presenting and self.pointer_active:
            self._post_hidden_pointer()

    def _post_hidden_pointer(self) -> None:
        self.pointer = HIDDEN_POINTER
        if self.channel:
            self.channel.post(PointerMessage(0, 0, False))

    @property
    def elapsed(self) -> str:
        return self.timer.formatted

    async def shutdown(self) -> None:
        """Teardown: leave the presentation if one is running"""
        if self.is_presenting:
            await self.exit()
