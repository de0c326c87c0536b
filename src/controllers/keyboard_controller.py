"""
Keyboard controller - maps driver key presses to presentation operations.

Default bindings (presenter.yaml, keys:):
- [ESCAPE]: Exit presentation
- [RIGHT] / [SPACE]: Advance
- [LEFT]: Go back
- [P]: Toggle presenter / audience view
- [W]: Open (or focus) the audience window
- [L]: Toggle laser pointer
- anything else: offered to the current onKey step, case-sensitive
"""

from typing import List, Optional, TYPE_CHECKING

from models.config import KeyBindings
from models.events import EventType, KeyboardKeyPressEvent
from utils.logger import get_category_logger, LogCategory

if TYPE_CHECKING:
    from controllers.presentation_controller import PresentationController
    from services.event_bus import EventBus

log = get_category_logger(LogCategory.INPUT)


def _matches(key: str, bindings: List[str]) -> bool:
    """Named keys match exactly; single letters match either case"""
    for bound in bindings:
        if key == bound:
            return True
        if len(bound) == 1 and len(key) == 1 and key.lower() == bound.lower():
            return True
    return False


class KeyboardController:
    """
    Subscribes to KEYBOARD_KEYPRESS on the driver's EventBus.

    Keys are only acted on while a presentation runs.
    """

    def __init__(
        self,
        presentation: "PresentationController",
        event_bus: "EventBus",
        bindings: Optional[KeyBindings] = None
    ) -> None:
        self.presentation = presentation
        self.event_bus = event_bus
        self.bindings = bindings or KeyBindings()

        self.event_bus.subscribe(
            EventType.KEYBOARD_KEYPRESS,
            self._handle_keyboard_event,
            priority=10,
            filter_fn=lambda e: self.presentation.is_presenting
        )
        log.debug("KeyboardController initialized")

    async def _handle_keyboard_event(self, event: KeyboardKeyPressEvent) -> None:
        await self.handle_key(event.key)

    async def handle_key(self, key: str) -> str:
        """
        Dispatch one key; returns the action name taken ("none" if ignored)

        Args:
            key: Normalized key name ("RIGHT", "ESCAPE") or printable character
        """
        if not self.presentation.is_presenting:
            return "none"

        b = self.bindings
        p = self.presentation

        if _matches(key, b.exit):
            log.info("Exit requested (key)", key=key)
            await p.exit()
            return "exit"
        if _matches(key, b.advance):
            await p.advance()
            return "advance"
        if _matches(key, b.back):
            await p.go_back()
            return "back"
        if _matches(key, b.toggle_view):
            p.toggle_view()
            return "toggle_view"
        if _matches(key, b.open_window):
            await p.open_window()
            return "open_window"
        if _matches(key, b.toggle_pointer):
            p.toggle_pointer()
            return "toggle_pointer"

        if await p.on_key(key):
            log.debug("onKey step advanced", key=key)
            return "on_key"
        return "none"
