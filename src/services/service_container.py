"""Service Container - Dependency injection container for the driver window"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from managers.config_manager import ConfigManager
from services.deck_service import DeckService
from services.event_bus import EventBus
from services.preview_service import PreviewService
from services.presentation_channel import ChannelHub

if TYPE_CHECKING:
    from controllers.presentation_controller import PresentationController
    from controllers.keyboard_controller import KeyboardController
    from controllers.window_host import InProcessWindowHost


@dataclass
class ServiceContainer:
    """
    Centralized dependency injection container for the driver window.

    Aggregates the services and controllers that the API routes and the
    shutdown handlers need, so none of them reach into main_asyncio.

    Services included:
    - deck_service: Loaded deck, current slide, compiled steps
    - event_bus: Driver window's pub-sub bus
    - channel_hub: Process-wide presentation channel broker
    - preview_service: Editor preview timers

    Controllers included:
    - presentation: Playback state machine (driver)
    - keyboard: Key bindings → presentation operations
    - window_host: Audience window management

    Usage:
        services = ServiceContainer(
            config_manager=config,
            deck_service=deck_service,
            event_bus=event_bus,
            channel_hub=hub,
            preview_service=preview,
            presentation=presentation,
            keyboard=keyboard,
            window_host=window_host
        )

        @router.post("/presentation/advance")
        async def advance(services: ServiceContainer = Depends(get_services)):
            await services.presentation.advance()
    """

    config_manager: ConfigManager
    deck_service: DeckService
    event_bus: EventBus
    channel_hub: ChannelHub
    preview_service: PreviewService
    presentation: "PresentationController"
    keyboard: "KeyboardController"
    window_host: "InProcessWindowHost"
