"""
main_asyncio.py — Application entry point for the presenter
-----------------------------------------------------------

Responsible for:
- loading configuration and the deck
- wiring services and controllers (Dependency Injection)
- starting keyboard input and the API server
- graceful shutdown on Ctrl +C or fatal errors
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX
# ---------------------------------------------------------------------------

if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import argparse
import asyncio
from typing import List, Optional

from api.dependencies import set_service_container
from api.main import create_app
from api.socketio.channel_bridge import register_channel_bridge
from api.socketio.server import create_socketio_server, wrap_app_with_socketio
from controllers import InProcessWindowHost, KeyboardController, PresentationController
from engine.render_state import SlideRenderState
from engine.notes import render_notes
from inputs.keyboard import start_keyboard
from lifecycle import ShutdownCoordinator
from lifecycle.api_server_wrapper import APIServerWrapper
from lifecycle.handlers import (
    AllTasksCancellationHandler,
    APIServerShutdownHandler,
    PresentationShutdownHandler,
)
from lifecycle.task_registry import create_tracked_task, TaskCategory
from managers import ConfigManager
from models.enums import LogCategory, LogLevel
from models.events import EventType
from services import ChannelHub, DeckService, EventBus, PreviewService, ServiceContainer
from services.middleware import log_middleware
from utils.logger import get_logger, configure_logger

# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------

log = get_logger().for_category(LogCategory.SYSTEM)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Present a deck with a paired audience window")
    parser.add_argument("--deck", required=True, help="Path to the deck JSON document")
    parser.add_argument("--config", default="config/config.yaml", help="Main config file (relative to src/)")
    parser.add_argument("--no-api", action="store_true", help="Do not start the REST / Socket.IO server")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    return parser.parse_args(argv)


def log_render_state(state: SlideRenderState) -> None:
    """Console stand-in for a slide renderer"""
    log.info(
        f"▶ Slide {state.slide.id}",
        step=f"{state.active_step}/{len(state.steps)}",
        hidden=len(state.hidden_targets()),
    )


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def main(argv: Optional[List[str]] = None):
    """Main async entry point (dependency injection and event loop startup)."""
    args = parse_args(argv)
    configure_logger(LogLevel.DEBUG if args.debug else LogLevel.INFO)

    log.info("Starting presenter...")

    # ========================================================================
    # 1. CONFIGURATION & DECK
    # ========================================================================

    log.info("Loading configuration...")
    config_manager = ConfigManager(config_path=args.config)
    config_manager.load()
    playback_config = config_manager.playback
    presenter_config = config_manager.presenter

    log.info("Loading deck...", path=args.deck)
    deck_service = await DeckService.load(args.deck, playback_config.default_duration_ms)

    # ========================================================================
    # 2. SERVICES
    # ========================================================================

    event_bus = EventBus(name="driver")
    event_bus.add_middleware(log_middleware)

    channel_hub = ChannelHub()
    preview_service = PreviewService(playback_config, event_bus)

    window_host = InProcessWindowHost(
        hub=channel_hub,
        deck_service=deck_service,
        channel_name=playback_config.channel_name
    )

    # ========================================================================
    # 3. CONTROLLERS
    # ========================================================================

    presentation = PresentationController(
        deck=deck_service,
        hub=channel_hub,
        event_bus=event_bus,
        window_host=window_host,
        config=presenter_config,
        channel_name=playback_config.channel_name,
        renderer=log_render_state
    )
    keyboard = KeyboardController(presentation, event_bus, presenter_config.keys)

    services = ServiceContainer(
        config_manager=config_manager,
        deck_service=deck_service,
        event_bus=event_bus,
        channel_hub=channel_hub,
        preview_service=preview_service,
        presentation=presentation,
        keyboard=keyboard,
        window_host=window_host
    )
    set_service_container(services)
    log.info("Service container registered with API")

    # ========================================================================
    # 4. KEYBOARD
    # ========================================================================

    log.info("Initializing keyboard input...")
    keyboard_task = create_tracked_task(
        start_keyboard(event_bus),
        category=TaskCategory.INPUT,
        description="Keyboard input adapter"
    )

    # ========================================================================
    # 5. API SERVER
    # ========================================================================

    api_wrapper: Optional[APIServerWrapper] = None
    api_task = None
    bridge = None
    api_config = config_manager.api

    if api_config.enabled and not args.no_api:
        app = create_app(cors_origins=api_config.cors_origins)
        sio = create_socketio_server(api_config.cors_origins)
        bridge = register_channel_bridge(sio, channel_hub, playback_config.channel_name)

        api_wrapper = APIServerWrapper(wrap_app_with_socketio(app, sio), api_config.host, api_config.port)
        api_task = create_tracked_task(
            api_wrapper.start(),
            category=TaskCategory.API,
            description="FastAPI/Uvicorn Server"
        )

    # ========================================================================
    # 6. PRESENT
    # ========================================================================

    await presentation.start()
    if presentation.is_presenting:
        for text, highlighted in render_notes(deck_service.current_slide.notes, presentation.active_step):
            log.debug(("» " if highlighted else "  ") + text)

    # ============================================================
    # 7. SHUTDOWN COORDINATOR
    # ============================================================

    log.info("Initializing shutdown system...")

    coordinator = ShutdownCoordinator()
    coordinator.register(PresentationShutdownHandler(presentation, window_host, preview_service))
    if api_wrapper:
        coordinator.register(APIServerShutdownHandler(api_wrapper))
    coordinator.register(AllTasksCancellationHandler())

    loop = asyncio.get_running_loop()
    coordinator.setup_signal_handlers(loop)

    async def on_presentation_ended(event):
        coordinator.request_shutdown("presentation ended")

    event_bus.subscribe(EventType.PRESENTATION_ENDED, on_presentation_ended)

    log.info("🏁 Presenting. Waiting for exit...")

    await coordinator.wait_for_shutdown()
    if bridge:
        bridge.close()

    await coordinator.shutdown_all()
    set_service_container(None)
    log.info("👋 Presenter shut down cleanly.")


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
def cli() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except Exception as e:
        log.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
