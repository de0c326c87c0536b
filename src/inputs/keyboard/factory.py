import asyncio
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory
from .adapters.base import IKeyboardAdapter

log = get_logger().for_category(LogCategory.INPUT)


async def start_keyboard(event_bus: EventBus) -> None:
    """
    Start the first working keyboard adapter.

    Priority:
    1. STDIN (SSH / terminal)
    2. Dummy (fallback, API-only control)
    """

    adapters: list[IKeyboardAdapter] = []

    try:
        # termios/tty are Unix-only
        from .adapters.stdin import StdinKeyboardAdapter
        adapters.append(StdinKeyboardAdapter(event_bus))
    except ImportError as e:
        log.info("STDIN adapter not available", reason=str(e))

    from .adapters.dummy import DummyKeyboardAdapter
    adapters.append(DummyKeyboardAdapter(event_bus))

    for adapter in adapters:
        try:
            log.info("Starting keyboard adapter", adapter=adapter.__class__.__name__)
            await adapter.run()
            return

        except asyncio.CancelledError:
            raise

        except Exception as e:
            log.warn(
                "Keyboard adapter failed, falling back",
                adapter=adapter.__class__.__name__,
                reason=str(e)
            )

    log.error("No keyboard adapter could be started")
    raise RuntimeError("Keyboard input unavailable")
