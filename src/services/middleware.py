"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
Can modify events, block events, or log/validate events.
"""

from models.events import Event, EventType
from utils.logger import get_logger, LogCategory
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.EVENT)

# Pointer moves arrive at mouse-move rate
_QUIET_TYPES = {EventType.CHANNEL_POINTER}


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source_str = Serializer.enum_to_str(event.source)
    data = event.to_data()

    if event.type in _QUIET_TYPES:
        log.debug(f"Event: {event.type.name} from {source_str} | {data}")
    else:
        log.info(f"Event: {event.type.name} from {source_str} | {data}")
    return event
