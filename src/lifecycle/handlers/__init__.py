from .presentation_shutdown_handler import PresentationShutdownHandler
from .api_server_shutdown_handler import APIServerShutdownHandler
from .all_tasks_cancellation_handler import AllTasksCancellationHandler

__all__ = [
    "PresentationShutdownHandler",
    "APIServerShutdownHandler",
    "AllTasksCancellationHandler",
]
