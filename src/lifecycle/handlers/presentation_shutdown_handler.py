from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from controllers.presentation_controller import PresentationController
    from controllers.window_host import InProcessWindowHost
    from services.preview_service import PreviewService

log = get_logger().for_category(LogCategory.SHUTDOWN)


class PresentationShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for the playback side.

    Leaves a running presentation the normal way (Exit is broadcast so remote
    audience clients close too), closes any audience window still open, and
    cancels preview timers.

    Priority: 100 (first, while the channel and API are still up)
    """

    def __init__(
        self,
        presentation: "PresentationController",
        window_host: Optional["InProcessWindowHost"] = None,
        preview_service: Optional["PreviewService"] = None
    ):
        self.presentation = presentation
        self.window_host = window_host
        self.preview_service = preview_service

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        if self.presentation.is_presenting:
            log.info("Ending running presentation...")
            await self.presentation.exit()

        if self.window_host and self.window_host.passenger_open:
            self.window_host.close_passenger()

        if self.preview_service:
            self.preview_service.close()

        log.debug("Presentation shutdown complete")
