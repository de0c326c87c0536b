from __future__ import annotations
import asyncio
from typing import Any, Optional

import uvicorn

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


class APIServerWrapper:
    """
    Runs Uvicorn inside an asyncio task without Uvicorn's signal handlers
    interfering with the shutdown coordinator.

    Behaviour:
      - start() launches uvicorn.Server.serve() as a background task and waits
        on an internal stop event. start() returns only after stop() is called.
      - stop() sets the stop event, attempts graceful shutdown and forces exit
        if necessary.
    """

    def __init__(self, app: Any, host: str = "0.0.0.0", port: int = 8000):
        """
        Args:
            app: ASGI application (FastAPI app wrapped by socketio.ASGIApp)
            host: Bind address
            port: Bind port
        """
        self.app = app
        self.host = host
        self.port = port
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._stop_event: asyncio.Event = asyncio.Event()

    def _create_server(self) -> uvicorn.Server:
        """Create a uvicorn.Server instance with its own signal handlers disabled."""
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level="warning",
            access_log=False,
            server_header=False,
        )

        server = uvicorn.Server(config)
        server.install_signal_handlers = lambda: None  # type: ignore

        return server

    async def start(self, *, wait_started_timeout: float = 5.0) -> None:
        """
        Start uvicorn server in background and wait until stop() is called.

        Schedule as a tracked task (TaskCategory.API) for non-blocking start.
        """
        if self._serve_task is not None and not self._serve_task.done():
            raise RuntimeError("API server already started")

        self._server = self._create_server()
        self._stop_event.clear()

        log.info(f"🌐 Launching API server on http://{self.host}:{self.port}")

        self._serve_task = asyncio.create_task(self._server.serve(), name="UvicornServeInternal")

        loop = asyncio.get_running_loop()
        deadline = loop.time() + wait_started_timeout
        while loop.time() < deadline:
            if getattr(self._server, "started", False):
                log.info("🌐 API server reported started")
                break
            if self._serve_task.done():
                # serve() returned early: bind failure or config error
                self._serve_task.result()
                raise RuntimeError("API server exited during startup")
            await asyncio.sleep(0.05)

        try:
            await self._stop_event.wait()
        except asyncio.CancelledError:
            log.debug("start() cancelled externally, invoking stop()")
            await self.stop()
            raise

        log.debug("APIServerWrapper.start() exiting (stop_event set)")

    async def stop(self, *, shutdown_timeout: float = 2.0) -> None:
        """
        Stop the API server and release the port.

        Steps:
          1. set stop_event so start() unblocks
          2. set server.force_exit to avoid lifespan hang
          3. call server.shutdown() with timeout
          4. cancel serve task if still running
        """
        self._stop_event.set()

        if self._server is None:
            log.debug("API server stop() called but server was not running")
            return

        log.info("🌐 Stopping API server...")

        self._server.force_exit = True
        try:
            await asyncio.wait_for(self._server.shutdown(), timeout=shutdown_timeout)
            log.info("🌐 API server shutdown completed")
        except asyncio.TimeoutError:
            log.warn("🌐 API server shutdown timeout; cancelling serve task")

        if self._serve_task and not self._serve_task.done():
            self._serve_task.cancel()
            await asyncio.gather(self._serve_task, return_exceptions=True)

        self._server = None
        self._serve_task = None

        log.info("🌐 API server stopped and port released")

    @property
    def is_running(self) -> bool:
        """Return whether a uvicorn serve task is active."""
        return self._serve_task is not None and not self._serve_task.done()
