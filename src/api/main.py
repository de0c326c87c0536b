"""
FastAPI Application Factory

Assembles the remote-control API of the driver window:
- Routes (presentation, animations, preview, system) under /api/v1
- Exception handlers (domain errors -> standard error envelope)
- CORS

The factory pattern keeps the app testable: tests build an app, attach a
ServiceContainer with set_service_container() and drive it with TestClient.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import presentation, animations, preview, system
from api.middleware.error_handler import register_exception_handlers
from utils.logger import get_logger
from models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("FastAPI app starting up")
    yield
    log.info("FastAPI app shutting down")


def create_app(
    title: str = "Deckode Presenter",
    description: str = "Remote control for presentation playback",
    version: str = "1.0.0",
    docs_enabled: bool = True,
    cors_origins: Optional[list[str]] = None
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        title: API title (shown in docs)
        description: API description
        version: API version
        docs_enabled: Enable /docs and /redoc
        cors_origins: CORS allowed origins (default: local dev servers)

    Returns:
        Configured FastAPI application ready to run
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan
    )

    log.info(f"Creating FastAPI app: {title} v{version}")

    # =========================================================================
    # CORS Configuration
    # =========================================================================

    if cors_origins is None:
        cors_origins = [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    log.debug(f"CORS enabled for origins: {cors_origins}")

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routes
    # =========================================================================

    for router in (presentation.router, animations.router, preview.router, system.router):
        app.include_router(router, prefix="/api/v1")

    log.debug("Routes registered: presentation, animations, preview, system (/api/v1)")

    @app.get("/", include_in_schema=False)
    async def root():
        return JSONResponse(
            {
                "message": title,
                "docs": "/docs",
                "health": "/api/v1/system/health"
            }
        )

    return app
