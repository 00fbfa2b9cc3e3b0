"""FastAPI application factory."""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router, shorten_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


def create_app(
    service_instance,
    config,
    logger: logging.Logger = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: URLShortenerService, may be None until lifespan sets it
        config: Configuration instance
        logger: Logger for unhandled errors

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="QuickLink",
        description="In-memory URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.service = service_instance
    app.state.config = config
    app.state.logger = logger or logging.getLogger("quicklink")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        request.app.state.logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "message": "Internal server error"},
        )

    # Order matters: /{short_code} in the web router catches everything else.
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(shorten_router, prefix="/api", tags=["API"])
    app.include_router(shorten_router, tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
