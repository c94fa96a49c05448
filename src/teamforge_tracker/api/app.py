"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from teamforge_tracker.api.dependencies import close_provider, init_provider
from teamforge_tracker.api.models import APIResponse
from teamforge_tracker.api.routes import categories, issues, provider
from teamforge_tracker.config import find_config, load_config
from teamforge_tracker.logging import describe_remote_error
from teamforge_tracker.provider import (
    REMOTE_ERRORS,
    CollabNetTrackerProvider,
    InvalidArgumentError,
    ProviderConfigurationError,
    ServiceUnavailableError,
    TrackerError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger("teamforge_tracker.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    tracker = app.state.provider
    if tracker is None:
        config_path = app.state.config_path or find_config()
        tracker = CollabNetTrackerProvider.from_config(load_config(config_path))
    init_provider(tracker)
    logger.info("Serving %s at %s", tracker.NAME, tracker.base_url)

    yield
    # Shutdown
    close_provider()
    logger.info("Provider closed")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Map provider errors and TeamForge request failures to HTTP responses."""

    @app.exception_handler(ServiceUnavailableError)
    async def service_unavailable_handler(
        _request: Request, exc: ServiceUnavailableError
    ) -> JSONResponse:
        return _error(
            status.HTTP_503_SERVICE_UNAVAILABLE, f"TeamForge is not available: {exc}"
        )

    @app.exception_handler(ProviderConfigurationError)
    async def configuration_error_handler(
        _request: Request, exc: ProviderConfigurationError
    ) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(
        _request: Request, exc: InvalidArgumentError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(_request: Request, exc: TrackerError) -> JSONResponse:
        logger.error("Unhandled tracker error: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    async def remote_error_handler(_request: Request, exc: Exception) -> JSONResponse:
        reason = describe_remote_error(exc)
        logger.warning("TeamForge request failed: %s", reason)
        return _error(status.HTTP_502_BAD_GATEWAY, f"TeamForge request failed: {reason}")

    for error_type in REMOTE_ERRORS:
        app.add_exception_handler(error_type, remote_error_handler)


def create_app(
    config_path: str | Path | None = None,
    tracker: CollabNetTrackerProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config_path: teamforge.yaml to load on startup (auto-detected if not specified)
        tracker: Ready-made provider; skips configuration loading when given
    """
    app = FastAPI(
        title="TeamForge Tracker API",
        description="REST API for managing CollabNet TeamForge tracker issues",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.config_path = config_path
    app.state.provider = tracker

    add_exception_handlers(app)

    # Include routers
    app.include_router(provider.router, prefix="/api/v1")
    app.include_router(categories.router, prefix="/api/v1")
    app.include_router(issues.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
