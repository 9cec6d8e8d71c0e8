"""FastAPI application for the clinic booking service."""

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.exceptions import HTTPException

from clinic import __version__
from clinic.constants import Timeouts
from clinic.core.config import ClinicSettings, get_settings
from clinic.core.exceptions import ClinicError
from clinic.services.api import ClinicApiClient
from web.cors import validate_cors_origins
from web.exception_handlers import (
    clinic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from web.routes import booking_router, bookings_router, directory_router, health_router
from web.state.sessions import BookingSessionRegistry

# How often expired booking sessions are swept
SESSION_PURGE_INTERVAL_SECONDS = 60


async def _purge_sessions_periodically(registry: BookingSessionRegistry) -> None:
    while True:
        await asyncio.sleep(SESSION_PURGE_INTERVAL_SECONDS)
        try:
            await registry.purge_expired()
        except Exception as e:
            logger.error(f"Session purge failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup and shutdown.

    Starts the clinic API client's HTTP session and the session sweeper,
    and closes both on shutdown.
    """
    logger.info("Clinic booking API starting up...")
    client = app.state.api_client
    await client.start()
    purge_task = asyncio.create_task(_purge_sessions_periodically(app.state.sessions))

    yield

    logger.info("Clinic booking API shutting down...")
    purge_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await purge_task

    try:
        await asyncio.wait_for(client.close(), timeout=Timeouts.SHUTDOWN_SECONDS)
        logger.info("Clinic API client closed")
    except asyncio.TimeoutError:
        logger.error(f"Clinic API client close timed out after {Timeouts.SHUTDOWN_SECONDS}s")


def create_app(
    settings: Optional[ClinicSettings] = None,
    api_client: Optional[Any] = None,
) -> FastAPI:
    """
    Factory function to create FastAPI application instance.

    Args:
        settings: Application settings (defaults to the singleton)
        api_client: Clinic API client; built from settings when omitted

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()
    _is_dev = not settings.is_production()

    app = FastAPI(
        title="Clinic Booking API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if _is_dev else None,
        redoc_url="/redoc" if _is_dev else None,
        openapi_url="/openapi.json" if _is_dev else None,
        description="Specialty and doctor directory plus the appointment booking wizard.",
        openapi_tags=[
            {"name": "directory", "description": "Specialties and doctors"},
            {"name": "booking", "description": "Booking wizard sessions"},
            {"name": "bookings", "description": "Stored bookings lookup and cancellation"},
            {"name": "health", "description": "Service health"},
        ],
    )

    app.state.settings = settings
    app.state.api_client = api_client or ClinicApiClient.from_settings(settings)
    app.state.sessions = BookingSessionRegistry(ttl_seconds=settings.session_ttl_seconds)

    allowed_origins = validate_cors_origins(settings.get_cors_origins(), settings.env)
    if not allowed_origins and settings.is_production():
        raise RuntimeError(
            "CRITICAL: No valid CORS origins configured for production. "
            "Set CORS_ALLOWED_ORIGINS in .env (e.g., 'https://yourclinic.com')."
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Accept", "Accept-Language", "Content-Type"],
        max_age=3600,
    )

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ClinicError, clinic_exception_handler)

    app.include_router(health_router)
    app.include_router(directory_router)
    app.include_router(booking_router)
    app.include_router(bookings_router)

    return app
