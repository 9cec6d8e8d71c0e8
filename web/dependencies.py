"""Dependency injection functions for the clinic booking web application."""

from fastapi import Depends, Request

from clinic.core.config import ClinicSettings
from clinic.core.logger import session_id_ctx
from clinic.services.api import ClinicApiClient
from web.state.sessions import BookingSession, BookingSessionRegistry


def get_app_settings(request: Request) -> ClinicSettings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_api_client(request: Request) -> ClinicApiClient:
    """Shared clinic API client, started by the application lifespan."""
    return request.app.state.api_client


def get_session_registry(request: Request) -> BookingSessionRegistry:
    return request.app.state.sessions


async def get_booking_session(
    session_id: str,
    registry: BookingSessionRegistry = Depends(get_session_registry),
) -> BookingSession:
    """
    Resolve the booking session in the path and tag the request's logs with it.

    Raises:
        SessionNotFoundError: If unknown or expired (rendered as 404)
    """
    session = await registry.get(session_id)
    session_id_ctx.set(session.session_id)
    return session
