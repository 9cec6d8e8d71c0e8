"""Liveness route."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from clinic import __version__
from web.dependencies import get_session_registry
from web.state.sessions import BookingSessionRegistry

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(registry: BookingSessionRegistry = Depends(get_session_registry)) -> dict:
    """Report liveness and the number of live booking sessions."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "active_sessions": len(registry),
    }
