"""Routes package for the clinic booking web application."""

from .booking import router as booking_router
from .bookings import router as bookings_router
from .directory import router as directory_router
from .health import router as health_router

__all__ = [
    "booking_router",
    "bookings_router",
    "directory_router",
    "health_router",
]
