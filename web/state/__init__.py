"""State management for the clinic booking web application."""

from .sessions import BookingSession, BookingSessionRegistry

__all__ = ["BookingSession", "BookingSessionRegistry"]
