"""Pydantic models for the clinic booking web application."""

from .booking import (
    BookingSessionResponse,
    ContactUpdateRequest,
    DoctorSelectRequest,
    SessionCreateRequest,
    SlotSelectRequest,
    SpecialtySelectRequest,
    SubmitRequest,
    WizardActionResponse,
)
from .directory import DoctorResponse, SpecialtyResponse

__all__ = [
    # Directory models
    "DoctorResponse",
    "SpecialtyResponse",
    # Booking models
    "BookingSessionResponse",
    "ContactUpdateRequest",
    "DoctorSelectRequest",
    "SessionCreateRequest",
    "SlotSelectRequest",
    "SpecialtySelectRequest",
    "SubmitRequest",
    "WizardActionResponse",
]
