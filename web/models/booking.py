"""Booking wizard models for the clinic booking web application."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from clinic.core.enums import BookingMethod


class SessionCreateRequest(BaseModel):
    """Start a booking session, optionally seeded from a doctor or specialty link."""

    specialty_id: Optional[int] = None
    doctor_id: Optional[int] = None


class SpecialtySelectRequest(BaseModel):
    specialty_id: int


class DoctorSelectRequest(BaseModel):
    doctor_id: int


class SlotSelectRequest(BaseModel):
    """Slot selection; ``time`` defaults to the day's first slot."""

    unique_id: str = Field(..., min_length=1)
    time: Optional[str] = None


class ContactUpdateRequest(BaseModel):
    """Contact fields; omitted fields keep their current value."""

    name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[str] = Field(default=None, max_length=254)
    notes: Optional[str] = Field(default=None, max_length=1000)


class SubmitRequest(BaseModel):
    channel: BookingMethod


class BookingSessionResponse(BaseModel):
    """Session id plus the wizard's current view."""

    session_id: str
    state: Dict[str, Any]


class WizardActionResponse(BaseModel):
    """Result of a wizard action.

    ``ok`` is False when a check rejected the action; ``error`` then carries
    the localized reason. The wizard state is returned either way.
    """

    session_id: str
    ok: bool
    error: Optional[Dict[str, Any]] = None
    state: Dict[str, Any]
