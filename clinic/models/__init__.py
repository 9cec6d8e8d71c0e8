"""Domain models for the clinic booking service."""

from .booking import (
    AvailabilityState,
    BookingDraft,
    BookingResult,
    DayInfo,
    HandoffContext,
    SlotKey,
    StepCheck,
    SubmissionOutcome,
)
from .directory import Doctor, Specialty

__all__ = [
    "AvailabilityState",
    "BookingDraft",
    "BookingResult",
    "DayInfo",
    "Doctor",
    "HandoffContext",
    "SlotKey",
    "Specialty",
    "StepCheck",
    "SubmissionOutcome",
]
