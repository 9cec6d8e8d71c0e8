"""Booking flow: availability, step validation, submission and the wizard."""

from .availability import AvailabilityResolver, ScheduleSource
from .step_validator import can_advance
from .submission import SubmissionCoordinator, build_booking_payload
from .wizard import BookingWizard

__all__ = [
    "AvailabilityResolver",
    "BookingWizard",
    "ScheduleSource",
    "SubmissionCoordinator",
    "build_booking_payload",
    "can_advance",
]
