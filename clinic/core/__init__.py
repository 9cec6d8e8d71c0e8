"""Core building blocks: enums, exceptions, configuration, logging and retry."""

from .enums import (
    AvailabilityStatus,
    BookingMethod,
    BookingStatus,
    SubmissionErrorKind,
    SubmissionWarning,
    ValidationError,
    WizardStep,
)
from .exceptions import (
    AvailabilityError,
    ClinicApiError,
    ClinicError,
    ConfigurationError,
    NotFoundError,
    SessionNotFoundError,
    SubmissionError,
    WizardStateError,
)

__all__ = [
    "AvailabilityStatus",
    "BookingMethod",
    "BookingStatus",
    "SubmissionErrorKind",
    "SubmissionWarning",
    "ValidationError",
    "WizardStep",
    "AvailabilityError",
    "ClinicApiError",
    "ClinicError",
    "ConfigurationError",
    "NotFoundError",
    "SessionNotFoundError",
    "SubmissionError",
    "WizardStateError",
]
