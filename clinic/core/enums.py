"""Centralized enum definitions for the clinic booking service."""

from enum import Enum, IntEnum


class WizardStep(IntEnum):
    """Booking wizard steps, in navigation order."""

    SPECIALTY = 0
    DOCTOR = 1
    APPOINTMENT = 2
    CONTACT = 3
    CONFIRM = 4
    DONE = 5

    @property
    def label(self) -> str:
        """Lowercase step name used on the wire."""
        return self.name.lower()


class BookingMethod(str, Enum):
    """How the patient chose to confirm a booking."""

    ONLINE = "online"
    WHATSAPP = "whatsapp"
    PHONE = "phone"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class ValidationError(str, Enum):
    """Reasons the step validator may reject a draft.

    Not an exception: values are rendered as localized messages.
    """

    MISSING_SPECIALTY = "missing_specialty"
    MISSING_DOCTOR = "missing_doctor"
    MISSING_SLOT = "missing_slot"
    MISSING_NAME = "missing_name"
    BAD_PHONE = "bad_phone"
    BAD_EMAIL = "bad_email"
    STALE_SLOT = "stale_slot"

    @property
    def message(self) -> str:
        """Arabic display message for this validation failure."""
        from clinic.constants import VALIDATION_MESSAGES

        return VALIDATION_MESSAGES[self.value]


class AvailabilityStatus(str, Enum):
    """State of the appointment step's availability panel."""

    NO_DOCTOR = "no_doctor"
    IDLE = "idle"
    PENDING = "pending"
    READY = "ready"
    EMPTY = "empty"
    FAILED = "failed"


class SubmissionErrorKind(str, Enum):
    """Failure kinds raised by the submission coordinator."""

    PERSISTENCE_FAILED = "persistence_failed"
    HANDOFF_FAILED = "handoff_failed"
    UNSUPPORTED_CHANNEL = "unsupported_channel"


class SubmissionWarning(str, Enum):
    """Non-blocking conditions attached to a successful submission."""

    PERSISTENCE_DEGRADED = "persistence_degraded"

    @property
    def message(self) -> str:
        """Arabic display message for this warning."""
        from clinic.constants import PERSISTENCE_DEGRADED_MESSAGE

        return PERSISTENCE_DEGRADED_MESSAGE


class BookingStatus(str, Enum):
    """Status values for stored bookings."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]
