"""Booking flow value objects: slot keys, days, drafts and results."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from clinic.core.enums import AvailabilityStatus, BookingMethod, ValidationError


@dataclass(frozen=True)
class SlotKey:
    """
    Identity of one calendar occurrence of a schedule day.

    A bare weekday code repeats across a multi-week window, so the key
    combines the code with the day's absolute timestamp.
    """

    day_code: str
    date: datetime

    @property
    def timestamp_ms(self) -> int:
        return int(self.date.timestamp() * 1000)

    @property
    def unique_id(self) -> str:
        return f"{self.day_code}:{self.timestamp_ms}"

    @classmethod
    def parse(cls, unique_id: str) -> "SlotKey":
        """
        Rebuild a key from its unique id (date comes back in UTC).

        Raises:
            ValueError: If the id is not ``<code>:<milliseconds>``
        """
        code, sep, millis = unique_id.rpartition(":")
        if not sep or not code or not millis.lstrip("-").isdigit():
            raise ValueError(f"Malformed slot id: {unique_id!r}")
        return cls(day_code=code, date=datetime.fromtimestamp(int(millis) / 1000, tz=timezone.utc))


@dataclass(frozen=True)
class DayInfo:
    """One upcoming open day for a doctor, with its ordered time slots."""

    key: SlotKey
    day_name: str
    times: Tuple[str, ...]

    @property
    def date(self) -> datetime:
        return self.key.date

    @property
    def day_code(self) -> str:
        return self.key.day_code

    @property
    def unique_id(self) -> str:
        return self.key.unique_id

    @property
    def default_time(self) -> Optional[str]:
        """The slot offered in the collapsed view: the first time of the day."""
        return self.times[0] if self.times else None

    def has_time(self, time: str) -> bool:
        return time in self.times

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.date().isoformat(),
            "day_name": self.day_name,
            "day_code": self.day_code,
            "times": list(self.times),
            "unique_id": self.unique_id,
        }


@dataclass
class BookingDraft:
    """In-progress booking, mutated only by the wizard controller."""

    specialty_id: Optional[int] = None
    doctor_id: Optional[int] = None
    booking_day: str = ""
    booking_time: str = ""
    user_name: str = ""
    user_phone: str = ""
    user_email: Optional[str] = None
    notes: Optional[str] = None
    booking_method: BookingMethod = BookingMethod.WHATSAPP

    def clear_slot(self) -> None:
        self.booking_day = ""
        self.booking_time = ""

    def copy(self) -> "BookingDraft":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "specialty_id": self.specialty_id,
            "doctor_id": self.doctor_id,
            "booking_day": self.booking_day,
            "booking_time": self.booking_time,
            "user_name": self.user_name,
            "user_phone": self.user_phone,
            "user_email": self.user_email,
            "notes": self.notes,
            "booking_method": self.booking_method.value,
        }


@dataclass(frozen=True)
class StepCheck:
    """Verdict of the step validator."""

    ok: bool
    reason: Optional[ValidationError] = None

    @classmethod
    def accept(cls) -> "StepCheck":
        return cls(ok=True)

    @classmethod
    def reject(cls, reason: ValidationError) -> "StepCheck":
        return cls(ok=False, reason=reason)


@dataclass(frozen=True)
class HandoffContext:
    """Display values the hand-off message needs beyond the draft."""

    doctor_name: str
    specialty_name: str = ""
    formatted_date: str = ""
    booking_date: Optional[str] = None


@dataclass(frozen=True)
class SubmissionOutcome:
    """Reconciled result of one submission across its channels."""

    channel: BookingMethod
    reference: str = ""
    record_id: Optional[str] = None
    persistence_degraded: bool = False
    handoff_url: Optional[str] = None


@dataclass(frozen=True)
class BookingResult:
    """Data for the success screen; discarded on reset."""

    reference: str
    formatted_date: str
    formatted_time: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reference": self.reference,
            "formatted_date": self.formatted_date,
            "formatted_time": self.formatted_time,
        }


@dataclass
class AvailabilityState:
    """What the appointment step shows: a status plus the last applied days."""

    status: AvailabilityStatus = AvailabilityStatus.NO_DOCTOR
    doctor_id: Optional[int] = None
    days: List[DayInfo] = field(default_factory=list)
    error: Optional[str] = None

    def find_day(self, unique_id: str) -> Optional[DayInfo]:
        return next((d for d in self.days if d.unique_id == unique_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "doctor_id": self.doctor_id,
            "days": [d.to_dict() for d in self.days],
            "error": self.error,
        }
