"""Clinic API Models - TypedDict definitions for backend rows."""

from typing import List, Optional, TypedDict


class SpecialtyRow(TypedDict, total=False):
    """Row of the ``specialties`` table."""

    id: int
    name: str
    icon: Optional[str]
    description: Optional[str]
    details: Optional[str]


class DoctorRow(TypedDict, total=False):
    """Row of the ``doctors`` table, optionally joined with its specialty."""

    id: int
    specialty_id: int
    name: str
    title: Optional[str]
    rating: Optional[float]
    reviews_count: Optional[int]
    bio: Optional[str]
    image: Optional[str]
    fees: Optional[dict]
    specialties: Optional[dict]


class ScheduleRow(TypedDict):
    """Weekly opening slot of a doctor (``doctor_schedules``)."""

    day: str
    time: str


class AvailableDay(TypedDict):
    """Raw day entry produced by the schedule source."""

    date: str
    day_code: str
    times: List[str]


class BookingPayload(TypedDict, total=False):
    """Insert payload for the ``bookings`` table."""

    user_name: str
    user_phone: str
    user_email: Optional[str]
    notes: Optional[str]
    specialty_id: Optional[int]
    doctor_id: Optional[int]
    booking_day: str
    booking_time: str
    booking_date: Optional[str]
    booking_method: str
    status: str


class BookingRecord(BookingPayload, total=False):
    """Stored booking as returned by the backend."""

    id: str
    created_at: str
