"""Clinic API Client - Modular package for the clinic data backend."""

from clinic.services.api.base import ApiResource
from clinic.services.api.bookings import ClinicBookings
from clinic.services.api.client import ClinicApiClient
from clinic.services.api.directory import ClinicDirectory
from clinic.services.api.models import (
    AvailableDay,
    BookingPayload,
    BookingRecord,
    DoctorRow,
    ScheduleRow,
    SpecialtyRow,
)
from clinic.services.api.schedules import ClinicSchedules, build_upcoming_days

__all__ = [
    "ApiResource",
    "ClinicApiClient",
    "ClinicBookings",
    "ClinicDirectory",
    "ClinicSchedules",
    "build_upcoming_days",
    "AvailableDay",
    "BookingPayload",
    "BookingRecord",
    "DoctorRow",
    "ScheduleRow",
    "SpecialtyRow",
]
