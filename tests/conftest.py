"""Pytest configuration and common fixtures."""

import asyncio
import os
import sys
import warnings
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

# Try to load test-specific environment file if it exists
test_env_file = Path(__file__).parent / ".env.test"
if test_env_file.exists():
    load_dotenv(test_env_file)

# Set environment variables BEFORE any clinic imports; the settings fixture
# below provides per-test isolation
os.environ.setdefault("ENV", "testing")

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from unittest.mock import AsyncMock, MagicMock

import pytest

from clinic.models import Doctor, Specialty
from clinic.services.booking import AvailabilityResolver, BookingWizard, SubmissionCoordinator
from clinic.utils.dates import day_code_for

CAIRO = ZoneInfo("Africa/Cairo")


def pytest_configure(config):
    """Configure pytest environment before tests run."""
    warnings.filterwarnings("ignore", message="coroutine.*was never awaited")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Automatically set up test environment for all tests."""
    monkeypatch.setenv("ENV", "testing")
    monkeypatch.setenv("API_BASE_URL", "https://clinic.test/rest/v1")
    monkeypatch.setenv("CLINIC_TIMEZONE", "Africa/Cairo")
    monkeypatch.setenv("WHATSAPP_NUMBER", "201119007403")
    monkeypatch.setenv("CLINIC_PHONE", "01119007403")
    monkeypatch.delenv("API_KEY", raising=False)

    # Reset settings singleton so each test gets fresh settings
    from clinic.core.config.settings import reset_settings

    reset_settings()
    yield
    reset_settings()


def raw_days(
    offsets: Sequence[int] = (1, 2),
    times: Sequence[str] = ("10:00", "11:30"),
    tz=CAIRO,
) -> List[Dict[str, Any]]:
    """Schedule source entries for days ``offsets`` days from today."""
    today = datetime.now(tz).date()
    result = []
    for offset in offsets:
        day = today + timedelta(days=offset)
        result.append({"date": day.isoformat(), "day_code": day_code_for(day), "times": list(times)})
    return result


class FakeScheduleSource:
    """Schedule source returning canned days; a doctor's gate holds its response."""

    def __init__(self, days_by_doctor: Optional[Dict[int, List[Dict[str, Any]]]] = None):
        self.days_by_doctor = days_by_doctor or {}
        self.gates: Dict[int, asyncio.Event] = {}
        self.errors: Dict[int, Exception] = {}
        self.calls: List[int] = []

    def hold(self, doctor_id: int) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[doctor_id] = gate
        return gate

    async def fetch_availability(self, doctor_id: int):
        self.calls.append(doctor_id)
        gate = self.gates.get(doctor_id)
        if gate is not None:
            await gate.wait()
        if doctor_id in self.errors:
            raise self.errors[doctor_id]
        return self.days_by_doctor.get(doctor_id, [])


@pytest.fixture
def cairo():
    """Clinic timezone."""
    return CAIRO


@pytest.fixture
def specialty() -> Specialty:
    return Specialty(id=1, name="طب الأطفال", icon="baby")


@pytest.fixture
def other_specialty() -> Specialty:
    return Specialty(id=2, name="الأمراض الجلدية", icon="skin")


@pytest.fixture
def doctor() -> Doctor:
    return Doctor(id=1, specialty_id=1, name="د. أحمد", title="استشاري", specialty_name="طب الأطفال")


@pytest.fixture
def other_doctor() -> Doctor:
    return Doctor(id=2, specialty_id=1, name="د. منى", specialty_name="طب الأطفال")


@pytest.fixture
def skin_doctor() -> Doctor:
    return Doctor(id=3, specialty_id=2, name="د. سامي", specialty_name="الأمراض الجلدية")


@pytest.fixture
def fake_source() -> FakeScheduleSource:
    """Schedule source with two open days for doctor 1 and one for doctor 2."""
    return FakeScheduleSource(
        {
            1: raw_days((1, 2), ("10:00", "11:30")),
            2: raw_days((3,), ("18:00",)),
        }
    )


@pytest.fixture
def booking_store() -> MagicMock:
    """Booking persistence returning a stored record."""
    store = MagicMock()
    store.create_booking = AsyncMock(return_value={"id": "a1b2c3d4-e5f6-7890-abcd-ef0123456789"})
    return store


@pytest.fixture
def handoff() -> MagicMock:
    """WhatsApp hand-off double returning the launched URL."""
    launcher = MagicMock()
    launcher.open = MagicMock(return_value="https://wa.me/201119007403?text=hello")
    return launcher


@pytest.fixture
def wizard(fake_source, booking_store, handoff) -> BookingWizard:
    """Wizard wired to fake collaborators."""
    return BookingWizard(
        resolver=AvailabilityResolver(fake_source, tz=CAIRO),
        coordinator=SubmissionCoordinator(booking_store, handoff),
        tz=CAIRO,
    )
