"""Clinic API Client - Main client implementation."""

from datetime import date, tzinfo
from typing import Callable, List, Optional

import aiohttp
from loguru import logger

from clinic.constants import Pools, Timeouts
from clinic.core.config import ClinicSettings, get_settings
from clinic.models import Doctor, Specialty

from .bookings import ClinicBookings
from .directory import ClinicDirectory
from .models import AvailableDay, BookingPayload, BookingRecord
from .schedules import ClinicSchedules


class ClinicApiClient:
    """
    Async client for the clinic data backend (PostgREST-style REST API).

    Delegates to the directory, schedules and bookings sub-modules, which
    share one pooled HTTP session.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: int = Timeouts.HTTP_REQUEST_SECONDS,
        tz: Optional[tzinfo] = None,
        window_days: Optional[int] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize clinic API client.

        Args:
            base_url: REST API base URL
            api_key: Key sent as ``apikey`` header and bearer token
            timeout: Request timeout in seconds
            tz: Clinic timezone (defaults to settings)
            window_days: Availability window (defaults to settings)
            clock: Override for the current date (tests)
        """
        settings = get_settings()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self._http_session: Optional[aiohttp.ClientSession] = None

        self.directory = ClinicDirectory(self.base_url, lambda: self._session)
        self.schedules = ClinicSchedules(
            self.base_url,
            lambda: self._session,
            tz=tz or settings.tz,
            window_days=window_days or settings.availability_window_days,
            clock=clock,
        )
        self.bookings = ClinicBookings(self.base_url, lambda: self._session)

        logger.info(f"ClinicApiClient initialized for {self.base_url}")

    @classmethod
    def from_settings(cls, settings: Optional[ClinicSettings] = None) -> "ClinicApiClient":
        """Build a client from application settings."""
        settings = settings or get_settings()
        return cls(
            base_url=settings.api_base_url,
            api_key=settings.api_key.get_secret_value() if settings.api_key else None,
            timeout=settings.http_timeout,
            tz=settings.tz,
            window_days=settings.availability_window_days,
        )

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def start(self) -> None:
        """Initialize HTTP session with connection pooling."""
        if self._http_session is not None:
            return

        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self._api_key:
            headers["apikey"] = self._api_key
            headers["Authorization"] = f"Bearer {self._api_key}"

        connector = aiohttp.TCPConnector(
            limit=Pools.HTTP_LIMIT,
            limit_per_host=Pools.HTTP_LIMIT_PER_HOST,
            ttl_dns_cache=Pools.DNS_CACHE_TTL,
            keepalive_timeout=Pools.KEEPALIVE_TIMEOUT,
            enable_cleanup_closed=True,
        )
        timeout = aiohttp.ClientTimeout(
            total=self.timeout,
            connect=Timeouts.HTTP_CONNECT_SECONDS,
            sock_read=Timeouts.HTTP_SOCK_READ_SECONDS,
        )
        self._http_session = aiohttp.ClientSession(
            connector=connector, headers=headers, timeout=timeout
        )
        logger.info("HTTP session initialized with connection pooling")

    async def close(self) -> None:
        """Close HTTP session."""
        if self._http_session:
            await self._http_session.close()
            self._http_session = None

    @property
    def _session(self) -> aiohttp.ClientSession:
        """Get HTTP session, raising error if not initialized."""
        if self._http_session is None:
            raise RuntimeError("HTTP session not initialized. Call start() first.")
        return self._http_session

    async def list_specialties(self) -> List[Specialty]:
        return await self.directory.list_specialties()

    async def get_specialty(self, specialty_id: int) -> Specialty:
        return await self.directory.get_specialty(specialty_id)

    async def list_doctors(self) -> List[Doctor]:
        return await self.directory.list_doctors()

    async def list_doctors_by_specialty(self, specialty_id: int) -> List[Doctor]:
        return await self.directory.list_doctors_by_specialty(specialty_id)

    async def get_doctor(self, doctor_id: int) -> Doctor:
        return await self.directory.get_doctor(doctor_id)

    async def fetch_availability(self, doctor_id: int) -> List[AvailableDay]:
        """
        Get a doctor's upcoming open days.

        Raises:
            ClinicApiError: If the backend request fails
        """
        return await self.schedules.fetch_availability(doctor_id)

    async def create_booking(self, payload: BookingPayload) -> BookingRecord:
        """
        Persist one booking.

        Raises:
            ClinicApiError: If the insert fails
        """
        return await self.bookings.create_booking(payload)

    async def get_bookings_by_phone(self, phone: str) -> List[BookingRecord]:
        return await self.bookings.get_bookings_by_phone(phone)

    async def cancel_booking(self, booking_id: str) -> BookingRecord:
        return await self.bookings.cancel_booking(booking_id)
