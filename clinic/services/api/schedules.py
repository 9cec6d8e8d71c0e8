"""Schedules Module - Expands weekly doctor schedules into upcoming open days."""

from datetime import date, tzinfo
from typing import Callable, Dict, Iterable, List, Optional

import aiohttp
from loguru import logger

from clinic.constants import DAY_CODES
from clinic.utils.dates import iter_window, today

from .base import ApiResource
from .models import AvailableDay, ScheduleRow


def _time_sort_key(value: str):
    hours, _, minutes = value.partition(":")
    try:
        return (0, int(hours), int(minutes or 0))
    except ValueError:
        return (1, value)


def build_upcoming_days(
    rows: Iterable[ScheduleRow], start: date, window_days: int
) -> List[AvailableDay]:
    """
    Expand weekly schedule rows over a window of calendar days.

    Rows with an unknown day code or without a time are ignored. Times are
    deduplicated and sorted chronologically per weekday; weekdays without
    any time produce no entry.

    Args:
        rows: Weekly rows ``{day: 'Sun', time: '18:00'}``
        start: First calendar day of the window
        window_days: Number of days to expand

    Returns:
        Chronological day entries
    """
    times_by_code: Dict[str, List[str]] = {}
    for row in rows:
        code = (row.get("day") or "").strip()
        time = (row.get("time") or "").strip()[:5]
        if code not in DAY_CODES or not time:
            continue
        bucket = times_by_code.setdefault(code, [])
        if time not in bucket:
            bucket.append(time)

    days: List[AvailableDay] = []
    for current, code in iter_window(start, window_days):
        times = times_by_code.get(code)
        if times:
            days.append(
                {
                    "date": current.isoformat(),
                    "day_code": code,
                    "times": sorted(times, key=_time_sort_key),
                }
            )
    return days


class ClinicSchedules(ApiResource):
    """Schedule source behind the availability resolver."""

    def __init__(
        self,
        base_url: str,
        http_session_getter: Callable[[], aiohttp.ClientSession],
        tz: tzinfo,
        window_days: int,
        clock: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize schedules handler.

        Args:
            base_url: REST API base URL
            http_session_getter: Callable that returns the HTTP session
            tz: Clinic timezone, defines "today"
            window_days: How many days ahead to expand
            clock: Override for the current date (tests)
        """
        super().__init__(base_url, http_session_getter)
        self._tz = tz
        self._window_days = window_days
        self._clock = clock or (lambda: today(self._tz))

    async def fetch_weekly(self, doctor_id: int) -> List[ScheduleRow]:
        """Get the raw weekly rows of a doctor."""
        rows: List[ScheduleRow] = await self._request(
            "GET",
            "doctor_schedules",
            params={"select": "day,time", "doctor_id": f"eq.{doctor_id}", "order": "time.asc"},
        )
        return rows

    async def fetch_availability(self, doctor_id: int) -> List[AvailableDay]:
        """
        Get the doctor's upcoming open days.

        Not retried: a failure is reported to the user who may retry.

        Raises:
            ClinicApiError: If the backend request fails
        """
        rows = await self.fetch_weekly(doctor_id)
        days = build_upcoming_days(rows, self._clock(), self._window_days)
        logger.info(
            f"Doctor {doctor_id}: {len(rows)} weekly slots -> {len(days)} open days "
            f"in the next {self._window_days} days"
        )
        return days
