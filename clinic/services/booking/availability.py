"""Availability resolver: turns schedule source output into selectable days."""

from datetime import datetime, tzinfo
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence

from loguru import logger

from clinic.constants import DAY_CODES
from clinic.core.exceptions import AvailabilityError, ClinicApiError
from clinic.models import DayInfo, SlotKey
from clinic.utils.dates import arabic_day_name, day_code_for, parse_schedule_date


class ScheduleSource(Protocol):
    """Anything that can list a doctor's upcoming open days."""

    async def fetch_availability(self, doctor_id: int) -> Sequence[Mapping[str, Any]]: ...


def _raw_day_code(raw: Mapping[str, Any]) -> Optional[str]:
    code = raw.get("day_code") or raw.get("dayCode") or raw.get("day")
    if isinstance(code, str) and code.strip() in DAY_CODES:
        return code.strip()
    return None


def _raw_times(raw: Mapping[str, Any]) -> List[str]:
    times = raw.get("times") or []
    if isinstance(times, str):
        times = [times]
    return [t.strip() for t in times if isinstance(t, str) and t.strip()]


class AvailabilityResolver:
    """
    Resolves a doctor's upcoming open days.

    Each call issues exactly one request to the schedule source and builds
    fresh DayInfo objects. Failures are reported as AvailabilityError and
    never retried here; retry is a user action.
    """

    def __init__(
        self,
        source: ScheduleSource,
        tz: tzinfo,
        now: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize resolver.

        Args:
            source: Schedule source collaborator
            tz: Clinic timezone used to interpret dates
            now: Override for the current instant (tests)
        """
        self._source = source
        self._tz = tz
        self._now = now or (lambda: datetime.now(self._tz))

    async def resolve(self, doctor_id: Optional[int]) -> List[DayInfo]:
        """
        Resolve availability for one doctor.

        Args:
            doctor_id: Selected doctor; None short-circuits without a request

        Returns:
            Days in source order, one per calendar date, each with at least one time

        Raises:
            AvailabilityError: On transport or parse failure
        """
        if doctor_id is None:
            return []

        try:
            raw_days = await self._source.fetch_availability(doctor_id)
        except ClinicApiError as e:
            logger.warning(f"Availability fetch failed for doctor {doctor_id}: {e.message}")
            raise AvailabilityError(doctor_id=doctor_id) from e

        if not isinstance(raw_days, (list, tuple)):
            logger.error(
                f"Schedule source returned {type(raw_days).__name__} for doctor {doctor_id}"
            )
            raise AvailabilityError("Malformed availability response", doctor_id=doctor_id)

        try:
            days = self._normalize(raw_days)
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"Could not parse availability for doctor {doctor_id}: {e}")
            raise AvailabilityError("Malformed availability response", doctor_id=doctor_id) from e

        logger.debug(f"Doctor {doctor_id}: {len(days)} open days")
        return days

    def _normalize(self, raw_days: Sequence[Mapping[str, Any]]) -> List[DayInfo]:
        order: List[Any] = []
        merged: Dict[Any, Dict[str, Any]] = {}

        for raw in raw_days:
            date = parse_schedule_date(raw.get("date"), self._tz)
            if date is None:
                logger.warning(f"Day entry without a usable date ({raw.get('date')!r}), using now")
                date = self._now()
            code = _raw_day_code(raw) or day_code_for(date)

            calendar_day = date.date()
            entry = merged.get(calendar_day)
            if entry is None:
                entry = {"key": SlotKey(day_code=code, date=date), "times": []}
                merged[calendar_day] = entry
                order.append(calendar_day)
            for time in _raw_times(raw):
                if time not in entry["times"]:
                    entry["times"].append(time)

        return [
            DayInfo(
                key=merged[d]["key"],
                day_name=arabic_day_name(merged[d]["key"].day_code),
                times=tuple(merged[d]["times"]),
            )
            for d in order
            if merged[d]["times"]
        ]
