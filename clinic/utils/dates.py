"""Date helpers for schedule expansion and Arabic display."""

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Iterator, Optional, Tuple

from clinic.constants import ARABIC_DAY_NAMES, ARABIC_MONTHS, DAY_CODES


def day_code_for(value: date) -> str:
    """Schedule day code ('Mon'..'Sun') for a date."""
    return DAY_CODES[value.weekday()]


def arabic_day_name(day_code: str) -> str:
    """Arabic weekday label for a schedule day code; unknown codes pass through."""
    return ARABIC_DAY_NAMES.get(day_code, day_code)


def start_of_day(value: date, tz: tzinfo) -> datetime:
    """Midnight of ``value`` in ``tz`` as an aware datetime."""
    return datetime.combine(value, time.min, tzinfo=tz)


def today(tz: tzinfo) -> date:
    """Current calendar date in the given timezone."""
    return datetime.now(tz).date()


def parse_schedule_date(value: Any, tz: tzinfo) -> Optional[datetime]:
    """
    Parse a date coming from the schedule source.

    Accepts ``date``/``datetime`` objects, ISO date or datetime strings and
    epoch milliseconds. The result is normalized to midnight in ``tz``.

    Returns:
        Aware datetime, or None when the value is missing or unparseable
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        local = value.astimezone(tz) if value.tzinfo else value.replace(tzinfo=tz)
        return start_of_day(local.date(), tz)
    if isinstance(value, date):
        return start_of_day(value, tz)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return start_of_day(datetime.fromtimestamp(value / 1000, tz).date(), tz)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            try:
                return start_of_day(date.fromisoformat(text[:10]), tz)
            except ValueError:
                return None
        return parse_schedule_date(parsed, tz)
    return None


def iter_window(start: date, days: int) -> Iterator[Tuple[date, str]]:
    """Yield ``(date, day_code)`` for ``days`` consecutive days from ``start``."""
    for offset in range(days):
        current = start + timedelta(days=offset)
        yield current, day_code_for(current)


def format_arabic_date(value: date) -> str:
    """
    Long Arabic date, e.g. 'الأربعاء، 1 مايو 2024'.

    Args:
        value: Date or datetime (only the calendar date is used)
    """
    if isinstance(value, datetime):
        value = value.date()
    weekday = arabic_day_name(day_code_for(value))
    return f"{weekday}، {value.day} {ARABIC_MONTHS[value.month - 1]} {value.year}"
