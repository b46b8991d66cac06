from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError

_TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")
_OFFSET_RE = re.compile(r"^(-?)(\d{2}):(\d{2})$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def parse_time_of_day(value: str) -> time:
    """Parse HH:mm or HH:mm:ss into a time."""
    m = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if not m:
        raise ValidationError(f"Invalid time {value!r}, expected HH:mm or HH:mm:ss")
    hours, minutes, seconds = int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValidationError(f"Invalid time {value!r}")
    return time(hour=hours, minute=minutes, second=seconds)


def is_valid_offset(value: str) -> bool:
    return isinstance(value, str) and _OFFSET_RE.match(value) is not None


def parse_offset(value: str) -> int:
    """Parse a signed [-]HH:mm offset into minutes."""
    if not is_valid_offset(value):
        raise ValidationError("Invalid time offset format. Use HH:mm format with optional - prefix.")
    m = _OFFSET_RE.match(value)
    sign, hours, minutes = m.group(1), int(m.group(2)), int(m.group(3))
    if minutes > 59:
        raise ValidationError(f"Invalid time offset {value!r}")
    total = hours * 60 + minutes
    return -total if sign else total


def format_offset(minutes: int) -> str:
    sign = "-" if minutes < 0 else ""
    hours, mins = divmod(abs(int(minutes)), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


def minutes_of_day(value: time | datetime) -> int:
    """Whole minutes since midnight; seconds are ignored."""
    return value.hour * 60 + value.minute


def shift_time(base: time, offset_minutes: int) -> time:
    """Apply a signed minute offset to a time-of-day, wrapping around midnight."""
    total = (base.hour * 3600 + base.minute * 60 + base.second + offset_minutes * 60) % (MINUTES_PER_DAY * 60)
    return time(hour=total // 3600, minute=(total % 3600) // 60, second=total % 60)


def add_months(value: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of shorter months."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def iter_dates(start: date, end: date):
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
