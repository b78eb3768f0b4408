# backend/delivery_dates/services/delivery/clock.py
"""
Clock / timezone adapter.

Every calendar date handled by the delivery rules is a "YYYY-MM-DD" string
in the shop's timezone. The current instant is always passed in by the
caller; nothing here reads the system clock.
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from .errors import InvalidDeliveryDate

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Day arithmetic is anchored on local midday, far from any DST transition
_ANCHOR = time(12, 0)


def parse_calendar_date(value: str) -> date:
    """
    Parse a strict "YYYY-MM-DD" string.

    Raises InvalidDeliveryDate for anything else, including impossible
    dates such as 2024-02-30.
    """
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidDeliveryDate(value)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidDeliveryDate(value) from None


def to_local(instant: datetime, tz: str) -> datetime:
    """Naive instants are treated as UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(ZoneInfo(tz))


def local_date(instant: datetime, tz: str) -> str:
    return to_local(instant, tz).date().isoformat()


def minutes_since_midnight(instant: datetime, tz: str) -> int:
    local = to_local(instant, tz)
    return local.hour * 60 + local.minute


def add_calendar_days(day: str, n: int, tz: str) -> str:
    """Advance by exactly n local calendar days."""
    anchored = datetime.combine(parse_calendar_date(day), _ANCHOR, tzinfo=ZoneInfo(tz))
    # Aware + timedelta is wall-clock arithmetic in zoneinfo
    return (anchored + timedelta(days=n)).date().isoformat()


def is_weekend(day: str, tz: str) -> bool:
    anchored = datetime.combine(parse_calendar_date(day), _ANCHOR, tzinfo=ZoneInfo(tz))
    return anchored.weekday() >= 5  # 5 = Saturday, 6 = Sunday


def days_between(start: str, end: str) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (parse_calendar_date(end) - parse_calendar_date(start)).days


def parse_cutoff_time(hhmm: str) -> int:
    """
    Parse "HH:MM" into minutes since midnight. Raises ValueError for bad input.
    """
    hhmm = (hhmm or "").strip()
    if not hhmm or ":" not in hhmm:
        raise ValueError(f"Invalid HH:MM string: {hhmm!r}")
    h_str, m_str = hhmm.split(":", 1)
    h, m = int(h_str), int(m_str)
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time bounds: {hhmm!r}")
    return h * 60 + m

