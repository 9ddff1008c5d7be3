from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into naive local time.

    A trailing "Z" or explicit offset is converted to the local timezone.
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def business_date(now: datetime) -> date:
    """Calendar day an attendance record is grouped under."""
    return now.date()


def minutes_since_midnight(now: datetime) -> int:
    return now.hour * 60 + now.minute


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed hours rounded to two decimals."""
    return round((end - start).total_seconds() / 3600, 2)
