from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Any


def parse_booking_time(value: Any) -> datetime | None:
    """Parse an ISO-8601 booking timestamp. Returns an aware datetime or None, never raises.

    Timestamps without an offset are read as UTC. Instants that fall outside the
    datetime range once converted to UTC are rejected.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        parsed.astimezone(timezone.utc)
    except OverflowError:
        return None
    return parsed


def parse_iso_date(value: Any) -> date | None:
    """Parse a yyyy-MM-dd date (or the date part of a timestamp). Returns None when invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        parsed = parse_booking_time(text)
        return parsed.date() if parsed else None


def day_of_week(moment: datetime, tz: tzinfo = timezone.utc) -> int:
    """Day of week with Sunday = 0, evaluated in the given zone (UTC by default)."""
    return (moment.astimezone(tz).weekday() + 1) % 7


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
