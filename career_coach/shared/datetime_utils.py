"""Timezone-aware datetime utilities.

All datetime values use UTC for storage and comparison.
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Get current datetime with UTC timezone.

    Always use this function instead of datetime.utcnow() or datetime.now().
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure datetime has UTC timezone.

    Naive datetimes are assumed to already be UTC.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def days_from_now(days: int, now: datetime | None = None) -> datetime:
    """Get the UTC datetime ``days`` days after ``now`` (defaults to utc_now())."""
    return ensure_utc(now or utc_now()) + timedelta(days=days)


def datetime_to_iso(dt: datetime | None) -> str | None:
    """Convert datetime to ISO 8601 string."""
    if dt is None:
        return None
    return ensure_utc(dt).isoformat()


def iso_to_datetime(iso_string: str | None) -> datetime | None:
    """Parse ISO 8601 string to a UTC datetime."""
    if iso_string is None:
        return None

    dt = datetime.fromisoformat(iso_string.replace('Z', '+00:00'))
    return ensure_utc(dt)
