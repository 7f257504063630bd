"""
UTC datetime utilities.

Every timestamp stored or compared by the service is timezone-aware UTC.
"""

from datetime import UTC, datetime

SECONDS_PER_DAY = 86_400


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    Naive values are assumed to already be UTC (SQLite drops tzinfo on
    read); aware values are converted. Use at repository boundaries.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def whole_days_between(start: datetime, end: datetime) -> int:
    """Return floor((end - start) / 1 day), never negative."""
    start_utc = ensure_utc(start)
    end_utc = ensure_utc(end)
    assert start_utc is not None and end_utc is not None
    elapsed = (end_utc - start_utc).total_seconds()
    return max(0, int(elapsed // SECONDS_PER_DAY))
