"""Timestamp helpers shared across the generator."""

from datetime import UTC, datetime

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC.

    Examples:
        >>> ensure_utc(datetime(2020, 1, 1)).isoformat()
        '2020-01-01T00:00:00+00:00'

    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def from_timestamp(timestamp: float) -> datetime:
    """Convert a POSIX timestamp (e.g. ``st_mtime``) to an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp, tz=UTC)
