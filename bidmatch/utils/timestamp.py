"""Timestamp helpers shared by the skill dictionary, JD specs and scripts."""

from datetime import datetime, timezone


def now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    """
    Serialize a datetime to ISO 8601 with a trailing "Z" for UTC.

    Naive datetimes are assumed to already be in UTC.

    Examples:
        to_iso(datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc))
        # "2025-01-02T03:04:05.678000Z"
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def from_iso(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp produced by to_iso() or a JavaScript client.

    Accepts a trailing "Z" on every supported Python version. The result is
    always timezone-aware.

    Raises:
        ValueError: If the string is not a valid ISO 8601 timestamp
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(dt: datetime) -> str:
    """Format a datetime for console output (e.g., "2025-11-13 18:45:40")."""
    return dt.strftime("%Y-%m-%d %H:%M:%S")
