"""
Date and time utilities for FamilyFolio.

Provides timezone-aware datetime helpers and ISO date parsing.
"""
from datetime import datetime, timezone, date
from typing import Optional


def utcnow() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        datetime: Current datetime in UTC with tzinfo set to timezone.utc

    Note:
        Always use this function instead of datetime.now() to ensure
        timezone-aware timestamps across the application.
    """
    return datetime.now(timezone.utc)


def parse_ISO_date(v) -> date:
    """
    Parse an ISO-8601 date.

    Accepts date objects, datetime objects and strings in either the plain
    date form (YYYY-MM-DD) or a full ISO timestamp (e.g. the output of
    JavaScript's Date.toISOString(), "2024-03-01T00:00:00.000Z"). Timestamps
    are reduced to their UTC calendar date: "2024-03-01T23:30:00-05:00" is
    2024-03-02. Naive timestamps are taken as UTC.

    Raises:
        ValueError: If the value is not a date, datetime or ISO string
    """
    # datetime is a subclass of date: check it first
    if isinstance(v, datetime):
        return _utc_date(v)
    if isinstance(v, date):
        return v
    if isinstance(v, str):
        try:
            return date.fromisoformat(v)
        except ValueError:
            pass
        try:
            return _utc_date(datetime.fromisoformat(v.replace("Z", "+00:00")))
        except ValueError as e:
            raise ValueError(f"Input must be an ISO date string (YYYY-MM-DD). Error: {e}")
    raise ValueError(f"Input must be an ISO date string, got {type(v).__name__}")


def _utc_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def to_iso_z(value: Optional[datetime]) -> Optional[str]:
    """Render a datetime as an ISO string in UTC ("...Z"), None stays None."""
    if value is None:
        return None
    # SQLite drops tzinfo on round-trip; stored values are always UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
