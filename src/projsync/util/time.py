from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def touch(previous: Optional[datetime], now: Optional[datetime] = None) -> datetime:
    """
    Return a fresh ``updated_at`` value that never goes backwards.

    If the wall clock reads earlier than ``previous`` (clock skew, imported
    documents from the future), ``previous`` is kept.
    """
    current = now if now is not None else now_utc()
    if previous is not None and normalize_dt(previous) > current:
        return previous
    return current


def parse_rfc3339(value: str) -> datetime:
    """
    Parse an RFC3339 timestamp into a tz-aware UTC datetime.

    Accepts ``2025-01-01T12:34:56Z``, fractional seconds and explicit offsets.
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)
    return normalize_dt(dt).astimezone(timezone.utc)


def to_rfc3339(dt: datetime) -> str:
    """Format a tz-aware datetime as RFC3339 in UTC with a trailing 'Z'."""
    dt = normalize_dt(dt).astimezone(timezone.utc)
    return dt.isoformat(timespec="microseconds").replace("+00:00", "Z")


def normalize_dt(dt: datetime) -> datetime:
    """Ensure datetime is tz-aware. Raises if naive."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt
