from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def from_timestamp(value: int | float) -> datetime:
    """Convert a POSIX timestamp (e.g. a JWT ``exp`` claim) to UTC-naive."""
    return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)


def as_aware(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values are converted to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    dt_utc = as_aware(dt).replace(microsecond=0)
    return dt_utc.isoformat().replace("+00:00", "Z")
