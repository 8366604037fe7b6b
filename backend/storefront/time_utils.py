# Overview: UTC timestamp helpers for catalog rows, API payloads and cursors.

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _as_naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Display form for API payloads: second precision with a trailing 'Z'.
    Naive values are treated as UTC.
    """
    if dt is None:
        return None
    return _as_naive_utc(dt).replace(microsecond=0).isoformat() + "Z"


def to_cursor_timestamp(dt: datetime) -> str:
    """
    Exact form for pagination cursors.

    Always carries microseconds so the value compares equal to the stored
    column when it comes back.
    """
    return _as_naive_utc(dt).isoformat(timespec="microseconds")


def from_cursor_timestamp(value: str) -> datetime:
    """
    Inverse of to_cursor_timestamp. Offsets and a trailing 'Z' are accepted
    and normalized to naive UTC.

    Raises:
        ValueError: if value is not an ISO-8601 datetime string
    """
    text = value.strip()
    if not text:
        raise ValueError("empty timestamp")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return _as_naive_utc(datetime.fromisoformat(text))
