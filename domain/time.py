"""
Domain time utilities (pure).

Sale timestamps travel as plain strings in `YYYY-MM-DD HH:MM:SS` form, which
the spreadsheet ledger parses as a date when values are user-entered.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def require_utc_timestamp(name: str, value: datetime) -> None:
    """
    Enforces that a timestamp is UTC.

    Invariants:
    - Timestamps must be timezone-aware.
    - Timestamps must have UTC offset 0.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValueError(f"{name} must be a UTC timestamp (offset 0)")


def format_timestamp(value: datetime) -> str:
    """Format a UTC datetime as `YYYY-MM-DD HH:MM:SS`."""

    require_utc_timestamp("timestamp", value)
    return value.strftime(TIMESTAMP_FORMAT)


def utc_now_timestamp(now: Optional[datetime] = None) -> str:
    """Current instant (or `now`, when given) formatted for the ledger."""

    return format_timestamp(now if now is not None else datetime.now(timezone.utc))
