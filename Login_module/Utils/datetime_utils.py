"""
DateTime utility functions - All operations use IST (Indian Standard Time).
"""
from datetime import datetime, timezone, timedelta
from typing import Optional

# IST timezone (UTC+5:30)
IST = timezone(timedelta(hours=5, minutes=30))


def to_ist(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is in IST timezone.
    Naive datetimes come back from the database without tzinfo and are
    stored as UTC (server_default NOW()), so they are treated as UTC.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    if dt.tzinfo == IST:
        return dt

    return dt.astimezone(IST)


def to_ist_isoformat(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime to IST and return as ISO format string
    (e.g., "2024-12-17T14:30:00+05:30"). Used for API responses.
    """
    ist_dt = to_ist(dt)
    if ist_dt is None:
        return None
    return ist_dt.isoformat()


def now_ist() -> datetime:
    """
    Get current IST datetime (timezone-aware).
    """
    return datetime.now(IST)
