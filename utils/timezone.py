"""UTC-everywhere time handling."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def today_iso() -> str:
    """Today's UTC date as YYYY-MM-DD, the default invoice date."""
    return now_utc().date().isoformat()
