# /app/core/clock.py

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Returns the current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attaches UTC to naive datetimes.

    SQLite hands back naive values even for `DateTime(timezone=True)` columns,
    so every comparison against `utcnow()` goes through this helper first.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
