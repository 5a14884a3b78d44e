from __future__ import annotations

from datetime import date, datetime, time, timedelta


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[start, end) of a calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)
