from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.constants import DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_clock(value: Optional[str]) -> Optional[time]:
    """Parse HH:MM or HH:MM:SS, ignoring seconds. Returns None when unparseable."""
    if not value or len(value) < 5:
        return None
    try:
        return datetime.strptime(value[:5], "%H:%M").time()
    except ValueError:
        return None


def day_bounds(day: date, *, days: int = 1) -> tuple[datetime, datetime]:
    """Half-open [start, end) datetime range covering `days` calendar days."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=days)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
