from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import DayType


@dataclass(frozen=True)
class WorkDay:
    """Domain entity: a calendar date opened for attendance generation."""

    work_day_id: int
    work_date: date
    day_type: DayType
