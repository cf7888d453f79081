from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ..core.enums import DayType
from .model import WorkDay


class WorkDayRepository(Protocol):
    def create(self, *, work_date: date, day_type: DayType) -> WorkDay:
        raise NotImplementedError

    def get_by_id(self, work_day_id: int) -> Optional[WorkDay]:
        raise NotImplementedError
