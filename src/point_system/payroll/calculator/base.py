from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ...raw_attendance.model import RawAttendanceRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def daily_credit(self, record: RawAttendanceRecord) -> Optional[float]:
        """Creditable hours for one record, or None when it carries no hours."""

        raise NotImplementedError

    @abstractmethod
    def workday_units(self, credited_hours: float) -> float:
        raise NotImplementedError

    def units_for(self, records: Iterable[RawAttendanceRecord]) -> float:
        credits = (self.daily_credit(r) for r in records)
        return self.workday_units(sum(c for c in credits if c is not None))
