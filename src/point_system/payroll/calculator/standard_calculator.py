from __future__ import annotations

from typing import Optional

from ...core.constants import LUNCH_BREAK_HOURS, STANDARD_WORKDAY_HOURS
from ...raw_attendance.model import RawAttendanceRecord
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: worked - away - lunch, capped at a standard day unless overtime is allowed.

    Credited hours convert to workday units (one standard day = 1.0), rounded
    to the nearest half unit with exact halves going to even.
    """

    def __init__(
        self,
        *,
        standard_workday_hours: float = STANDARD_WORKDAY_HOURS,
        lunch_break_hours: float = LUNCH_BREAK_HOURS,
    ):
        self._standard = float(standard_workday_hours)
        self._lunch = float(lunch_break_hours)

    def net_hours(self, record: RawAttendanceRecord) -> Optional[float]:
        if record.total_hours is None:
            return None
        lunch = self._lunch if record.calculate_lunch_hour else 0.0
        return record.total_hours - (record.total_hours_out or 0.0) - lunch

    def daily_credit(self, record: RawAttendanceRecord) -> Optional[float]:
        net = self.net_hours(record)
        if net is None:
            return None
        if net > self._standard and not record.calculate_overtime:
            return self._standard
        return net

    def workday_units(self, credited_hours: float) -> float:
        # round() sends exact halves to even, like MySQL ROUND() on DOUBLE.
        return round(credited_hours / self._standard * 2) / 2
