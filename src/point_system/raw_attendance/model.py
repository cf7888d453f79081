from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class RawAttendanceRecord:
    """Domain entity: computed attendance of one employee on one work-day.

    Note: start_at/end_at are local clock times only; the date comes from the work-day.
    """

    work_day_id: int
    company_id: int
    employee_id: int
    employee_name: Optional[str]
    position: Optional[str]
    start_at: Optional[time]
    end_at: Optional[time]
    total_hours: Optional[float]
    total_hours_out: Optional[float]
    status: AttendanceStatus
    notes: str = ""
    calculate_overtime: bool = False
    calculate_lunch_hour: bool = True
    raw_attendance_id: Optional[int] = None


@dataclass(frozen=True)
class RawAttendanceReportRow:
    """Read-model for payroll: a raw attendance record plus its work-day date."""

    work_date: date
    record: RawAttendanceRecord
