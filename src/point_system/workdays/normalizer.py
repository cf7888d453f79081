from __future__ import annotations

from datetime import time
from typing import Optional

from ..core.enums import AttendanceStatus
from ..employees.model import Employee
from ..punches.windows import DailyWindow
from ..raw_attendance.model import RawAttendanceRecord
from .model import WorkDay


def clock_hours(start: time, end: time) -> float:
    """Hours between two clock times (hour and minute only).

    An end earlier than start is taken to be on the next day.
    """
    start_minutes = start.hour * 60 + start.minute
    end_minutes = end.hour * 60 + end.minute
    if end_minutes < start_minutes:
        end_minutes += 24 * 60
    return (end_minutes - start_minutes) / 60


def attendance_status(total_hours: Optional[float]) -> AttendanceStatus:
    if total_hours is not None and total_hours > 0:
        return AttendanceStatus.PRESENT
    return AttendanceStatus.ABSENT


class WorkdayNormalizer:
    """Turns a reconstructed daily window into a raw attendance record."""

    def normalize(self, *, work_day: WorkDay, employee: Employee, window: DailyWindow) -> RawAttendanceRecord:
        start_at = window.check_in.time() if window.check_in else None
        end_at = window.check_out.time() if window.check_out else None

        total_hours = None
        total_hours_out = None
        if window.is_complete:
            total_hours = clock_hours(start_at, end_at)
            total_hours_out = window.hours_out

        return RawAttendanceRecord(
            work_day_id=work_day.work_day_id,
            company_id=employee.company_id,
            employee_id=employee.employee_id,
            employee_name=employee.full_name,
            position=employee.qualification or None,
            start_at=start_at,
            end_at=end_at,
            total_hours=total_hours,
            total_hours_out=total_hours_out,
            status=attendance_status(total_hours),
        )
