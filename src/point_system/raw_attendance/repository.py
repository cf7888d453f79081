from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import RawAttendanceRecord, RawAttendanceReportRow


class RawAttendanceRepository(Protocol):
    def upsert(self, record: RawAttendanceRecord) -> RawAttendanceRecord:
        """Insert, or refresh the computed columns of the (work_day_id, employee_id) row.

        Notes and policy flags of an existing row are kept.
        """

        raise NotImplementedError

    def get_by_id(self, raw_attendance_id: int) -> Optional[RawAttendanceRecord]:
        raise NotImplementedError

    def list_for_work_day(self, *, work_day_id: int, company_id: Optional[int] = None) -> Sequence[RawAttendanceRecord]:
        raise NotImplementedError

    def update_entry(
        self,
        *,
        raw_attendance_id: int,
        start_at: Optional[time],
        end_at: Optional[time],
        total_hours: Optional[float],
        notes: str,
        status: AttendanceStatus,
    ) -> bool:
        raise NotImplementedError

    def update_flags(
        self,
        *,
        raw_attendance_id: int,
        calculate_overtime: bool,
        calculate_lunch_hour: bool,
    ) -> bool:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        company_id: int,
        start_date: date,
        end_date: date,
        timeout_ms: Optional[int] = None,
    ) -> Sequence[RawAttendanceReportRow]:
        raise NotImplementedError
