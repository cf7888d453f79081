from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import parse_clock
from ..common.validators import require_positive_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..events.publisher import RAW_ATTENDANCE_UPDATED, AttendanceEvent, EventPublisher, LoggingEventPublisher
from ..workdays.normalizer import clock_hours
from .model import RawAttendanceRecord
from .repository import RawAttendanceRepository

logger = logging.getLogger(__name__)


class RawAttendanceService:
    """Manual corrections of generated raw attendance records."""

    def __init__(self, raw_attendance: RawAttendanceRepository, *, publisher: EventPublisher | None = None):
        self._raw_attendance = raw_attendance
        self._publisher = publisher or LoggingEventPublisher()

    def get(self, raw_attendance_id: int) -> RawAttendanceRecord:
        record = self._raw_attendance.get_by_id(require_positive_id(raw_attendance_id, "raw_attendance_id"))
        if not record:
            raise NotFoundError(f"Raw attendance {raw_attendance_id} not found")
        return record

    def list_for_work_day(self, *, work_day_id: int, company_id: Optional[int] = None) -> Sequence[RawAttendanceRecord]:
        work_day_id = require_positive_id(work_day_id, "work_day_id")
        if company_id is not None:
            company_id = require_positive_id(company_id, "company_id")
        return self._raw_attendance.list_for_work_day(work_day_id=work_day_id, company_id=company_id)

    def update(
        self,
        raw_attendance_id: int,
        *,
        start_at: Optional[str],
        end_at: Optional[str],
        notes: str = "",
        status: str | AttendanceStatus = AttendanceStatus.PRESENT,
    ) -> RawAttendanceRecord:
        """Overwrite times, notes and status. Total hours follow the new times.

        Times are "HH:MM" or "HH:MM:SS"; seconds are ignored. When either time
        is missing or unparseable the total is cleared.
        """
        current = self.get(raw_attendance_id)
        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown status {status!r}") from None

        start = parse_clock(start_at)
        end = parse_clock(end_at)
        total_hours = clock_hours(start, end) if start and end else None

        self._raw_attendance.update_entry(
            raw_attendance_id=current.raw_attendance_id,
            start_at=start,
            end_at=end,
            total_hours=total_hours,
            notes=(notes or "").strip(),
            status=status,
        )
        return self._changed(current.raw_attendance_id)

    def set_policy_flags(
        self,
        raw_attendance_id: int,
        *,
        calculate_overtime: Optional[bool] = None,
        calculate_lunch_hour: Optional[bool] = None,
    ) -> RawAttendanceRecord:
        """Set the payroll policy flags; a flag left as None keeps its stored value."""
        current = self.get(raw_attendance_id)
        if calculate_overtime is None:
            calculate_overtime = current.calculate_overtime
        if calculate_lunch_hour is None:
            calculate_lunch_hour = current.calculate_lunch_hour
        self._raw_attendance.update_flags(
            raw_attendance_id=current.raw_attendance_id,
            calculate_overtime=bool(calculate_overtime),
            calculate_lunch_hour=bool(calculate_lunch_hour),
        )
        return self._changed(current.raw_attendance_id)

    def _changed(self, raw_attendance_id: int) -> RawAttendanceRecord:
        record = self.get(raw_attendance_id)
        logger.info("Raw attendance %s updated", raw_attendance_id)
        self._publisher.publish(
            AttendanceEvent(
                RAW_ATTENDANCE_UPDATED,
                {"raw_attendance_id": raw_attendance_id, "work_day_id": record.work_day_id},
            )
        )
        return record
