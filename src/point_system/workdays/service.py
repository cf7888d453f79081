from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import now_local
from ..common.validators import require_positive_id
from ..core.enums import DayType
from ..core.exceptions import NotFoundError, RepositoryError, ValidationError
from ..employees.repository import EmployeeDirectory
from ..events.publisher import WORKDAY_GENERATED, AttendanceEvent, EventPublisher, LoggingEventPublisher
from ..punches.repository import PunchRepository
from ..punches.windows import load_window
from ..raw_attendance.model import RawAttendanceRecord
from ..raw_attendance.repository import RawAttendanceRepository
from .model import WorkDay
from .normalizer import WorkdayNormalizer
from .repository import WorkDayRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkDayGeneration:
    work_day: WorkDay
    records: list[RawAttendanceRecord]


class WorkDayService:
    def __init__(
        self,
        work_days: WorkDayRepository,
        raw_attendance: RawAttendanceRepository,
        punches: PunchRepository,
        employees: EmployeeDirectory,
        *,
        normalizer: WorkdayNormalizer | None = None,
        publisher: EventPublisher | None = None,
    ):
        self._work_days = work_days
        self._raw_attendance = raw_attendance
        self._punches = punches
        self._employees = employees
        self._normalizer = normalizer or WorkdayNormalizer()
        self._publisher = publisher or LoggingEventPublisher()

    def create_work_day(
        self,
        *,
        work_date: date | None,
        day_type: str | DayType | None,
        today: date | None = None,
    ) -> WorkDayGeneration:
        """Open a past date as a work-day and generate its raw attendance."""
        if work_date is None:
            raise ValidationError("date is required")
        if not day_type:
            raise ValidationError("day type is required")
        try:
            day_type = DayType(day_type)
        except ValueError:
            raise ValidationError(f"Unknown day type {day_type!r}") from None

        today = today or now_local().date()
        if work_date >= today:
            raise ValidationError("Cannot create a work day for the current day or future dates")

        work_day = self._work_days.create(work_date=work_date, day_type=day_type)
        logger.info("Created work day %s for %s (%s)", work_day.work_day_id, work_date, day_type.value)
        return WorkDayGeneration(work_day=work_day, records=self._generate(work_day))

    def generate_workday_attendance(self, work_day_id: int) -> list[RawAttendanceRecord]:
        work_day_id = require_positive_id(work_day_id, "work_day_id")
        work_day = self._work_days.get_by_id(work_day_id)
        if not work_day:
            raise NotFoundError(f"Work day {work_day_id} not found")
        return self._generate(work_day)

    def _generate(self, work_day: WorkDay) -> list[RawAttendanceRecord]:
        records: list[RawAttendanceRecord] = []
        for employee_no in self._punches.list_employee_nos_for_day(work_day.work_date):
            try:
                record = self._generate_one(work_day, employee_no)
            except RepositoryError:
                logger.error(
                    "Work day %s: generation aborted at badge %s after %d records",
                    work_day.work_day_id,
                    employee_no,
                    len(records),
                )
                raise
            if record is not None:
                records.append(record)

        logger.info("Work day %s: %d raw attendance records", work_day.work_day_id, len(records))
        self._publisher.publish(
            AttendanceEvent(
                WORKDAY_GENERATED,
                {"work_day_id": work_day.work_day_id, "records": len(records)},
            )
        )
        return records

    def _generate_one(self, work_day: WorkDay, employee_no: int) -> RawAttendanceRecord | None:
        window = load_window(self._punches, employee_no, work_day.work_date)
        if window is None:
            return None

        employee = self._employees.get_by_registration_number(str(employee_no))
        if employee is None:
            logger.warning("Work day %s: badge %s is not a registered employee, skipped", work_day.work_day_id, employee_no)
            return None

        record = self._normalizer.normalize(work_day=work_day, employee=employee, window=window)
        return self._raw_attendance.upsert(record)
