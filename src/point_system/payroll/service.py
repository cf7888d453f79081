from __future__ import annotations

import logging
import time
from datetime import date
from typing import Optional

from ..common.validators import require_positive_id
from ..core.constants import REPORT_TIMEOUT_SECONDS
from ..core.exceptions import DeadlineExceededError, ValidationError
from ..raw_attendance.model import RawAttendanceRecord
from ..raw_attendance.repository import RawAttendanceRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollReportRow

logger = logging.getLogger(__name__)


class PayrollReportService:
    def __init__(
        self,
        raw_attendance: RawAttendanceRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        timeout: float = REPORT_TIMEOUT_SECONDS,
        clock=time.monotonic,
    ):
        self._raw_attendance = raw_attendance
        self._calculator = calculator or StandardPayrollCalculator()
        self._timeout = float(timeout)
        self._clock = clock

    def generate_report(
        self,
        *,
        company_id: int,
        start: date,
        end: date,
        timeout: Optional[float] = None,
    ) -> list[PayrollReportRow]:
        """Workday units per employee of a company over [start, end].

        Raises DeadlineExceededError instead of returning partial totals when
        the report takes longer than `timeout` seconds.
        """
        company_id = require_positive_id(company_id, "company_id")
        if start is None or end is None:
            raise ValidationError("start and end dates are required")
        if start > end:
            raise ValidationError("start date must not be after end date")

        timeout = self._timeout if timeout is None else float(timeout)
        deadline = self._clock() + timeout

        rows = self._raw_attendance.get_report_rows(
            company_id=company_id,
            start_date=start,
            end_date=end,
            timeout_ms=max(int(timeout * 1000), 1),
        )

        self._check_deadline(deadline, company_id=company_id, timeout=timeout)

        by_employee: dict[int, list[RawAttendanceRecord]] = {}
        names: dict[int, str] = {}
        for row in rows:
            self._check_deadline(deadline, company_id=company_id, timeout=timeout)
            record = row.record
            by_employee.setdefault(record.employee_id, []).append(record)
            if record.employee_name:
                current = names.get(record.employee_id)
                if current is None or record.employee_name < current:
                    names[record.employee_id] = record.employee_name

        report = [
            PayrollReportRow(
                employee_id=employee_id,
                employee_name=names.get(employee_id, ""),
                workday_units=self._calculator.units_for(records),
            )
            for employee_id, records in sorted(by_employee.items())
        ]
        logger.info("Payroll report for company %s %s..%s: %d employees", company_id, start, end, len(report))
        return report

    def _check_deadline(self, deadline: float, *, company_id: int, timeout: float) -> None:
        if self._clock() > deadline:
            logger.warning("Payroll report for company %s exceeded %.1fs", company_id, timeout)
            raise DeadlineExceededError(f"Payroll report exceeded its {timeout:g}s deadline")
