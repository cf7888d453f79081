from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PayrollReportRow:
    employee_id: int
    employee_name: str
    workday_units: float
