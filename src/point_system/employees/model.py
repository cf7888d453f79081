from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee as seen by the attendance engine.

    Note: `registration_number` is the badge number the terminals report.
    """

    employee_id: int
    company_id: int
    registration_number: str
    full_name: str
    qualification: str = ""
