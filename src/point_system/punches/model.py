from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PunchDirection


@dataclass(frozen=True)
class PunchRecord:
    """Domain entity: a stored punch (attendance log).

    `employee_no` is the badge/registration number reported by the terminal.
    `direction` is the classified system punch; it is only None for legacy rows
    that were stored before classification and have not been backfilled yet.
    """

    punch_id: int
    employee_no: int
    timestamp: datetime
    direction: Optional[PunchDirection]
    serial_number: str
    uid: int = 0
    status: int = 0
    punch_hint: int = 0
