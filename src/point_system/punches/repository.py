from __future__ import annotations

from datetime import date, datetime
from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import PunchDirection
from .model import PunchRecord


class PunchRepository(Protocol):
    def append(
        self,
        *,
        employee_no: int,
        timestamp: datetime,
        direction: PunchDirection,
        serial_number: str,
        uid: int = 0,
        status: int = 0,
        punch_hint: int = 0,
    ) -> PunchRecord:
        raise NotImplementedError

    def get_last_classified_until(self, employee_no: int, until: datetime) -> Optional[PunchRecord]:
        """Latest classified punch with timestamp <= until."""

        raise NotImplementedError

    def list_unclassified(self, employee_no: int, *, until: datetime) -> Sequence[PunchRecord]:
        """Punches stored without a direction at or before `until`, oldest first."""

        raise NotImplementedError

    def set_direction(self, punch_id: int, direction: PunchDirection) -> bool:
        raise NotImplementedError

    def get_first_in_of_day(self, employee_no: int, day: date, *, until: datetime) -> Optional[PunchRecord]:
        """Earliest IN on `day` with timestamp <= until."""

        raise NotImplementedError

    def list_for_employee(self, employee_no: int, start: datetime, end: datetime) -> Sequence[PunchRecord]:
        """Punches with start <= timestamp < end, ordered by timestamp."""

        raise NotImplementedError

    def list_employee_nos_for_day(self, day: date) -> Sequence[int]:
        raise NotImplementedError

    def serialized(self, employee_no: int) -> ContextManager[None]:
        """Exclusive section for classifying one employee's punches."""

        raise NotImplementedError
