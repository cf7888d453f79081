from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import SHIFT_WINDOW_HOURS
from ..core.enums import PunchDirection
from .model import PunchRecord
from .repository import PunchRepository


@dataclass(frozen=True)
class ClassificationContext:
    """Everything the classifier knows about one employee: the last classified
    punch at or before the event being classified.

    Only valid inside the employee's serialized section (PunchRepository.serialized).
    """

    employee_no: int
    last_punch: Optional[PunchRecord] = None


@dataclass(frozen=True)
class DirectionDecision:
    direction: PunchDirection
    reason: str
    elapsed_hours: Optional[float] = None


class PunchClassifier:
    """Assigns IN/OUT to a new punch from the employee's punch history.

    - no previous punch            -> IN
    - previous punch is OUT        -> IN
    - previous punch is IN         -> OUT if the new punch is within the shift
      window of that day's first IN, otherwise IN (a new shift started without
      a clock-out)
    """

    def __init__(self, punches: PunchRepository, *, shift_window_hours: float = SHIFT_WINDOW_HOURS):
        self._punches = punches
        self._shift_window_hours = float(shift_window_hours)

    def decide(self, context: ClassificationContext, event_time: datetime) -> DirectionDecision:
        last = context.last_punch
        if last is None:
            return DirectionDecision(PunchDirection.IN, "first punch")

        if last.direction != PunchDirection.IN:
            return DirectionDecision(PunchDirection.IN, "previous punch is OUT")

        first_in = self._punches.get_first_in_of_day(context.employee_no, last.timestamp.date(), until=event_time) or last
        elapsed = (event_time - first_in.timestamp).total_seconds() / 3600
        if elapsed <= self._shift_window_hours:
            return DirectionDecision(PunchDirection.OUT, "within shift window", elapsed)
        return DirectionDecision(PunchDirection.IN, "shift window exceeded", elapsed)

    def classify(self, context: ClassificationContext, event_time: datetime) -> PunchDirection:
        return self.decide(context, event_time).direction
