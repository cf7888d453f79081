"""Daily check-in/check-out reconstruction.

A day's window is built from that day's punches; when the day ends on an
unmatched IN, the check-out is borrowed from the following day's first OUT
(overnight shift).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from ..common.datetime_utils import day_bounds
from ..core.enums import PunchDirection
from .model import PunchRecord

if TYPE_CHECKING:
    from .repository import PunchRepository


@dataclass(frozen=True)
class DailyWindow:
    employee_no: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    punches: tuple[PunchRecord, ...] = field(default=(), repr=False, compare=False)

    @property
    def is_complete(self) -> bool:
        return self.check_in is not None and self.check_out is not None

    @property
    def hours_out(self) -> Optional[float]:
        if not self.is_complete:
            return None
        return hours_out(self.punches, self.check_in, self.check_out)


def hours_out(punches: Iterable[PunchRecord], start: datetime, end: datetime) -> float:
    """Hours spent away between start and end (inclusive).

    Folds the ordered punches and sums every OUT -> IN gap between adjacent
    punches inside the range.
    """
    seconds = 0.0
    previous: Optional[PunchRecord] = None
    for punch in sorted(punches, key=lambda p: (p.timestamp, p.punch_id)):
        if not (start <= punch.timestamp <= end):
            continue
        if (
            previous is not None
            and previous.direction == PunchDirection.OUT
            and punch.direction == PunchDirection.IN
        ):
            seconds += (punch.timestamp - previous.timestamp).total_seconds()
        previous = punch
    return seconds / 3600


def reconstruct_window(employee_no: int, day: date, punches: Sequence[PunchRecord]) -> Optional[DailyWindow]:
    """Build the window for `day` from punches covering `day` and the day after.

    Returns None when the day has no IN punch.
    """
    ordered = sorted(punches, key=lambda p: (p.timestamp, p.punch_id))
    next_day = day + timedelta(days=1)
    today = [p for p in ordered if p.timestamp.date() == day]
    ins = [p for p in today if p.direction == PunchDirection.IN]
    if not ins:
        return None

    outs = [p for p in today if p.direction == PunchDirection.OUT]
    first_in = ins[0]
    last_in = ins[-1]
    last_punch = today[-1]

    if last_punch.timestamp == last_in.timestamp:
        next_outs = [p for p in ordered if p.timestamp.date() == next_day and p.direction == PunchDirection.OUT]
        check_out = next_outs[0].timestamp if next_outs else None
    else:
        check_out = outs[-1].timestamp if outs else None

    return DailyWindow(
        employee_no=int(employee_no),
        work_date=day,
        check_in=first_in.timestamp,
        check_out=check_out,
        punches=tuple(ordered),
    )


def load_window(punches: "PunchRepository", employee_no: int, day: date) -> Optional[DailyWindow]:
    start, end = day_bounds(day, days=2)
    return reconstruct_window(int(employee_no), day, punches.list_for_employee(int(employee_no), start, end))
