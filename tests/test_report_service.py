from __future__ import annotations

from datetime import date

import pytest

from conftest import make_record

from point_system.core.exceptions import DeadlineExceededError, ValidationError
from point_system.payroll.service import PayrollReportService
from point_system.raw_attendance.model import RawAttendanceReportRow


class FakeRawAttendanceRepo:
    def __init__(self, rows):
        self._rows = rows
        self.last_args = None

    def get_report_rows(self, *, company_id: int, start_date: date, end_date: date, timeout_ms=None):
        self.last_args = {
            "company_id": company_id,
            "start_date": start_date,
            "end_date": end_date,
            "timeout_ms": timeout_ms,
        }
        return self._rows


class SteppingClock:
    def __init__(self, step: float):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


def _row(day: int, **overrides):
    return RawAttendanceReportRow(work_date=date(2025, 1, day), record=make_record(**overrides))


def test_report_groups_units_per_employee():
    rows = [
        _row(20, employee_id=2, employee_name="Bruno Lima", total_hours=10, total_hours_out=0.0),
        _row(20, employee_id=1, total_hours=10, total_hours_out=0.0),
        _row(21, employee_id=1, total_hours=10, total_hours_out=0.0),
        _row(22, employee_id=1, total_hours=None, total_hours_out=None),
    ]

    report = PayrollReportService(FakeRawAttendanceRepo(rows)).generate_report(
        company_id=1, start=date(2025, 1, 20), end=date(2025, 1, 22)
    )

    assert [(r.employee_id, r.employee_name, r.workday_units) for r in report] == [
        (1, "Ana Souza", 2.0),
        (2, "Bruno Lima", 1.0),
    ]


def test_report_picks_a_stable_display_name():
    rows = [
        _row(20, employee_name="Ana Souza"),
        _row(21, employee_name="Ana B. Souza"),
        _row(22, employee_name=None),
    ]

    [row] = PayrollReportService(FakeRawAttendanceRepo(rows)).generate_report(
        company_id=1, start=date(2025, 1, 20), end=date(2025, 1, 22)
    )

    assert row.employee_name == "Ana B. Souza"


def test_empty_range_gives_empty_report():
    report = PayrollReportService(FakeRawAttendanceRepo([])).generate_report(
        company_id=1, start=date(2025, 1, 1), end=date(2025, 1, 31)
    )
    assert report == []


def test_report_forwards_filters_and_timeout():
    repo = FakeRawAttendanceRepo([])
    svc = PayrollReportService(repo, timeout=2.5)

    svc.generate_report(company_id=7, start=date(2025, 1, 1), end=date(2025, 1, 31))

    assert repo.last_args == {
        "company_id": 7,
        "start_date": date(2025, 1, 1),
        "end_date": date(2025, 1, 31),
        "timeout_ms": 2500,
    }


def test_report_past_deadline_returns_no_partial_totals():
    rows = [_row(day) for day in range(1, 11)]
    svc = PayrollReportService(FakeRawAttendanceRepo(rows), timeout=3, clock=SteppingClock(1.0))

    with pytest.raises(DeadlineExceededError):
        svc.generate_report(company_id=1, start=date(2025, 1, 1), end=date(2025, 1, 31))


def test_per_call_timeout_overrides_default():
    repo = FakeRawAttendanceRepo([_row(1)])
    svc = PayrollReportService(repo, timeout=0.001, clock=SteppingClock(0.0))

    [row] = svc.generate_report(company_id=1, start=date(2025, 1, 1), end=date(2025, 1, 1), timeout=10)

    assert repo.last_args["timeout_ms"] == 10000
    assert row.workday_units == 1.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"company_id": 0, "start": date(2025, 1, 1), "end": date(2025, 1, 2)},
        {"company_id": 1, "start": None, "end": date(2025, 1, 2)},
        {"company_id": 1, "start": date(2025, 1, 3), "end": date(2025, 1, 2)},
    ],
)
def test_report_validates_input(kwargs):
    with pytest.raises(ValidationError):
        PayrollReportService(FakeRawAttendanceRepo([])).generate_report(**kwargs)
