from datetime import time

import pytest

from conftest import make_record

from point_system.core.enums import AttendanceStatus
from point_system.core.exceptions import NotFoundError, ValidationError
from point_system.events.publisher import RAW_ATTENDANCE_UPDATED


@pytest.fixture
def stored(raw_attendance):
    return raw_attendance.upsert(make_record())


def test_update_recomputes_total_hours(raw_attendance_service, stored, publisher):
    record = raw_attendance_service.update(
        stored.raw_attendance_id, start_at="07:30", end_at="16:00:59", notes="  fixed by HR "
    )

    assert (record.start_at, record.end_at) == (time(7, 30), time(16, 0))
    assert record.total_hours == 8.5
    assert record.notes == "fixed by HR"
    assert publisher.names == [RAW_ATTENDANCE_UPDATED]
    assert publisher.events[0].payload == {"raw_attendance_id": stored.raw_attendance_id, "work_day_id": 1}


def test_update_across_midnight(raw_attendance_service, stored):
    record = raw_attendance_service.update(stored.raw_attendance_id, start_at="22:00", end_at="06:00")
    assert record.total_hours == 8


def test_update_with_missing_time_clears_total(raw_attendance_service, stored):
    record = raw_attendance_service.update(
        stored.raw_attendance_id, start_at="08:00", end_at=None, status="absent"
    )

    assert record.end_at is None
    assert record.total_hours is None
    assert record.status == AttendanceStatus.ABSENT


def test_update_rejects_unknown_status(raw_attendance_service, stored):
    with pytest.raises(ValidationError):
        raw_attendance_service.update(stored.raw_attendance_id, start_at="08:00", end_at="17:00", status="late")


def test_update_missing_record(raw_attendance_service):
    with pytest.raises(NotFoundError):
        raw_attendance_service.update(99, start_at="08:00", end_at="17:00")


def test_policy_flags(raw_attendance_service, stored):
    record = raw_attendance_service.set_policy_flags(
        stored.raw_attendance_id, calculate_overtime=True, calculate_lunch_hour=False
    )

    assert record.calculate_overtime is True
    assert record.calculate_lunch_hour is False
    assert record.total_hours == stored.total_hours


def test_policy_flag_left_out_keeps_its_stored_value(raw_attendance_service, stored):
    raw_attendance_service.set_policy_flags(stored.raw_attendance_id, calculate_overtime=True)

    record = raw_attendance_service.set_policy_flags(stored.raw_attendance_id, calculate_lunch_hour=False)

    assert record.calculate_overtime is True
    assert record.calculate_lunch_hour is False


def test_list_for_work_day_filters_company(raw_attendance_service, raw_attendance, stored):
    raw_attendance.upsert(make_record(employee_id=3, company_id=2))
    raw_attendance.upsert(make_record(work_day_id=2, employee_id=2))

    assert len(raw_attendance_service.list_for_work_day(work_day_id=1)) == 2
    [only] = raw_attendance_service.list_for_work_day(work_day_id=1, company_id=2)
    assert only.employee_id == 3


def test_ids_are_validated(raw_attendance_service):
    with pytest.raises(ValidationError):
        raw_attendance_service.get(0)
    with pytest.raises(ValidationError):
        raw_attendance_service.list_for_work_day(work_day_id="abc")
