from __future__ import annotations

import struct
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from point_system.core.enums import AttendanceStatus, DayType, PunchDirection
from point_system.devices.model import Device
from point_system.employees.model import Employee
from point_system.punches.model import PunchRecord
from point_system.punches.service import PunchService
from point_system.raw_attendance.model import RawAttendanceRecord, RawAttendanceReportRow
from point_system.raw_attendance.service import RawAttendanceService
from point_system.workdays.model import WorkDay
from point_system.workdays.service import WorkDayService


def at(value: str) -> datetime:
    return datetime.strptime(value, "%Y-%m-%d %H:%M")


def terminal_hex(badge: int, when: datetime, *, uid: int = 1, status: int = 1, punch: int = 0) -> str:
    """Encode a 40-byte terminal record the way the devices push it."""
    ticks = (((when.year - 2000) * 12 + when.month - 1) * 31 + when.day - 1) * 24 + when.hour
    ticks = (ticks * 60 + when.minute) * 60 + when.second
    packed = struct.pack("<H24sBIB8s", uid, str(badge).encode("ascii"), status, ticks, punch, b"")
    return packed.hex().upper()


class InMemoryPunches:
    def __init__(self):
        self._rows: list[PunchRecord] = []
        self._id = 0
        self.locked: list[int] = []

    def add(self, employee_no: int, when: str, direction: Optional[str], serial_number: str = "SN-1") -> PunchRecord:
        """Seed a punch directly (bypassing classification)."""
        self._id += 1
        rec = PunchRecord(
            punch_id=self._id,
            employee_no=employee_no,
            timestamp=at(when),
            direction=PunchDirection(direction) if direction else None,
            serial_number=serial_number,
        )
        self._rows.append(rec)
        return rec

    def _ordered(self, employee_no: int) -> list[PunchRecord]:
        items = [p for p in self._rows if p.employee_no == employee_no]
        items.sort(key=lambda p: (p.timestamp, p.punch_id))
        return items

    def append(self, *, employee_no, timestamp, direction, serial_number, uid=0, status=0, punch_hint=0) -> PunchRecord:
        self._id += 1
        rec = PunchRecord(
            punch_id=self._id,
            employee_no=employee_no,
            timestamp=timestamp,
            direction=direction,
            serial_number=serial_number,
            uid=uid,
            status=status,
            punch_hint=punch_hint,
        )
        self._rows.append(rec)
        return rec

    def get_last_classified_until(self, employee_no: int, until: datetime) -> Optional[PunchRecord]:
        items = [p for p in self._ordered(employee_no) if p.direction is not None and p.timestamp <= until]
        return items[-1] if items else None

    def list_unclassified(self, employee_no: int, *, until: datetime):
        return [p for p in self._ordered(employee_no) if p.direction is None and p.timestamp <= until]

    def set_direction(self, punch_id: int, direction: PunchDirection) -> bool:
        for i, p in enumerate(self._rows):
            if p.punch_id == punch_id:
                self._rows[i] = replace(p, direction=direction)
                return True
        return False

    def get_first_in_of_day(self, employee_no: int, day: date, *, until: datetime) -> Optional[PunchRecord]:
        for p in self._ordered(employee_no):
            if p.timestamp.date() == day and p.timestamp <= until and p.direction == PunchDirection.IN:
                return p
        return None

    def list_for_employee(self, employee_no: int, start: datetime, end: datetime):
        return [p for p in self._ordered(employee_no) if start <= p.timestamp < end]

    def list_employee_nos_for_day(self, day: date):
        return sorted({p.employee_no for p in self._rows if p.timestamp.date() == day})

    @contextmanager
    def serialized(self, employee_no: int):
        self.locked.append(employee_no)
        yield

    def direction_of(self, punch_id: int) -> Optional[PunchDirection]:
        return next(p.direction for p in self._rows if p.punch_id == punch_id)


class InMemoryDevices:
    def __init__(self):
        self.devices: dict[str, Device] = {}

    def get_by_serial(self, serial_number: str) -> Optional[Device]:
        return self.devices.get(serial_number)

    def register(self, *, serial_number, name=None, location=None, company_id=None) -> Device:
        if serial_number in self.devices:
            return self.devices[serial_number]
        device = Device(len(self.devices) + 1, serial_number, name, location, company_id)
        self.devices[serial_number] = device
        return device


class InMemoryEmployees:
    def __init__(self, employees: list[Employee]):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_registration_number(self, registration_number: str) -> Optional[Employee]:
        for e in self._by_id.values():
            if e.registration_number == registration_number:
                return e
        return None


class InMemoryWorkDays:
    def __init__(self):
        self.by_id: dict[int, WorkDay] = {}

    def create(self, *, work_date: date, day_type: DayType) -> WorkDay:
        wd = WorkDay(work_day_id=len(self.by_id) + 1, work_date=work_date, day_type=day_type)
        self.by_id[wd.work_day_id] = wd
        return wd

    def get_by_id(self, work_day_id: int) -> Optional[WorkDay]:
        return self.by_id.get(work_day_id)


class InMemoryRawAttendance:
    """Upserts keyed by (work_day_id, employee_id), like the unique key in schema.sql."""

    def __init__(self, work_days: InMemoryWorkDays):
        self._work_days = work_days
        self.rows: dict[int, RawAttendanceRecord] = {}
        self._id = 0

    def upsert(self, record: RawAttendanceRecord) -> RawAttendanceRecord:
        for rid, existing in self.rows.items():
            if (existing.work_day_id, existing.employee_id) == (record.work_day_id, record.employee_id):
                updated = replace(
                    record,
                    raw_attendance_id=rid,
                    notes=existing.notes,
                    calculate_overtime=existing.calculate_overtime,
                    calculate_lunch_hour=existing.calculate_lunch_hour,
                )
                self.rows[rid] = updated
                return updated
        self._id += 1
        stored = replace(record, raw_attendance_id=self._id)
        self.rows[self._id] = stored
        return stored

    def get_by_id(self, raw_attendance_id: int) -> Optional[RawAttendanceRecord]:
        return self.rows.get(raw_attendance_id)

    def list_for_work_day(self, *, work_day_id: int, company_id: Optional[int] = None):
        return [
            r
            for r in self.rows.values()
            if r.work_day_id == work_day_id and (company_id is None or r.company_id == company_id)
        ]

    def update_entry(self, *, raw_attendance_id, start_at, end_at, total_hours, notes, status) -> bool:
        r = self.rows[raw_attendance_id]
        self.rows[raw_attendance_id] = replace(
            r, start_at=start_at, end_at=end_at, total_hours=total_hours, notes=notes, status=status
        )
        return True

    def update_flags(self, *, raw_attendance_id, calculate_overtime, calculate_lunch_hour) -> bool:
        r = self.rows[raw_attendance_id]
        self.rows[raw_attendance_id] = replace(
            r, calculate_overtime=calculate_overtime, calculate_lunch_hour=calculate_lunch_hour
        )
        return True

    def get_report_rows(self, *, company_id, start_date, end_date, timeout_ms=None):
        out = []
        for r in self.rows.values():
            wd = self._work_days.get_by_id(r.work_day_id)
            if r.company_id == company_id and start_date <= wd.work_date <= end_date:
                out.append(RawAttendanceReportRow(work_date=wd.work_date, record=r))
        return out


class RecordingPublisher:
    def __init__(self):
        self.events = []

    def publish(self, event) -> None:
        self.events.append(event)

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.events]


def make_record(**overrides) -> RawAttendanceRecord:
    values = dict(
        work_day_id=1,
        company_id=1,
        employee_id=1,
        employee_name="Ana Souza",
        position="Operator",
        start_at=time(8, 0),
        end_at=time(17, 0),
        total_hours=9.0,
        total_hours_out=0.0,
        status=AttendanceStatus.PRESENT,
    )
    values.update(overrides)
    return RawAttendanceRecord(**values)


@pytest.fixture
def punches() -> InMemoryPunches:
    return InMemoryPunches()


@pytest.fixture
def devices() -> InMemoryDevices:
    return InMemoryDevices()


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(employee_id=1, company_id=1, registration_number="200", full_name="Ana Souza", qualification="Operator"),
            Employee(employee_id=2, company_id=1, registration_number="201", full_name="Bruno Lima", qualification=""),
            Employee(employee_id=3, company_id=2, registration_number="300", full_name="Carla Dias", qualification="Driver"),
        ]
    )


@pytest.fixture
def work_days() -> InMemoryWorkDays:
    return InMemoryWorkDays()


@pytest.fixture
def raw_attendance(work_days) -> InMemoryRawAttendance:
    return InMemoryRawAttendance(work_days)


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def punch_service(punches, devices, publisher) -> PunchService:
    return PunchService(punches, devices, publisher=publisher)


@pytest.fixture
def work_day_service(work_days, raw_attendance, punches, employees, publisher) -> WorkDayService:
    return WorkDayService(work_days, raw_attendance, punches, employees, publisher=publisher)


@pytest.fixture
def raw_attendance_service(raw_attendance, publisher) -> RawAttendanceService:
    return RawAttendanceService(raw_attendance, publisher=publisher)
