from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .devices.mysql_device_repository import MySQLDeviceRepository
from .employees.mysql_employee_repository import MySQLEmployeeDirectory
from .events.publisher import EventPublisher, LoggingEventPublisher
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollReportService
from .punches.classifier import PunchClassifier
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.service import PunchService
from .raw_attendance.mysql_raw_attendance_repository import MySQLRawAttendanceRepository
from .raw_attendance.service import RawAttendanceService
from .workdays.mysql_workday_repository import MySQLWorkDayRepository
from .workdays.service import WorkDayService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    devices_repo: MySQLDeviceRepository
    employees_repo: MySQLEmployeeDirectory
    punches_repo: MySQLPunchRepository
    work_days_repo: MySQLWorkDayRepository
    raw_attendance_repo: MySQLRawAttendanceRepository

    punch_service: PunchService
    work_day_service: WorkDayService
    raw_attendance_service: RawAttendanceService
    payroll_report_service: PayrollReportService


def build_container(
    *,
    db_config: dict,
    policy: Optional[dict] = None,
    publisher: Optional[EventPublisher] = None,
) -> Container:
    policy = policy or {}
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    publisher = publisher or LoggingEventPublisher()

    devices_repo = MySQLDeviceRepository(conn)
    employees_repo = MySQLEmployeeDirectory(conn)
    punches_repo = MySQLPunchRepository(conn)
    work_days_repo = MySQLWorkDayRepository(conn)
    raw_attendance_repo = MySQLRawAttendanceRepository(conn)

    classifier = PunchClassifier(
        punches_repo,
        shift_window_hours=policy.get("SHIFT_WINDOW_HOURS", constants.SHIFT_WINDOW_HOURS),
    )
    calculator = StandardPayrollCalculator(
        standard_workday_hours=policy.get("STANDARD_WORKDAY_HOURS", constants.STANDARD_WORKDAY_HOURS),
        lunch_break_hours=policy.get("LUNCH_BREAK_HOURS", constants.LUNCH_BREAK_HOURS),
    )

    punch_service = PunchService(punches_repo, devices_repo, classifier=classifier, publisher=publisher)
    work_day_service = WorkDayService(
        work_days_repo,
        raw_attendance_repo,
        punches_repo,
        employees_repo,
        publisher=publisher,
    )
    raw_attendance_service = RawAttendanceService(raw_attendance_repo, publisher=publisher)
    payroll_report_service = PayrollReportService(
        raw_attendance_repo,
        calculator=calculator,
        timeout=policy.get("REPORT_TIMEOUT_SECONDS", constants.REPORT_TIMEOUT_SECONDS),
    )

    return Container(
        conn=conn,
        devices_repo=devices_repo,
        employees_repo=employees_repo,
        punches_repo=punches_repo,
        work_days_repo=work_days_repo,
        raw_attendance_repo=raw_attendance_repo,
        punch_service=punch_service,
        work_day_service=work_day_service,
        raw_attendance_service=raw_attendance_service,
        payroll_report_service=payroll_report_service,
    )
