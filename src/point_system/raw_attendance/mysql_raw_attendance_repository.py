from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, optional_float
from .model import RawAttendanceRecord, RawAttendanceReportRow
from .repository import RawAttendanceRepository

_COLUMNS = """
    ra.raw_attendance_id, ra.work_day_id, ra.company_id, ra.employee_id, ra.employee_name, ra.position,
    ra.start_at, ra.end_at, ra.total_hours, ra.total_hour_out, ra.status, ra.notes,
    ra.calculate_over_time, ra.calculate_lunch_hour
"""


def _to_record(r: dict) -> RawAttendanceRecord:
    return RawAttendanceRecord(
        raw_attendance_id=int(r["raw_attendance_id"]),
        work_day_id=int(r["work_day_id"]),
        company_id=int(r["company_id"]),
        employee_id=int(r["employee_id"]),
        employee_name=r.get("employee_name"),
        position=r.get("position"),
        start_at=normalize_mysql_time(r.get("start_at")),
        end_at=normalize_mysql_time(r.get("end_at")),
        total_hours=optional_float(r.get("total_hours")),
        total_hours_out=optional_float(r.get("total_hour_out")),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes") or "",
        calculate_overtime=bool(r.get("calculate_over_time")),
        calculate_lunch_hour=bool(r.get("calculate_lunch_hour")),
    )


class MySQLRawAttendanceRepository(RawAttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, record: RawAttendanceRecord) -> RawAttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            # LAST_INSERT_ID(expr) makes lastrowid point at the existing row on update.
            cur.execute(
                """
                INSERT INTO raw_attendances(
                    work_day_id, company_id, employee_id, employee_name, position,
                    start_at, end_at, total_hours, total_hour_out, status, notes,
                    calculate_over_time, calculate_lunch_hour
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    raw_attendance_id=LAST_INSERT_ID(raw_attendance_id),
                    company_id=VALUES(company_id),
                    employee_name=VALUES(employee_name),
                    position=VALUES(position),
                    start_at=VALUES(start_at),
                    end_at=VALUES(end_at),
                    total_hours=VALUES(total_hours),
                    total_hour_out=VALUES(total_hour_out),
                    status=VALUES(status)
                """,
                (
                    record.work_day_id,
                    record.company_id,
                    record.employee_id,
                    record.employee_name,
                    record.position,
                    record.start_at,
                    record.end_at,
                    record.total_hours,
                    record.total_hours_out,
                    record.status.value,
                    record.notes,
                    int(record.calculate_overtime),
                    int(record.calculate_lunch_hour),
                ),
            )
            raw_attendance_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM raw_attendances ra WHERE ra.raw_attendance_id=%s", (raw_attendance_id,))
            return _to_record(fetchone(cur))

    def get_by_id(self, raw_attendance_id: int) -> Optional[RawAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM raw_attendances ra WHERE ra.raw_attendance_id=%s", (int(raw_attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_work_day(self, *, work_day_id: int, company_id: Optional[int] = None) -> Sequence[RawAttendanceRecord]:
        clauses = ["ra.work_day_id=%s"]
        params: list[object] = [int(work_day_id)]
        if company_id is not None:
            clauses.append("ra.company_id=%s")
            params.append(int(company_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM raw_attendances ra
                WHERE {" AND ".join(clauses)}
                ORDER BY ra.employee_id
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def update_entry(
        self,
        *,
        raw_attendance_id: int,
        start_at: Optional[time],
        end_at: Optional[time],
        total_hours: Optional[float],
        notes: str,
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE raw_attendances
                SET start_at=%s, end_at=%s, total_hours=%s, notes=%s, status=%s
                WHERE raw_attendance_id=%s
                """,
                (start_at, end_at, total_hours, notes, status.value, int(raw_attendance_id)),
            )
            return cur.rowcount > 0

    def update_flags(
        self,
        *,
        raw_attendance_id: int,
        calculate_overtime: bool,
        calculate_lunch_hour: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE raw_attendances
                SET calculate_over_time=%s, calculate_lunch_hour=%s
                WHERE raw_attendance_id=%s
                """,
                (int(calculate_overtime), int(calculate_lunch_hour), int(raw_attendance_id)),
            )
            return cur.rowcount > 0

    def get_report_rows(
        self,
        *,
        company_id: int,
        start_date: date,
        end_date: date,
        timeout_ms: Optional[int] = None,
    ) -> Sequence[RawAttendanceReportRow]:
        hint = f"/*+ MAX_EXECUTION_TIME({int(timeout_ms)}) */" if timeout_ms else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {hint} {_COLUMNS}, wd.work_date
                FROM raw_attendances ra
                JOIN work_days wd ON wd.work_day_id = ra.work_day_id
                WHERE ra.company_id=%s AND wd.work_date BETWEEN %s AND %s
                ORDER BY ra.employee_id, wd.work_date
                """,
                (int(company_id), start_date, end_date),
            )
            return [RawAttendanceReportRow(work_date=r["work_date"], record=_to_record(r)) for r in fetchall(cur)]
