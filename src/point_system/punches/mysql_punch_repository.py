from __future__ import annotations

from datetime import date, datetime
from typing import ContextManager, Optional, Sequence

from ..core.enums import PunchDirection
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, named_lock
from .model import PunchRecord
from .repository import PunchRepository

_SELECT = """
    SELECT punch_id, employee_no, `timestamp`, system_punch, serial_number, uid, status, punch
    FROM attendance_logs
"""


def _to_punch(r: dict) -> PunchRecord:
    direction = r.get("system_punch")
    return PunchRecord(
        punch_id=int(r["punch_id"]),
        employee_no=int(r["employee_no"]),
        timestamp=r["timestamp"],
        direction=PunchDirection(direction) if direction else None,
        serial_number=r["serial_number"],
        uid=int(r.get("uid") or 0),
        status=int(r.get("status") or 0),
        punch_hint=int(r.get("punch") or 0),
    )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, lock_timeout: int = 10):
        self._conn_factory = conn_factory
        self._lock_timeout = int(lock_timeout)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(employee_no, `timestamp`, system_punch, serial_number, uid, status, punch)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_no), timestamp, direction.value, serial_number, uid, status, punch_hint),
            )
            return PunchRecord(
                punch_id=int(cur.lastrowid),
                employee_no=int(employee_no),
                timestamp=timestamp,
                direction=direction,
                serial_number=serial_number,
                uid=uid,
                status=status,
                punch_hint=punch_hint,
            )

    def get_last_classified_until(self, employee_no: int, until: datetime) -> Optional[PunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE employee_no=%s AND system_punch IS NOT NULL AND `timestamp` <= %s
                ORDER BY `timestamp` DESC, punch_id DESC
                LIMIT 1
                """,
                (int(employee_no), until),
            )
            r = fetchone(cur)
            return _to_punch(r) if r else None

    def list_unclassified(self, employee_no: int, *, until: datetime) -> Sequence[PunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE employee_no=%s AND system_punch IS NULL AND `timestamp` <= %s ORDER BY `timestamp`, punch_id",
                (int(employee_no), until),
            )
            return [_to_punch(r) for r in fetchall(cur)]

    def set_direction(self, punch_id: int, direction: PunchDirection) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_logs SET system_punch=%s WHERE punch_id=%s",
                (direction.value, int(punch_id)),
            )
            return cur.rowcount > 0

    def get_first_in_of_day(self, employee_no: int, day: date, *, until: datetime) -> Optional[PunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE employee_no=%s AND DATE(`timestamp`)=%s AND `timestamp` <= %s AND system_punch=%s
                ORDER BY `timestamp` ASC
                LIMIT 1
                """,
                (int(employee_no), day, until, PunchDirection.IN.value),
            )
            r = fetchone(cur)
            return _to_punch(r) if r else None

    def list_for_employee(self, employee_no: int, start: datetime, end: datetime) -> Sequence[PunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE employee_no=%s AND `timestamp` >= %s AND `timestamp` < %s ORDER BY `timestamp`, punch_id",
                (int(employee_no), start, end),
            )
            return [_to_punch(r) for r in fetchall(cur)]

    def list_employee_nos_for_day(self, day: date) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT employee_no
                FROM attendance_logs
                WHERE DATE(`timestamp`)=%s
                ORDER BY employee_no
                """,
                (day,),
            )
            return [int(r["employee_no"]) for r in fetchall(cur)]

    def serialized(self, employee_no: int) -> ContextManager[None]:
        return named_lock(self._conn_factory, f"point_system.punch.{int(employee_no)}", timeout=self._lock_timeout)
