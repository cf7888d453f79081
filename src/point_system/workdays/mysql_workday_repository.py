from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import DayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import WorkDay
from .repository import WorkDayRepository


class MySQLWorkDayRepository(WorkDayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, work_date: date, day_type: DayType) -> WorkDay:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO work_days(work_date, day_type) VALUES(%s,%s)",
                (work_date, day_type.value),
            )
            return WorkDay(work_day_id=int(cur.lastrowid), work_date=work_date, day_type=day_type)

    def get_by_id(self, work_day_id: int) -> Optional[WorkDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT work_day_id, work_date, day_type FROM work_days WHERE work_day_id=%s",
                (int(work_day_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return WorkDay(
                work_day_id=int(r["work_day_id"]),
                work_date=r["work_date"],
                day_type=DayType(r["day_type"]),
            )
