from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Device
from .repository import DeviceRepository

_SELECT = "SELECT device_id, serial_number, name, location, company_id FROM devices"


def _to_device(r: dict) -> Device:
    return Device(
        device_id=int(r["device_id"]),
        serial_number=r["serial_number"],
        name=r.get("name"),
        location=r.get("location"),
        company_id=r.get("company_id"),
    )


class MySQLDeviceRepository(DeviceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_serial(self, serial_number: str) -> Optional[Device]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE serial_number=%s", (serial_number,))
            r = fetchone(cur)
            return _to_device(r) if r else None

    def register(
        self,
        *,
        serial_number: str,
        name: Optional[str] = None,
        location: Optional[str] = None,
        company_id: Optional[int] = None,
    ) -> Device:
        with db_cursor(self._conn_factory) as (_, cur):
            # A duplicate serial number resolves to the existing row.
            cur.execute(
                """
                INSERT INTO devices(serial_number, name, location, company_id)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE device_id=LAST_INSERT_ID(device_id)
                """,
                (serial_number, name, location, company_id),
            )
            cur.execute(_SELECT + " WHERE device_id=%s", (int(cur.lastrowid),))
            return _to_device(fetchone(cur))
