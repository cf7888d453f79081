from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import DeadlineExceededError, RepositoryError
from .connection import DatabaseConnection

# ER_QUERY_TIMEOUT, raised when MAX_EXECUTION_TIME is exceeded.
_QUERY_TIMEOUT_ERRNO = getattr(errorcode, "ER_QUERY_TIMEOUT", 3024)


def _translate(exc: mysql.connector.Error) -> Exception:
    if getattr(exc, "errno", None) == _QUERY_TIMEOUT_ERRNO:
        return DeadlineExceededError("Query exceeded its execution deadline")
    return RepositoryError(f"Database error: {exc}")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise _translate(exc) from exc
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        raise _translate(exc) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def named_lock(conn_factory: DatabaseConnection, name: str, *, timeout: int = 10) -> Iterator[None]:
    """Hold a MySQL named lock (GET_LOCK) for the duration of the block."""
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise _translate(exc) from exc
    try:
        cur = conn.cursor()
        try:
            cur.execute("SELECT GET_LOCK(%s, %s)", (name, int(timeout)))
            row = cur.fetchone()
            if not row or row[0] != 1:
                raise RepositoryError(f"Could not acquire lock {name!r}")
            try:
                yield
            finally:
                cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                cur.fetchone()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        raise _translate(exc) from exc
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)
