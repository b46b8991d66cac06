from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..common.datetime_utils import parse_time_of_day
from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ConflictError, NotFoundError
from .connection import DatabaseConnection

_SECONDS_PER_DAY = MINUTES_PER_DAY * 60


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, rollback on any error.

    A caller may roll back explicitly before leaving the block (bulk writes do
    when any item fails); the trailing commit is then a no-op.

    Integrity errors are mapped to domain errors:
    - duplicate natural key -> ConflictError
    - unknown shift / employee reference -> NotFoundError
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise ConflictError("Record already exists") from e
        if e.errno in (errorcode.ER_NO_REFERENCED_ROW, errorcode.ER_NO_REFERENCED_ROW_2):
            raise NotFoundError("Referenced shift or employee does not exist") from e
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns come back as timedelta from the pure-Python connector and
    as time or str from others."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        total = int(value.total_seconds()) % _SECONDS_PER_DAY
        return time(hour=total // 3600, minute=(total % 3600) // 60, second=total % 60)
    if isinstance(value, str):
        return parse_time_of_day(value)
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
