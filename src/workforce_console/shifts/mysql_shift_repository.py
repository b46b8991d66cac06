from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..core.enums import EmployeeStatus, ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Employee, Shift
from .repository import EmployeeDirectory, ShiftRepository


def _break_minutes(value) -> int:
    t = normalize_mysql_time(value) or time(0, 0)
    return t.hour * 60 + t.minute


def _row_to_shift(r: dict) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        break_minutes=_break_minutes(r.get("break_duration")),
        shift_type=ShiftType(r.get("shift_type") or ShiftType.MORNING.value),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, shift_name, start_time, end_time, break_duration, shift_type, is_active
                FROM shifts
                ORDER BY shift_id
                """
            )
            return [_row_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, shift_name, start_time, end_time, break_duration, shift_type, is_active
                FROM shifts
                WHERE shift_id=%s
                """,
                (shift_id,),
            )
            r = fetchone(cur)
            return _row_to_shift(r) if r else None


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, department, status
                FROM employees
                WHERE status=%s
                ORDER BY full_name
                """,
                (EmployeeStatus.ACTIVE.value,),
            )
            return [
                Employee(
                    employee_id=int(r["employee_id"]),
                    full_name=r["full_name"],
                    department=r.get("department") or "",
                    status=EmployeeStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]
