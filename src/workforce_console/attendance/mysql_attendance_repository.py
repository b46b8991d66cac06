from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, VerificationMethod
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceLog
from .repository import AttendanceRepository

_COLUMNS = (
    "attendance_id, employee_id, work_date, clock_in, clock_out, status, notes, verification_method, face_confidence"
)


def _row_to_log(r: dict) -> AttendanceLog:
    confidence = r.get("face_confidence")
    return AttendanceLog(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        clock_in=r.get("clock_in"),
        clock_out=r.get("clock_out"),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
        verification_method=VerificationMethod(r.get("verification_method") or VerificationMethod.MANUAL.value),
        face_confidence=float(confidence) if confidence is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_logs WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_log(r) if r else None

    def create_clock_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in: datetime,
        status: AttendanceStatus,
        notes: Optional[str],
        verification_method: VerificationMethod,
        face_confidence: Optional[float] = None,
    ) -> AttendanceLog:
        # The unique (employee_id, work_date) key rejects a second clock-in; db_cursor maps it to ConflictError.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(employee_id, work_date, clock_in, status, notes, verification_method, face_confidence)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, clock_in, status.value, notes, verification_method.value, face_confidence),
            )
            return AttendanceLog(
                attendance_id=int(cur.lastrowid),
                employee_id=int(employee_id),
                work_date=work_date,
                clock_in=clock_in,
                clock_out=None,
                status=status,
                notes=notes,
                verification_method=verification_method,
                face_confidence=face_confidence,
            )

    def update_clock_out(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        status: AttendanceStatus,
        notes: Optional[str],
        verification_method: VerificationMethod,
        face_confidence: Optional[float] = None,
    ) -> AttendanceLog:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_logs
                SET clock_out=%s, status=%s, notes=%s, verification_method=%s, face_confidence=%s
                WHERE attendance_id=%s AND clock_out IS NULL
                """,
                (clock_out, status.value, notes, verification_method.value, face_confidence, int(attendance_id)),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_logs WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            if not r:
                raise NotFoundError("Attendance record not found")
            return _row_to_log(r)

    def list_range(self, *, employee_id: int, start: date, end: date) -> Sequence[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date DESC
                """,
                (int(employee_id), start, end),
            )
            return [_row_to_log(r) for r in fetchall(cur)]
