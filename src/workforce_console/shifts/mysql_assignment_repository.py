from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..assignments.model import AssignmentError, BulkCreateResult
from ..assignments.occurrences import expand_occurrences
from ..core.enums import AssignmentStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..rotation.model import RotationPattern
from .model import ShiftAssignment
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)

_COLUMNS = (
    "assignment_id, shift_id, employee_id, schedule_date, status, clock_in, clock_out, overtime_minutes, notes"
)


def _row_to_assignment(r: dict) -> ShiftAssignment:
    return ShiftAssignment(
        assignment_id=int(r["assignment_id"]),
        shift_id=int(r["shift_id"]),
        employee_id=int(r["employee_id"]),
        schedule_date=r["schedule_date"],
        status=AssignmentStatus(r["status"]),
        clock_in=r.get("clock_in"),
        clock_out=r.get("clock_out"),
        overtime_minutes=int(r.get("overtime_minutes") or 0),
        notes=r.get("notes"),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_assignments(
        self,
        *,
        start: date,
        end: date,
        shift_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[ShiftAssignment]:
        clauses = ["schedule_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if shift_id is not None:
            clauses.append("shift_id=%s")
            params.append(int(shift_id))
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_assignments
                WHERE {where}
                ORDER BY schedule_date ASC, employee_id ASC
                """,
                tuple(params),
            )
            return [_row_to_assignment(r) for r in fetchall(cur)]

    def bulk_create(
        self,
        *,
        shift_id: int,
        employee_ids: Sequence[int],
        rotation: RotationPattern,
        department: Optional[str] = None,
    ) -> BulkCreateResult:
        created: list[ShiftAssignment] = []
        existing: list[ShiftAssignment] = []
        errors: list[AssignmentError] = []

        with db_cursor(self._conn_factory) as (conn, cur):
            cur.execute("SELECT shift_id FROM shifts WHERE shift_id=%s", (int(shift_id),))
            if not fetchone(cur):
                return BulkCreateResult(
                    success=False,
                    errors=[AssignmentError(code="SHIFT_NOT_FOUND", message="Shift not found", details={"shift_id": shift_id})],
                )

            for day in expand_occurrences(rotation):
                for employee_id in employee_ids:
                    cur.execute(
                        f"SELECT {_COLUMNS} FROM shift_assignments WHERE employee_id=%s AND schedule_date=%s",
                        (int(employee_id), day),
                    )
                    same_day = [_row_to_assignment(r) for r in fetchall(cur)]
                    same_shift = [a for a in same_day if a.shift_id == int(shift_id)]
                    if same_shift:
                        existing.extend(same_shift)
                        continue
                    if department and same_day:
                        errors.append(
                            AssignmentError(
                                code="SHIFT_CONFLICT",
                                message=f"Employee already has a shift on {day:%Y-%m-%d}",
                                details={"employee_id": int(employee_id), "date": day.strftime("%Y-%m-%d")},
                            )
                        )
                        continue

                    cur.execute(
                        """
                        INSERT INTO shift_assignments(shift_id, employee_id, schedule_date, status)
                        VALUES(%s,%s,%s,%s)
                        """,
                        (int(shift_id), int(employee_id), day, AssignmentStatus.SCHEDULED.value),
                    )
                    created.append(
                        ShiftAssignment(
                            assignment_id=int(cur.lastrowid),
                            shift_id=int(shift_id),
                            employee_id=int(employee_id),
                            schedule_date=day,
                        )
                    )

            if errors:
                # All-or-nothing: nothing from this submission is kept.
                conn.rollback()
                logger.info("Rolled back bulk assignment for shift %s (%d errors)", shift_id, len(errors))
                return BulkCreateResult(success=False, errors=errors)

        return BulkCreateResult(success=True, assignments=created, existing=existing)

    def create(self, *, shift_id: int, employee_id: int, schedule_date: date, notes: Optional[str] = None) -> ShiftAssignment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_assignments(shift_id, employee_id, schedule_date, status, notes)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(shift_id), int(employee_id), schedule_date, AssignmentStatus.SCHEDULED.value, notes),
            )
            return ShiftAssignment(
                assignment_id=int(cur.lastrowid),
                shift_id=int(shift_id),
                employee_id=int(employee_id),
                schedule_date=schedule_date,
                notes=notes,
            )

    def get_by_id(self, assignment_id: int) -> Optional[ShiftAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_assignments WHERE assignment_id=%s", (int(assignment_id),))
            r = fetchone(cur)
            return _row_to_assignment(r) if r else None

    def update_status(
        self,
        *,
        assignment_id: int,
        status: AssignmentStatus,
        overtime_minutes: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> ShiftAssignment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_assignments
                SET status=%s,
                    overtime_minutes=COALESCE(%s, overtime_minutes),
                    notes=COALESCE(%s, notes)
                WHERE assignment_id=%s
                """,
                (status.value, overtime_minutes, notes, int(assignment_id)),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM shift_assignments WHERE assignment_id=%s", (int(assignment_id),))
            r = fetchone(cur)
            if not r:
                raise NotFoundError("Assignment not found")
            return _row_to_assignment(r)

    def delete(self, *, assignment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shift_assignments WHERE assignment_id=%s", (int(assignment_id),))
            return cur.rowcount > 0
