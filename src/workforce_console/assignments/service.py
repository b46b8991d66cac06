from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_negative
from ..core.enums import AssignmentStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..shifts.model import ShiftAssignment
from ..shifts.repository import AssignmentRepository, ShiftRepository

_ALLOWED_TRANSITIONS = {
    AssignmentStatus.SCHEDULED: {AssignmentStatus.IN_PROGRESS, AssignmentStatus.COMPLETED, AssignmentStatus.CANCELLED},
    AssignmentStatus.IN_PROGRESS: {AssignmentStatus.COMPLETED, AssignmentStatus.CANCELLED},
    AssignmentStatus.COMPLETED: set(),
    AssignmentStatus.CANCELLED: set(),
}


class AssignmentService:
    """Single-assignment operations, keyed by assignment id once created."""

    def __init__(self, assignments: AssignmentRepository, shifts: ShiftRepository):
        self._assignments = assignments
        self._shifts = shifts

    def list_range(
        self,
        *,
        start: date,
        end: date,
        shift_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[ShiftAssignment]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        return self._assignments.list_assignments(start=start, end=end, shift_id=shift_id, employee_id=employee_id)

    def assign(self, *, shift_id: int, employee_id: int, schedule_date: date, notes: Optional[str] = None) -> ShiftAssignment:
        if int(employee_id) <= 0:
            raise ValidationError("Invalid employee")
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise NotFoundError("Shift not found")
        if not shift.is_active:
            raise ValidationError("Shift is not active")

        notes = notes.strip() if notes else None
        return self._assignments.create(
            shift_id=shift.shift_id, employee_id=int(employee_id), schedule_date=schedule_date, notes=notes
        )

    def update_status(
        self,
        *,
        assignment_id: int,
        status: AssignmentStatus | str,
        overtime_minutes: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> ShiftAssignment:
        try:
            status = AssignmentStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown assignment status {status!r}") from None
        if overtime_minutes is not None:
            overtime_minutes = require_non_negative(overtime_minutes, "Overtime minutes")

        current = self._assignments.get_by_id(int(assignment_id))
        if not current:
            raise NotFoundError("Assignment not found")
        if status != current.status and status not in _ALLOWED_TRANSITIONS[current.status]:
            raise ConflictError(f"Cannot move assignment from {current.status.value} to {status.value}")

        return self._assignments.update_status(
            assignment_id=current.assignment_id,
            status=status,
            overtime_minutes=overtime_minutes,
            notes=notes.strip() if notes else None,
        )

    def delete(self, *, assignment_id: int) -> None:
        if not self._assignments.delete(assignment_id=int(assignment_id)):
            raise NotFoundError("Assignment not found")
