from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..assignments.model import BulkCreateResult
from ..core.enums import AssignmentStatus
from ..rotation.model import RotationPattern
from .model import Employee, Shift, ShiftAssignment


class ShiftRepository(Protocol):
    def list_all(self) -> Sequence[Shift]:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError


class EmployeeDirectory(Protocol):
    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError


class AssignmentRepository(Protocol):
    def list_assignments(
        self,
        *,
        start: date,
        end: date,
        shift_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[ShiftAssignment]:
        raise NotImplementedError

    def bulk_create(
        self,
        *,
        shift_id: int,
        employee_ids: Sequence[int],
        rotation: RotationPattern,
        department: Optional[str] = None,
    ) -> BulkCreateResult:
        """Expand the rotation into occurrences and persist them atomically.

        All-or-nothing: a failed result means no row was written.
        """

        raise NotImplementedError

    def create(self, *, shift_id: int, employee_id: int, schedule_date: date, notes: Optional[str] = None) -> ShiftAssignment:
        """Raises ConflictError when the natural key already exists."""

        raise NotImplementedError

    def get_by_id(self, assignment_id: int) -> Optional[ShiftAssignment]:
        raise NotImplementedError

    def update_status(
        self,
        *,
        assignment_id: int,
        status: AssignmentStatus,
        overtime_minutes: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> ShiftAssignment:
        raise NotImplementedError

    def delete(self, *, assignment_id: int) -> bool:
        raise NotImplementedError
