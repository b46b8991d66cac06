from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.validators import unique_ids
from ..core.exceptions import ValidationError
from ..rotation.model import RotationPattern
from ..shifts.model import Employee
from ..shifts.repository import AssignmentRepository, EmployeeDirectory
from .model import BulkAssignmentRequest

logger = logging.getLogger(__name__)


class AssignmentConflictResolver:
    """Working employee selection for one shift over one date range.

    Employees already assigned to the shift in the range (pre-assigned) are
    sticky: a department filter narrows what can be picked, never removes them.
    """

    def __init__(self, assignments: AssignmentRepository, employees: EmployeeDirectory):
        self._assignments = assignments
        self._employees = employees

        self._context: Optional[tuple[int, date, date]] = None
        self._pre_assigned: frozenset[int] = frozenset()
        self._manual: set[int] = set()
        self._department: Optional[str] = None
        self._candidates: list[Employee] = []

    @property
    def pre_assigned(self) -> frozenset[int]:
        return self._pre_assigned

    @property
    def department(self) -> Optional[str]:
        return self._department

    def load(self, *, shift_id: int, start: date, end: Optional[date] = None) -> frozenset[int]:
        """(Re)compute the pre-assigned set for a shift and range.

        Always starts from scratch so ids from a previous shift/range never leak
        into the new selection.
        """
        end = end or start
        if end < start:
            raise ValidationError("End date must not be before start date")

        rows = self._assignments.list_assignments(start=start, end=end, shift_id=shift_id)
        self._pre_assigned = frozenset(int(a.employee_id) for a in rows if a.shift_id == shift_id)
        self._candidates = [e for e in self._employees.list_active() if e.is_active]

        if self._context is not None and self._context != (shift_id, start, end):
            logger.debug("Selection context changed from %s to %s", self._context, (shift_id, start, end))
        self._context = (shift_id, start, end)
        return self._pre_assigned

    def is_pre_assigned(self, employee_id: int) -> bool:
        return int(employee_id) in self._pre_assigned

    def select(self, employee_id: int) -> None:
        employee_id = int(employee_id)
        if employee_id in self._pre_assigned:
            return
        candidate = next((e for e in self._candidates if e.employee_id == employee_id), None)
        if candidate is None:
            raise ValidationError(f"Employee {employee_id} is not an active candidate")
        if self._department and candidate.department != self._department:
            raise ValidationError(f"Employee {employee_id} is not in department {self._department}")
        self._manual.add(employee_id)

    def deselect(self, employee_id: int) -> None:
        if self.is_pre_assigned(employee_id):
            raise ValidationError("Employee is already assigned to this shift in the selected range")
        self._manual.discard(int(employee_id))

    def set_department(self, department: Optional[str]) -> None:
        self._department = department or None
        if self._department:
            in_department = {e.employee_id for e in self._candidates if e.department == self._department}
            self._manual &= in_department

    def visible_candidates(self, search: str = "") -> list[Employee]:
        term = (search or "").strip().lower()
        out: list[Employee] = []
        for e in self._candidates:
            if self._department and e.department != self._department and e.employee_id not in self._pre_assigned:
                continue
            if term and term not in e.full_name.lower() and term not in e.department.lower():
                continue
            out.append(e)
        return out

    @property
    def selection(self) -> list[int]:
        return unique_ids(self._manual | self._pre_assigned)

    def build_request(self, *, shift_id: int, rotation: RotationPattern) -> BulkAssignmentRequest:
        context = (shift_id, rotation.start_date, rotation.effective_end)
        if self._context != context:
            self.load(shift_id=shift_id, start=rotation.start_date, end=rotation.effective_end)

        employee_ids = self.selection
        if not employee_ids:
            raise ValidationError("Please select at least one employee")

        return BulkAssignmentRequest(
            shift_id=int(shift_id),
            employee_ids=tuple(employee_ids),
            rotation=rotation,
            department=self._department,
        )
