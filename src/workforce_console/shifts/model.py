from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import AssignmentStatus, EmployeeStatus, ShiftType


@dataclass(frozen=True)
class Shift:
    """Domain entity: a work shift template (time-of-day bounds)."""

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    break_minutes: int = 0
    shift_type: ShiftType = ShiftType.MORNING
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "name": self.shift_name,
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "break_minutes": self.break_minutes,
            "shift_type": self.shift_type.value,
            "is_active": self.is_active,
        }


@dataclass(frozen=True)
class ShiftAssignment:
    """One employee on one shift for one date.

    (shift_id, employee_id, schedule_date) is the natural key; once created
    the row is updated by assignment_id only.
    """

    assignment_id: int
    shift_id: int
    employee_id: int
    schedule_date: date
    status: AssignmentStatus = AssignmentStatus.SCHEDULED
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    overtime_minutes: int = 0
    notes: Optional[str] = None

    @property
    def natural_key(self) -> tuple[int, int, date]:
        return (self.shift_id, self.employee_id, self.schedule_date)

    def to_dict(self) -> dict:
        return {
            "id": self.assignment_id,
            "shift_id": self.shift_id,
            "employee_id": self.employee_id,
            "schedule_date": self.schedule_date.strftime("%Y-%m-%d"),
            "status": self.status.value,
            "clock_in": self.clock_in.isoformat() if self.clock_in else None,
            "clock_out": self.clock_out.isoformat() if self.clock_out else None,
            "overtime_minutes": self.overtime_minutes,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class Employee:
    """Read-model of an employee as a scheduling candidate."""

    employee_id: int
    full_name: str
    department: str
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "full_name": self.full_name,
            "department": self.department,
            "status": self.status.value,
        }
