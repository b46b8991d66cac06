from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Optional, Sequence

from workforce_console.assignments.model import AssignmentError, BulkCreateResult
from workforce_console.assignments.occurrences import expand_occurrences
from workforce_console.attendance.model import AttendanceLog, AttendanceWindowConfig, ShiftAttendanceOffset
from workforce_console.core.enums import AttendanceStatus, EmployeeStatus, VerificationMethod
from workforce_console.core.exceptions import ConflictError
from workforce_console.rotation.model import RotationPattern
from workforce_console.shifts.model import Employee, Shift, ShiftAssignment


@dataclass
class InMemoryShifts:
    shifts: dict[int, Shift]

    def list_all(self) -> Sequence[Shift]:
        return sorted(self.shifts.values(), key=lambda s: s.start_time)

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self.shifts.get(shift_id)


@dataclass
class InMemoryEmployees:
    employees: list[Employee]

    def list_active(self) -> Sequence[Employee]:
        return [e for e in self.employees if e.is_active]


class InMemoryAssignments:
    def __init__(self, shifts: InMemoryShifts):
        self._shifts = shifts
        self._rows: dict[int, ShiftAssignment] = {}
        self._id = 0
        self.bulk_calls: list[dict] = []

    def seed(self, *, shift_id: int, employee_id: int, schedule_date: date) -> ShiftAssignment:
        return self.create(shift_id=shift_id, employee_id=employee_id, schedule_date=schedule_date)

    def list_assignments(self, *, start, end, shift_id=None, employee_id=None) -> Sequence[ShiftAssignment]:
        rows = [
            a
            for a in self._rows.values()
            if start <= a.schedule_date <= end
            and (shift_id is None or a.shift_id == shift_id)
            and (employee_id is None or a.employee_id == employee_id)
        ]
        return sorted(rows, key=lambda a: (a.schedule_date, a.employee_id))

    def bulk_create(
        self,
        *,
        shift_id: int,
        employee_ids: Sequence[int],
        rotation: RotationPattern,
        department: Optional[str] = None,
    ) -> BulkCreateResult:
        self.bulk_calls.append(
            {"shift_id": shift_id, "employee_ids": list(employee_ids), "rotation": rotation, "department": department}
        )
        if shift_id not in self._shifts.shifts:
            return BulkCreateResult(
                success=False,
                errors=[AssignmentError(code="SHIFT_NOT_FOUND", message="Shift not found", details={"shift_id": shift_id})],
            )

        pending: list[ShiftAssignment] = []
        existing: list[ShiftAssignment] = []
        errors: list[AssignmentError] = []
        next_id = self._id
        for day in expand_occurrences(rotation):
            for employee_id in employee_ids:
                same_day = [a for a in self._rows.values() if a.employee_id == employee_id and a.schedule_date == day]
                same_shift = [a for a in same_day if a.shift_id == shift_id]
                if same_shift:
                    existing.extend(same_shift)
                    continue
                if department and same_day:
                    errors.append(
                        AssignmentError(
                            code="SHIFT_CONFLICT",
                            message=f"Employee already has a shift on {day:%Y-%m-%d}",
                            details={"employee_id": employee_id, "date": day.strftime("%Y-%m-%d")},
                        )
                    )
                    continue
                next_id += 1
                pending.append(
                    ShiftAssignment(assignment_id=next_id, shift_id=shift_id, employee_id=employee_id, schedule_date=day)
                )

        if errors:
            return BulkCreateResult(success=False, errors=errors)

        for a in pending:
            self._rows[a.assignment_id] = a
        self._id = next_id
        return BulkCreateResult(success=True, assignments=pending, existing=existing)

    def create(self, *, shift_id, employee_id, schedule_date, notes=None) -> ShiftAssignment:
        for a in self._rows.values():
            if a.natural_key == (shift_id, employee_id, schedule_date):
                raise ConflictError("Record already exists")
        self._id += 1
        row = ShiftAssignment(
            assignment_id=self._id,
            shift_id=shift_id,
            employee_id=employee_id,
            schedule_date=schedule_date,
            notes=notes,
        )
        self._rows[row.assignment_id] = row
        return row

    def get_by_id(self, assignment_id: int) -> Optional[ShiftAssignment]:
        return self._rows.get(assignment_id)

    def update_status(self, *, assignment_id, status, overtime_minutes=None, notes=None) -> ShiftAssignment:
        current = self._rows[assignment_id]
        row = replace(
            current,
            status=status,
            overtime_minutes=current.overtime_minutes if overtime_minutes is None else overtime_minutes,
            notes=current.notes if notes is None else notes,
        )
        self._rows[assignment_id] = row
        return row

    def delete(self, *, assignment_id: int) -> bool:
        return self._rows.pop(assignment_id, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self._by_employee_date: dict[tuple[int, date], AttendanceLog] = {}
        self._id = 0

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceLog]:
        return self._by_employee_date.get((employee_id, work_date))

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
        if (employee_id, work_date) in self._by_employee_date:
            raise ConflictError("Record already exists")
        self._id += 1
        rec = AttendanceLog(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=None,
            status=status,
            notes=notes,
            verification_method=verification_method,
            face_confidence=face_confidence,
        )
        self._by_employee_date[(employee_id, work_date)] = rec
        return rec

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
        key, current = next((k, r) for k, r in self._by_employee_date.items() if r.attendance_id == attendance_id)
        rec = replace(
            current,
            clock_out=clock_out,
            status=status,
            notes=notes,
            verification_method=verification_method,
            face_confidence=face_confidence if face_confidence is not None else current.face_confidence,
        )
        self._by_employee_date[key] = rec
        return rec

    def list_range(self, *, employee_id: int, start: date, end: date) -> Sequence[AttendanceLog]:
        rows = [r for r in self._by_employee_date.values() if r.employee_id == employee_id and start <= r.work_date <= end]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)


@dataclass
class InMemorySettings:
    default: Optional[AttendanceWindowConfig] = None
    offsets: dict[int, ShiftAttendanceOffset] = field(default_factory=dict)

    def get_default(self) -> Optional[AttendanceWindowConfig]:
        return self.default

    def update_default(self, config: AttendanceWindowConfig) -> AttendanceWindowConfig:
        self.default = config
        return config

    def get_shift_offset(self, shift_id: int) -> Optional[ShiftAttendanceOffset]:
        return self.offsets.get(shift_id)

    def upsert_shift_offset(self, offset: ShiftAttendanceOffset) -> ShiftAttendanceOffset:
        self.offsets[offset.shift_id] = offset
        return offset


def seeded_employees() -> list[Employee]:
    return [
        Employee(employee_id=1, full_name="An Nguyen", department="nursing"),
        Employee(employee_id=2, full_name="Binh Tran", department="nursing"),
        Employee(employee_id=3, full_name="Chi Le", department="emergency"),
        Employee(employee_id=4, full_name="Dung Pham", department="production"),
        Employee(employee_id=5, full_name="Em Vo", department="nursing", status=EmployeeStatus.INACTIVE),
    ]


def default_window_config() -> AttendanceWindowConfig:
    return AttendanceWindowConfig(
        clock_in_start=time(8, 0),
        clock_in_end=time(10, 0),
        clock_out_start=time(16, 0),
        clock_out_end=time(19, 0),
        late_threshold_minutes=15,
        half_day_threshold_minutes=240,
    )
