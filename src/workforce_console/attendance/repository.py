from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, VerificationMethod
from .model import AttendanceLog, AttendanceWindowConfig, ShiftAttendanceOffset


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceLog]:
        raise NotImplementedError

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
        """Raises ConflictError if (employee_id, work_date) already has a record."""

        raise NotImplementedError

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
        raise NotImplementedError

    def list_range(self, *, employee_id: int, start: date, end: date) -> Sequence[AttendanceLog]:
        raise NotImplementedError


class AttendanceSettingsRepository(Protocol):
    def get_default(self) -> Optional[AttendanceWindowConfig]:
        raise NotImplementedError

    def update_default(self, config: AttendanceWindowConfig) -> AttendanceWindowConfig:
        raise NotImplementedError

    def get_shift_offset(self, shift_id: int) -> Optional[ShiftAttendanceOffset]:
        raise NotImplementedError

    def upsert_shift_offset(self, offset: ShiftAttendanceOffset) -> ShiftAttendanceOffset:
        raise NotImplementedError
