from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import format_offset, minutes_of_day
from ..core.enums import AttendanceStatus, VerificationMethod


@dataclass(frozen=True)
class AttendanceLog:
    """Domain entity: one attendance record per employee per day."""

    attendance_id: int
    employee_id: int
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    status: AttendanceStatus
    notes: Optional[str] = None
    verification_method: VerificationMethod = VerificationMethod.MANUAL
    face_confidence: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "clock_in": self.clock_in.isoformat() if self.clock_in else None,
            "clock_out": self.clock_out.isoformat() if self.clock_out else None,
            "status": self.status.value,
            "notes": self.notes,
            "verification_method": self.verification_method.value,
            "face_confidence": self.face_confidence,
        }


@dataclass(frozen=True)
class AttendanceWindowConfig:
    """Tenant default window. Times are absolute, not offsets."""

    clock_in_start: time
    clock_in_end: time
    clock_out_start: time
    clock_out_end: time
    late_threshold_minutes: int
    half_day_threshold_minutes: int
    name: str = "Default Settings"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "clock_in_start": self.clock_in_start.strftime("%H:%M:%S"),
            "clock_in_end": self.clock_in_end.strftime("%H:%M:%S"),
            "clock_out_start": self.clock_out_start.strftime("%H:%M:%S"),
            "clock_out_end": self.clock_out_end.strftime("%H:%M:%S"),
            "late_threshold_minutes": self.late_threshold_minutes,
            "half_day_threshold_minutes": self.half_day_threshold_minutes,
        }


@dataclass(frozen=True)
class ShiftAttendanceOffset:
    """Per-shift override as signed minute offsets from the shift's start/end."""

    shift_id: int
    clock_in_start_offset: int
    clock_in_end_offset: int
    clock_out_start_offset: int
    clock_out_end_offset: int
    late_threshold_minutes: Optional[int] = None
    half_day_threshold_minutes: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "shift_id": self.shift_id,
            "clock_in_start_offset": format_offset(self.clock_in_start_offset),
            "clock_in_end_offset": format_offset(self.clock_in_end_offset),
            "clock_out_start_offset": format_offset(self.clock_out_start_offset),
            "clock_out_end_offset": format_offset(self.clock_out_end_offset),
            "late_threshold_minutes": self.late_threshold_minutes,
            "half_day_threshold_minutes": self.half_day_threshold_minutes,
        }


@dataclass(frozen=True)
class AttendanceWindow:
    """Effective window for one (shift, date); resolved per clock action."""

    work_date: date
    clock_in_start: time
    clock_in_end: time
    clock_out_start: time
    clock_out_end: time
    late_threshold_minutes: int
    half_day_threshold_minutes: int
    source: str = "default"
    overnight: bool = False

    @property
    def crosses_midnight(self) -> bool:
        """True when the shift or either clock window runs into the next day."""
        return (
            self.overnight
            or minutes_of_day(self.clock_in_end) < minutes_of_day(self.clock_in_start)
            or minutes_of_day(self.clock_out_end) < minutes_of_day(self.clock_out_start)
        )

    def clock_in_work_date(self, at: datetime) -> date:
        """Work date a clock-in belongs to; the far side of a wrapping window counts for the day before."""
        start = minutes_of_day(self.clock_in_start)
        end = minutes_of_day(self.clock_in_end)
        if end < start and minutes_of_day(at) <= end:
            return at.date() - timedelta(days=1)
        return at.date()

    def allows_clock_in(self, at: datetime) -> bool:
        return _within(minutes_of_day(at), self.clock_in_start, self.clock_in_end)

    def allows_clock_out(self, at: datetime) -> bool:
        return _within(minutes_of_day(at), self.clock_out_start, self.clock_out_end)

    def minutes_late(self, at: datetime) -> int:
        current = minutes_of_day(at)
        start = minutes_of_day(self.clock_in_start)
        end = minutes_of_day(self.clock_in_end)
        if end < start and current <= end:
            # Window runs past midnight and we are on the far side of it.
            return current + 24 * 60 - start
        return current - start

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "clock_in_start": self.clock_in_start.strftime("%H:%M"),
            "clock_in_end": self.clock_in_end.strftime("%H:%M"),
            "clock_out_start": self.clock_out_start.strftime("%H:%M"),
            "clock_out_end": self.clock_out_end.strftime("%H:%M"),
            "late_threshold_minutes": self.late_threshold_minutes,
            "half_day_threshold_minutes": self.half_day_threshold_minutes,
            "source": self.source,
            "overnight": self.crosses_midnight,
        }


def _within(current: int, start: time, end: time) -> bool:
    lo, hi = minutes_of_day(start), minutes_of_day(end)
    if lo <= hi:
        return lo <= current <= hi
    return current >= lo or current <= hi
