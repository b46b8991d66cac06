from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import MAX_FACE_CONFIDENCE
from ..core.enums import VerificationMethod
from ..core.exceptions import ConflictError, OutsideWindowError, ValidationError
from .factory import AttendanceStrategyFactory
from .model import AttendanceLog, AttendanceWindow
from .repository import AttendanceRepository
from .window import AttendanceWindowResolver

logger = logging.getLogger(__name__)


def _verification(method: VerificationMethod | str) -> VerificationMethod:
    try:
        return VerificationMethod(method)
    except ValueError:
        raise ValidationError(f"Unknown verification method {method!r}") from None


def _confidence(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Face confidence must be a number") from None
    if not 0 <= value <= MAX_FACE_CONFIDENCE:
        raise ValidationError(f"Face confidence must be between 0 and {MAX_FACE_CONFIDENCE:g}")
    return value


class AttendanceService:
    """Clock-in / clock-out state machine for one employee-day.

    NoRecord -> ClockedIn -> ClockedOut. Absent is never written here; it is the
    absence of a record.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        windows: AttendanceWindowResolver,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._windows = windows
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def clock_in(
        self,
        employee_id: int,
        shift_id: Optional[int] = None,
        *,
        now: datetime | None = None,
        override_time: datetime | None = None,
        notes: Optional[str] = None,
        verification: VerificationMethod | str = VerificationMethod.MANUAL,
        face_confidence: Optional[float] = None,
    ) -> AttendanceLog:
        """Open the record for the work date.

        On the far side of a window that runs past midnight the work date is the
        previous day.

        `override_time` is an administrative backdate: it skips the window check
        but never the duplicate check.
        """
        method = _verification(verification)
        confidence = _confidence(face_confidence)
        at = override_time or now or now_local()
        window = self._windows.resolve(shift_id, at.date())
        today = window.clock_in_work_date(at)

        if self._attendance.get_for_employee_and_date(employee_id, today):
            raise ConflictError("Already clocked in for today")

        if override_time is None and not window.allows_clock_in(at):
            raise OutsideWindowError("Clock in", window.clock_in_start, window.clock_in_end)

        minutes_late = window.minutes_late(at)
        strategy = self._factory.for_clock_in(minutes_late=minutes_late, window=window)
        decision = strategy.decide_clock_in(minutes_late=minutes_late, window=window)

        final_notes = f"{notes}; {method.clock_in_note()}" if notes else method.clock_in_note()
        record = self._attendance.create_clock_in(
            employee_id=employee_id,
            work_date=today,
            clock_in=at,
            status=decision.status,
            notes=final_notes,
            verification_method=method,
            face_confidence=confidence,
        )
        logger.info(
            "Clock-in employee=%s date=%s status=%s (%s)",
            employee_id,
            today,
            decision.status.value,
            decision.note or f"{minutes_late} min after window start",
        )
        return record

    def clock_out(
        self,
        employee_id: int,
        shift_id: Optional[int] = None,
        *,
        now: datetime | None = None,
        override_time: datetime | None = None,
        notes: Optional[str] = None,
        verification: VerificationMethod | str = VerificationMethod.MANUAL,
        face_confidence: Optional[float] = None,
    ) -> AttendanceLog:
        method = _verification(verification)
        confidence = _confidence(face_confidence)
        at = override_time or now or now_local()
        window = self._windows.resolve(shift_id, at.date())

        record = self._open_record(employee_id, at, window)
        if not record or record.clock_in is None:
            raise ConflictError("No clock-in record found for today")
        if record.clock_out is not None:
            raise ConflictError("Already clocked out for today")
        today = record.work_date

        if override_time is None and not window.allows_clock_out(at):
            raise OutsideWindowError("Clock out", window.clock_out_start, window.clock_out_end)

        if at <= record.clock_in:
            raise ValidationError("Clock out must be after clock in")

        hours_worked = (at - record.clock_in).total_seconds() / 3600
        strategy = self._factory.for_clock_out(hours_worked=hours_worked, window=window)
        decision = strategy.decide_clock_out(hours_worked=hours_worked, window=window, current=record.status)

        final_notes = record.notes or ""
        if notes:
            final_notes = f"{final_notes}; {notes}" if final_notes else notes
        final_notes = f"{final_notes}; {method.clock_out_note()}" if final_notes else method.clock_out_note()

        updated = self._attendance.update_clock_out(
            attendance_id=record.attendance_id,
            clock_out=at,
            status=decision.status,
            notes=final_notes,
            verification_method=method,
            face_confidence=confidence,
        )
        logger.info(
            "Clock-out employee=%s date=%s hours=%.2f status=%s",
            employee_id,
            today,
            hours_worked,
            decision.status.value,
        )
        return updated

    def _open_record(self, employee_id: int, at: datetime, window: AttendanceWindow) -> Optional[AttendanceLog]:
        """Today's record, or yesterday's still-open one when the shift runs past midnight."""
        record = self._attendance.get_for_employee_and_date(employee_id, at.date())
        if (record is None or record.clock_out is not None) and window.crosses_midnight:
            previous = self._attendance.get_for_employee_and_date(employee_id, at.date() - timedelta(days=1))
            if previous and previous.clock_out is None:
                return previous
        return record

    def get_today_record(self, employee_id: int, today: date) -> Optional[AttendanceLog]:
        return self._attendance.get_for_employee_and_date(employee_id, today)

    def history(self, employee_id: int, *, start: date, end: date) -> Sequence[AttendanceLog]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        return self._attendance.list_range(employee_id=employee_id, start=start, end=end)
