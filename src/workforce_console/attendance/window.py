from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import shift_time
from ..core.constants import DEFAULT_HALF_DAY_THRESHOLD_MINUTES, DEFAULT_LATE_THRESHOLD_MINUTES
from ..core.exceptions import ConfigurationNotFound, NotFoundError
from ..shifts.repository import ShiftRepository
from .model import AttendanceWindow
from .repository import AttendanceSettingsRepository

logger = logging.getLogger(__name__)


class AttendanceWindowResolver:
    """Resolve the effective clock-in/out window for a shift on a date.

    A shift override carries offsets that are reprojected onto the shift's own
    start/end every time; the tenant default carries absolute times used as-is.
    Nothing is cached between calls.
    """

    def __init__(self, settings: AttendanceSettingsRepository, shifts: ShiftRepository):
        self._settings = settings
        self._shifts = shifts

    def resolve(self, shift_id: Optional[int], work_date: date) -> AttendanceWindow:
        default = self._settings.get_default()
        overnight = False

        if shift_id is not None:
            shift = self._shifts.get_by_id(int(shift_id))
            if not shift:
                raise NotFoundError("Shift not found")
            overnight = shift.end_time < shift.start_time

            offset = self._settings.get_shift_offset(shift.shift_id)
            if offset:
                late = offset.late_threshold_minutes
                half_day = offset.half_day_threshold_minutes
                if late is None:
                    late = default.late_threshold_minutes if default else DEFAULT_LATE_THRESHOLD_MINUTES
                if half_day is None:
                    half_day = default.half_day_threshold_minutes if default else DEFAULT_HALF_DAY_THRESHOLD_MINUTES

                return AttendanceWindow(
                    work_date=work_date,
                    clock_in_start=shift_time(shift.start_time, offset.clock_in_start_offset),
                    clock_in_end=shift_time(shift.start_time, offset.clock_in_end_offset),
                    clock_out_start=shift_time(shift.end_time, offset.clock_out_start_offset),
                    clock_out_end=shift_time(shift.end_time, offset.clock_out_end_offset),
                    late_threshold_minutes=int(late),
                    half_day_threshold_minutes=int(half_day),
                    source="shift",
                    overnight=overnight,
                )

        if default is None:
            logger.warning("No attendance window configured (shift=%s, date=%s)", shift_id, work_date)
            raise ConfigurationNotFound("Shift attendance settings not found")

        return AttendanceWindow(
            work_date=work_date,
            clock_in_start=default.clock_in_start,
            clock_in_end=default.clock_in_end,
            clock_out_start=default.clock_out_start,
            clock_out_end=default.clock_out_end,
            late_threshold_minutes=default.late_threshold_minutes,
            half_day_threshold_minutes=default.half_day_threshold_minutes,
            source="default",
            overnight=overnight,
        )
