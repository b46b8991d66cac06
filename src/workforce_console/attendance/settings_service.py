from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import parse_offset, parse_time_of_day
from ..common.validators import require_non_negative
from ..core.constants import (
    DEFAULT_CLOCK_IN_END_OFFSET,
    DEFAULT_CLOCK_IN_START_OFFSET,
    DEFAULT_CLOCK_OUT_END_OFFSET,
    DEFAULT_CLOCK_OUT_START_OFFSET,
    DEFAULT_HALF_DAY_THRESHOLD_MINUTES,
    DEFAULT_LATE_THRESHOLD_MINUTES,
)
from ..core.exceptions import ConfigurationNotFound, NotFoundError
from ..shifts.repository import ShiftRepository
from .model import AttendanceWindowConfig, ShiftAttendanceOffset
from .repository import AttendanceSettingsRepository


class AttendanceSettingsService:
    """Administration of the tenant default window and per-shift overrides."""

    def __init__(self, settings: AttendanceSettingsRepository, shifts: ShiftRepository):
        self._settings = settings
        self._shifts = shifts

    def get_default(self) -> AttendanceWindowConfig:
        config = self._settings.get_default()
        if config is None:
            raise ConfigurationNotFound("Attendance settings not found")
        return config

    def update_default(
        self,
        *,
        clock_in_start: str,
        clock_in_end: str,
        clock_out_start: str,
        clock_out_end: str,
        late_threshold_minutes: int,
        half_day_threshold_minutes: int,
        name: str = "Default Settings",
    ) -> AttendanceWindowConfig:
        config = AttendanceWindowConfig(
            clock_in_start=parse_time_of_day(clock_in_start),
            clock_in_end=parse_time_of_day(clock_in_end),
            clock_out_start=parse_time_of_day(clock_out_start),
            clock_out_end=parse_time_of_day(clock_out_end),
            late_threshold_minutes=require_non_negative(late_threshold_minutes, "Late threshold"),
            half_day_threshold_minutes=require_non_negative(half_day_threshold_minutes, "Half day threshold"),
            name=name,
        )
        return self._settings.update_default(config)

    def get_shift_override(self, shift_id: int) -> Optional[ShiftAttendanceOffset]:
        if not self._shifts.get_by_id(int(shift_id)):
            raise NotFoundError("Shift not found")
        return self._settings.get_shift_offset(int(shift_id))

    def update_shift_override(
        self,
        shift_id: int,
        *,
        clock_in_start_offset: str = DEFAULT_CLOCK_IN_START_OFFSET,
        clock_in_end_offset: str = DEFAULT_CLOCK_IN_END_OFFSET,
        clock_out_start_offset: str = DEFAULT_CLOCK_OUT_START_OFFSET,
        clock_out_end_offset: str = DEFAULT_CLOCK_OUT_END_OFFSET,
        late_threshold_minutes: Optional[int] = DEFAULT_LATE_THRESHOLD_MINUTES,
        half_day_threshold_minutes: Optional[int] = DEFAULT_HALF_DAY_THRESHOLD_MINUTES,
    ) -> ShiftAttendanceOffset:
        if not self._shifts.get_by_id(int(shift_id)):
            raise NotFoundError("Shift not found")

        offset = ShiftAttendanceOffset(
            shift_id=int(shift_id),
            clock_in_start_offset=parse_offset(clock_in_start_offset),
            clock_in_end_offset=parse_offset(clock_in_end_offset),
            clock_out_start_offset=parse_offset(clock_out_start_offset),
            clock_out_end_offset=parse_offset(clock_out_end_offset),
            late_threshold_minutes=(
                None if late_threshold_minutes is None else require_non_negative(late_threshold_minutes, "Late threshold")
            ),
            half_day_threshold_minutes=(
                None
                if half_day_threshold_minutes is None
                else require_non_negative(half_day_threshold_minutes, "Half day threshold")
            ),
        )
        return self._settings.upsert_shift_offset(offset)
