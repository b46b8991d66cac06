from __future__ import annotations

from dataclasses import dataclass

from .model import AttendanceWindow
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Picks the status strategy from the resolved window thresholds."""

    def for_clock_in(self, *, minutes_late: int, window: AttendanceWindow) -> AttendanceStrategy:
        if minutes_late <= window.late_threshold_minutes:
            return PresentStrategy()
        return LateStrategy()

    def for_clock_out(self, *, hours_worked: float, window: AttendanceWindow) -> AttendanceStrategy:
        if hours_worked < window.half_day_threshold_minutes / 60:
            return HalfDayStrategy()
        return PresentStrategy()
