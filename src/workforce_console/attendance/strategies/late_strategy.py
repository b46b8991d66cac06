from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import AttendanceWindow
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late clock-in."""

    def decide_clock_in(self, *, minutes_late: int, window: AttendanceWindow) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, note=f"{minutes_late} minutes late")

    def decide_clock_out(self, *, hours_worked: float, window: AttendanceWindow, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
