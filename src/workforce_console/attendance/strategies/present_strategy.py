from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import AttendanceWindow
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """On-time clock-in; clock-out keeps whatever clock-in decided."""

    def decide_clock_in(self, *, minutes_late: int, window: AttendanceWindow) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_clock_out(self, *, hours_worked: float, window: AttendanceWindow, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
