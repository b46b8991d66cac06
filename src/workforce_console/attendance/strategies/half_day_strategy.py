from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import AttendanceWindow
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Half Day status.

    The factory only picks it at clock-out, for a day shorter than the half-day
    threshold, where it overrides Present/Late.
    """

    def decide_clock_in(self, *, minutes_late: int, window: AttendanceWindow) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY, note=f"{minutes_late} minutes after window start")

    def decide_clock_out(self, *, hours_worked: float, window: AttendanceWindow, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY, note=f"Worked {hours_worked:.2f} hours")
