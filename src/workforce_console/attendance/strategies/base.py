from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendanceWindow


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Decides the stored status for one clock action; chosen by AttendanceStrategyFactory."""

    @abstractmethod
    def decide_clock_in(self, *, minutes_late: int, window: AttendanceWindow) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_clock_out(self, *, hours_worked: float, window: AttendanceWindow, current: AttendanceStatus) -> StatusDecision:
        raise NotImplementedError
