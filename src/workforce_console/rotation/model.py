from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import RotationType


@dataclass(frozen=True)
class RotationPattern:
    """A normalized rotation: its type is always achievable for its date span."""

    type: RotationType
    start_date: date
    end_date: Optional[date] = None
    interval: int = 1

    @property
    def effective_end(self) -> date:
        return self.end_date or self.start_date

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "interval": self.interval,
            "startDate": self.start_date.strftime("%Y-%m-%d"),
            "endDate": self.end_date.strftime("%Y-%m-%d") if self.end_date else None,
        }
