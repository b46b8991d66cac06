"""Occurrence expansion for bulk assignment.

Used by the persistence boundary only; callers submit a RotationPattern and
never expand it themselves.
"""

from __future__ import annotations

from datetime import date, timedelta

from ..common.datetime_utils import add_months, iter_dates
from ..core.enums import RotationType
from ..rotation.model import RotationPattern


def expand_occurrences(rotation: RotationPattern) -> list[date]:
    start = rotation.start_date
    end = rotation.effective_end

    if rotation.type == RotationType.NONE or end < start:
        return [start]

    if rotation.type == RotationType.DAILY:
        return list(iter_dates(start, end))

    out: list[date] = []
    step = max(int(rotation.interval), 1)
    k = 0
    while True:
        if rotation.type == RotationType.WEEKLY:
            current = start + timedelta(weeks=k * step)
        else:
            # Always computed from the start date so clamped days don't drift.
            current = add_months(start, k * step)
        if current > end:
            break
        out.append(current)
        k += 1
    return out
