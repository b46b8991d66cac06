"""Rotation planning.

The planner is the single authority on which rotation pattern a date span can
carry. Spans shorter than a pattern's period are downgraded, never rejected:

    diff < 1          -> none
    1 <= diff < 7     -> weekly/monthly become daily
    7 <= diff < 30    -> monthly becomes weekly
    diff >= 30        -> as requested

Intervals are validated against the requested pattern and are never clamped.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_in_range
from ..core.constants import (
    DAILY_MIN_SPAN_DAYS,
    MONTHLY_INTERVAL_RANGE,
    MONTHLY_MIN_SPAN_DAYS,
    WEEKLY_INTERVAL_RANGE,
    WEEKLY_MIN_SPAN_DAYS,
)
from ..core.enums import RotationType
from ..core.exceptions import ValidationError
from .model import RotationPattern

logger = logging.getLogger(__name__)

_INTERVAL_BOUNDS = {
    RotationType.WEEKLY: ("Weeks between rotations", WEEKLY_INTERVAL_RANGE),
    RotationType.MONTHLY: ("Months between rotations", MONTHLY_INTERVAL_RANGE),
}


def span_days(start: date, end: Optional[date]) -> int:
    """Whole-day difference between end and start (0 when there is no end)."""
    if end is None:
        return 0
    return (end - start).days


def max_pattern_for_span(diff: int) -> RotationType:
    if diff < DAILY_MIN_SPAN_DAYS:
        return RotationType.NONE
    if diff < WEEKLY_MIN_SPAN_DAYS:
        return RotationType.DAILY
    if diff < MONTHLY_MIN_SPAN_DAYS:
        return RotationType.WEEKLY
    return RotationType.MONTHLY


_ORDER = [RotationType.NONE, RotationType.DAILY, RotationType.WEEKLY, RotationType.MONTHLY]


def get_available_patterns(start: Optional[str | date], end: Optional[str | date]) -> list[RotationType]:
    """Patterns a selector may offer for the span; `none` is always offered."""
    if not start or not end:
        return [RotationType.NONE]
    try:
        start_d = start if isinstance(start, date) else parse_iso_date(start)
        end_d = end if isinstance(end, date) else parse_iso_date(end)
    except ValidationError:
        return [RotationType.NONE]

    ceiling = max_pattern_for_span(span_days(start_d, end_d))
    return _ORDER[: _ORDER.index(ceiling) + 1]


class RotationPlanner:
    def plan(
        self,
        *,
        start_date: date,
        end_date: Optional[date],
        pattern: RotationType | str,
        interval: int = 1,
    ) -> RotationPattern:
        try:
            requested = RotationType(pattern)
        except ValueError:
            raise ValidationError(f"Unknown rotation pattern {pattern!r}") from None

        diff = span_days(start_date, end_date)
        ceiling = max_pattern_for_span(diff)
        resolved = requested
        if _ORDER.index(requested) > _ORDER.index(ceiling):
            resolved = ceiling
            logger.info(
                "Rotation %s downgraded to %s for a %d day span", requested.value, resolved.value, diff
            )

        # The interval only means something when the requested pattern survives.
        if resolved in _INTERVAL_BOUNDS and resolved == requested:
            label, (low, high) = _INTERVAL_BOUNDS[resolved]
            interval = require_in_range(interval, label, low, high)
        else:
            interval = 1

        return RotationPattern(type=resolved, start_date=start_date, end_date=end_date, interval=int(interval))

    def plan_from_strings(
        self,
        *,
        start_date: str,
        end_date: Optional[str],
        pattern: str,
        interval: int = 1,
    ) -> RotationPattern:
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date) if end_date else None
        return self.plan(start_date=start, end_date=end, pattern=pattern, interval=interval)
