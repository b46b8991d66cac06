from __future__ import annotations

from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_negative(value: int, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number") from None
    if number < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return number


def require_in_range(value: int, field_name: str, low: int, high: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number") from None
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def unique_ids(values: Iterable[int]) -> list[int]:
    """Deduplicate ids; order is not significant so the result is sorted."""
    return sorted({int(v) for v in values})
