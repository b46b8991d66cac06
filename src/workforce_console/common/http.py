from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import (
    ConfigurationNotFound,
    ConflictError,
    DomainError,
    NotFoundError,
    PartialFailure,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (PartialFailure, 422),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ConfigurationNotFound, 409),
    (ValidationError, 400),
)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def arg_date(name: str, default: Optional[date] = None) -> date:
    value = request.args.get(name)
    if not value:
        if default is None:
            raise ValidationError(f"{name} is required")
        return default
    return parse_iso_date(value)


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number") from None


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid timestamp {value!r}") from None


def error_response(e: DomainError):
    code = next((status for cls, status in _STATUS_CODES if isinstance(e, cls)), 400)
    body: dict[str, Any] = {"success": False, "message": str(e)}
    if isinstance(e, PartialFailure):
        body["errors"] = [err.to_dict() for err in e.errors]
    return jsonify(body), code


def unexpected_error_response(message: str):
    logger.exception(message)
    return jsonify({"success": False, "message": message}), 500
