from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from flask import request

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def date_value(value: Any, field_name: str) -> date:
    try:
        return parse_iso_date(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def optional_date(value: Any, field_name: str) -> Optional[date]:
    if value in (None, ""):
        return None
    return date_value(value, field_name)


def datetime_value(value: Any, field_name: str) -> datetime:
    try:
        return datetime.fromisoformat(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an ISO date/time")


def id_list(body: dict, field_name: str) -> list:
    value = body.get(field_name)
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be a list")
    return value


def positive_int(value: Any, field_name: str) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is required")
    if n <= 0:
        raise ValidationError(f"{field_name} is required")
    return n


def bool_value(value: Any, field_name: str, *, default: bool = False) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value
