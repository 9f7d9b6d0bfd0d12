from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str, *, max_len: Optional[int] = None) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    value = str(value).strip()
    if max_len is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} cannot exceed {max_len} characters")
    return value


def optional_text(value: Optional[str], field_name: str, *, max_len: int) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None
    if len(value) > max_len:
        raise ValidationError(f"{field_name} cannot exceed {max_len} characters")
    return value


def require_number(value: Any, field_name: str) -> float:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def require_int(value: Any, field_name: str) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_int(value, field_name)


def require_latitude(value: Any) -> float:
    lat = require_number(value, "Latitude")
    if not -90.0 <= lat <= 90.0:
        raise ValidationError("Latitude must be between -90 and 90")
    return lat


def require_longitude(value: Any) -> float:
    lon = require_number(value, "Longitude")
    if not -180.0 <= lon <= 180.0:
        raise ValidationError("Longitude must be between -180 and 180")
    return lon


def require_in_range(value: Any, field_name: str, low: float, high: float) -> float:
    number = require_number(value, field_name)
    if not low <= number <= high:
        raise ValidationError(f"{field_name} must be between {low:g} and {high:g}")
    return number


def require_int_in_range(value: Any, field_name: str, low: int, high: int) -> int:
    number = require_int(value, field_name)
    if not low <= number <= high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number
