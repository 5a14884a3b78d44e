from __future__ import annotations

from enum import Enum
from typing import Any, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_object(value: Any, field_name: str = "request body") -> dict:
    if not isinstance(value, dict):
        raise ValidationError(f"{field_name} must be a JSON object")
    return value


def require_int(value: Any, field_name: str) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_enum(value: Any, enum_cls: Type[E], field_name: str) -> E:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")

