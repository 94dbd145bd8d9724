from __future__ import annotations

import re
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_PHONE_RE = re.compile(r"^\+?[0-9][0-9 \-]{5,19}$")
_INT_RE = re.compile(r"^[+-]?[0-9]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_enum(value: Any, enum_cls: Type[E], field_name: str, *, default: Optional[E] = None) -> E:
    """Map a raw value onto ``enum_cls``; empty values fall back to ``default``."""
    if isinstance(value, enum_cls):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is not None:
            return default
        raise ValidationError(f"{field_name} is required")
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise ValidationError(f"Invalid {field_name} {value!r} (allowed: {allowed})")


def require_phone(value: Optional[str], field_name: str) -> str:
    phone = require_non_empty(value, field_name)
    if not _PHONE_RE.match(phone):
        raise ValidationError(f"{field_name} is not a valid phone number")
    return phone


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def optional_int_in_range(value: Any, field_name: str, *, low: int, high: int) -> Optional[int]:
    if value is None or value == "":
        return None
    number = _whole_number(value)
    if number is None:
        raise ValidationError(f"{field_name} must be a whole number")
    if not low <= number <= high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def _whole_number(value: Any) -> Optional[int]:
    # bool is an int subclass; JSON true/false is never a number here.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and _INT_RE.match(value.strip()):
        return int(value.strip())
    return None
