from __future__ import annotations

import re
from datetime import date
from typing import Any, Iterable, Mapping

from ..core.constants import MIN_PASSWORD_LENGTH, PASSWORD_SPECIALS
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_STRONG_PASSWORD = re.compile(
    rf"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[{re.escape(PASSWORD_SPECIALS)}])"
    rf"[A-Za-z\d{re.escape(PASSWORD_SPECIALS)}]{{{MIN_PASSWORD_LENGTH},}}$"
)


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_fields(data: Mapping[str, Any], fields: Iterable[str], message: str = "All fields are required") -> None:
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(message)


def require_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}")


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def require_strong_password(value: str) -> str:
    if not value or not _STRONG_PASSWORD.match(value):
        raise ValidationError(
            "Password must be at least 8 characters, include uppercase, lowercase, number, and special character"
        )
    return value


def optional_str(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
