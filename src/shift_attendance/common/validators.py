from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_employee_id(value) -> str:
    if value is None or not str(value).strip():
        raise ValidationError("Employee id is required")
    return str(value).strip()


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if start > end:
        raise ValidationError("Start date must not be after end date")
    return start, end


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number
