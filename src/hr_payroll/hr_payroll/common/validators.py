from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return str(value).strip()


def require_non_negative(value, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} không hợp lệ")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field_name} không hợp lệ")
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field_name} không được âm")
    return amount


def require_non_negative_int(value, field_name: str) -> int:
    amount = require_non_negative(value, field_name)
    if amount != amount.to_integral_value():
        raise ValidationError(f"{field_name} phải là số nguyên")
    return int(amount)
