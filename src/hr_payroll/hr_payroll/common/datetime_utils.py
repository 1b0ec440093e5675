from __future__ import annotations

import calendar
from datetime import date, datetime, time

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> date:
    """Parse 'YYYY-MM' (or a full 'YYYY-MM-DD') into the first day of that month."""
    v = (value or "").strip()
    try:
        if len(v) == 7:
            return datetime.strptime(v, "%Y-%m").date()
        return normalize_month(parse_iso_date(v))
    except ValueError:
        raise ValidationError(f"Tháng không hợp lệ: {value!r} (YYYY-MM)")


def normalize_month(value: date) -> date:
    return value.replace(day=1)


def month_bounds(month: date) -> tuple[date, date]:
    """First and last calendar day of the month containing `month`."""
    first = normalize_month(month)
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def iter_months(start: date, end: date) -> list[date]:
    current = normalize_month(start)
    stop = normalize_month(end)
    months: list[date] = []
    while current <= stop:
        months.append(current)
        if current.month == 12:
            current = current.replace(year=current.year + 1, month=1)
        else:
            current = current.replace(month=current.month + 1)
    return months


def parse_hhmm(value: str) -> time:
    v = (value or "").strip()
    try:
        return datetime.strptime(v, "%H:%M").time()
    except ValueError:
        raise ValidationError("Giờ không hợp lệ (HH:MM)")

