from __future__ import annotations

from enum import Enum


class AttendanceKind(str, Enum):
    """Loại bản ghi chấm công (quẹt thẻ vào/ra)."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class SalaryStatus(str, Enum):
    """Trạng thái bảng lương: Nháp -> Chờ xử lý -> Đã thanh toán."""

    DRAFT = "draft"
    PENDING = "pending"
    PAID = "paid"


class OvertimeRounding(str, Enum):
    """How overtime hours are billed.

    FRACTIONAL bills the 2-decimal hours as-is, WHOLE_HOURS rounds them
    half-up to an integer first.
    """

    FRACTIONAL = "fractional"
    WHOLE_HOURS = "whole_hours"


class NotificationType(str, Enum):
    NEW_SALARY = "new_salary"
    SALARY_PAID = "salary_paid"
