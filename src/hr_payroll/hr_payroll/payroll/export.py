from __future__ import annotations

import csv
import io
from decimal import Decimal
from typing import Iterable

from ..core.enums import SalaryStatus
from .model import SalaryRecord

STATUS_LABELS = {
    SalaryStatus.PAID: "Đã thanh toán",
    SalaryStatus.PENDING: "Chờ xử lý",
    SalaryStatus.DRAFT: "Nháp",
}

# (header, SalaryRecord attribute)
EXPORT_COLUMNS = [
    ("Mã nhân viên", "employee_id"),
    ("Tháng", "month"),
    ("Số buổi", "working_days"),
    ("Lương/buổi", "shift_rate"),
    ("Giờ OT", "overtime_hours"),
    ("Lương OT/giờ", "overtime_rate"),
    ("Lương cơ bản", "base_salary"),
    ("Thưởng KPI", "kpi_bonus"),
    ("Thưởng doanh số", "sales_bonus"),
    ("Thưởng cuối tuần", "weekend_bonus"),
    ("Thưởng khác", "other_bonus"),
    ("Tổng thưởng", "bonus"),
    ("Số lần đi muộn", "late_count"),
    ("Phạt đi muộn", "late_penalty"),
    ("Số ngày nghỉ KP", "absence_count"),
    ("Phạt nghỉ KP", "absence_penalty"),
    ("Phạt vi phạm", "violation_penalty"),
    ("Ghi chú vi phạm", "violation_notes"),
    ("Tổng phạt", "deductions"),
    ("Thực nhận", "net_salary"),
    ("Trạng thái", "status"),
    ("Ghi chú", "notes"),
]


def _format_number(value: Decimal) -> str:
    if value == value.to_integral_value():
        return str(int(value))
    return f"{value:.2f}"


def export_rows(records: Iterable[SalaryRecord]) -> list[dict]:
    """One row per record keyed by the localized column headers."""

    rows: list[dict] = []
    for r in records:
        row: dict = {}
        for header, attr in EXPORT_COLUMNS:
            value = getattr(r, attr)
            if attr == "month":
                value = value.strftime("%Y-%m")
            elif attr == "status":
                value = STATUS_LABELS.get(value, str(value))
            elif isinstance(value, Decimal):
                value = _format_number(value)
            elif value is None:
                value = ""
            row[header] = value
        rows.append(row)
    return rows


def write_csv(rows: list[dict]) -> bytes:
    """CSV bytes with a UTF-8 BOM so spreadsheet apps keep the Vietnamese headers."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=[header for header, _ in EXPORT_COLUMNS])
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")
