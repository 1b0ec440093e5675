from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.validators import require_non_negative, require_non_negative_int
from ..core.enums import SalaryStatus

_COUNT_FIELDS = {"working_days", "late_count", "absence_count"}

_FIELD_LABELS = {
    "working_days": "Số buổi làm",
    "shift_rate": "Lương/buổi",
    "overtime_hours": "Giờ OT",
    "overtime_rate": "Lương OT/giờ",
    "kpi_bonus": "Thưởng KPI",
    "sales_bonus": "Thưởng doanh số",
    "weekend_bonus": "Thưởng cuối tuần",
    "other_bonus": "Thưởng khác",
    "late_count": "Số lần đi muộn",
    "late_penalty_per_time": "Phạt đi muộn/lần",
    "absence_count": "Số ngày nghỉ KP",
    "absence_penalty_per_day": "Phạt nghỉ KP/ngày",
    "violation_penalty": "Phạt vi phạm",
}


@dataclass(frozen=True)
class SalaryInput:
    """Đầu vào công thức lương, đã kiểm tra hợp lệ.

    Counts must be non-negative integers, every amount non-negative.
    Values are normalized to int / Decimal so the calculator never sees
    strings or floats.
    """

    working_days: int = 0
    shift_rate: Decimal = Decimal(0)
    overtime_hours: Decimal = Decimal(0)
    overtime_rate: Decimal = Decimal(0)
    kpi_bonus: Decimal = Decimal(0)
    sales_bonus: Decimal = Decimal(0)
    weekend_bonus: Decimal = Decimal(0)
    other_bonus: Decimal = Decimal(0)
    late_count: int = 0
    late_penalty_per_time: Decimal = Decimal(0)
    absence_count: int = 0
    absence_penalty_per_day: Decimal = Decimal(0)
    violation_penalty: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        for f in fields(self):
            raw = getattr(self, f.name)
            label = _FIELD_LABELS[f.name]
            if f.name in _COUNT_FIELDS:
                value = require_non_negative_int(raw, label)
            else:
                value = require_non_negative(raw, label)
            object.__setattr__(self, f.name, value)

    @classmethod
    def from_mapping(cls, data: dict) -> "SalaryInput":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known and v is not None})


@dataclass(frozen=True)
class SalaryDetails:
    shift_salary: Decimal
    overtime_salary: Decimal
    kpi_bonus: Decimal
    sales_bonus: Decimal
    weekend_bonus: Decimal
    other_bonus: Decimal
    late_penalty: Decimal
    absence_penalty: Decimal
    violation_penalty: Decimal


@dataclass(frozen=True)
class SalaryBreakdown:
    """Itemized result: aggregates for statistics, details for the payslip."""

    base_salary: Decimal
    overtime_pay: Decimal
    total_bonus: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    details: SalaryDetails

    def to_dict(self) -> dict:
        return {
            "base_salary": float(self.base_salary),
            "overtime_pay": float(self.overtime_pay),
            "total_bonus": float(self.total_bonus),
            "total_deductions": float(self.total_deductions),
            "net_salary": float(self.net_salary),
            "details": {f.name: float(getattr(self.details, f.name)) for f in fields(self.details)},
        }


@dataclass(frozen=True)
class SalaryRecord:
    """Thực thể miền (domain): Bảng lương tháng của một nhân viên.

    Unique by (employee_id, month); month is always the first day.
    """

    employee_id: str
    month: date
    working_days: int
    shift_rate: Decimal
    overtime_hours: Decimal
    overtime_rate: Decimal
    kpi_bonus: Decimal
    sales_bonus: Decimal
    weekend_bonus: Decimal
    other_bonus: Decimal
    late_count: int
    late_penalty: Decimal
    absence_count: int
    absence_penalty: Decimal
    violation_penalty: Decimal
    base_salary: Decimal
    bonus: Decimal
    deductions: Decimal
    net_salary: Decimal
    status: SalaryStatus = SalaryStatus.DRAFT
    violation_notes: Optional[str] = None
    notes: Optional[str] = None
    record_id: Optional[int] = None

    @classmethod
    def from_calculation(
        cls,
        *,
        employee_id: str,
        month: date,
        salary_input: SalaryInput,
        breakdown: SalaryBreakdown,
        status: SalaryStatus = SalaryStatus.DRAFT,
        violation_notes: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "SalaryRecord":
        d = breakdown.details
        return cls(
            employee_id=str(employee_id),
            month=month.replace(day=1),
            working_days=salary_input.working_days,
            shift_rate=salary_input.shift_rate,
            overtime_hours=salary_input.overtime_hours,
            overtime_rate=salary_input.overtime_rate,
            kpi_bonus=d.kpi_bonus,
            sales_bonus=d.sales_bonus,
            weekend_bonus=d.weekend_bonus,
            other_bonus=d.other_bonus,
            late_count=salary_input.late_count,
            late_penalty=d.late_penalty,
            absence_count=salary_input.absence_count,
            absence_penalty=d.absence_penalty,
            violation_penalty=d.violation_penalty,
            base_salary=breakdown.base_salary,
            bonus=breakdown.total_bonus,
            deductions=breakdown.total_deductions,
            net_salary=breakdown.net_salary,
            status=status,
            violation_notes=violation_notes,
            notes=notes,
        )

    def to_dict(self) -> dict:
        out: dict = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Decimal):
                value = float(value)
            elif isinstance(value, SalaryStatus):
                value = value.value
            elif isinstance(value, date):
                value = value.strftime("%Y-%m-%d")
            out[f.name] = value
        return out


@dataclass
class BulkRunResult:
    month: date
    succeeded_employee_ids: list[str] = field(default_factory=list)
    failed_employee_ids: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def succeeded_count(self) -> int:
        return len(self.succeeded_employee_ids)

    @property
    def failed_count(self) -> int:
        return len(self.failed_employee_ids)

    def to_dict(self) -> dict:
        return {
            "month": self.month.strftime("%Y-%m"),
            "succeeded_employee_ids": list(self.succeeded_employee_ids),
            "failed_employee_ids": list(self.failed_employee_ids),
            "succeeded_count": self.succeeded_count,
            "failed_count": self.failed_count,
            "errors": dict(self.errors),
        }


@dataclass(frozen=True)
class MonthlyStatistics:
    month: date
    record_count: int
    total_net: Decimal
    average_net: Decimal
    total_base: Decimal
    total_bonus: Decimal
    total_deductions: Decimal
    status_counts: dict[str, int]

    def to_dict(self) -> dict:
        return {
            "month": self.month.strftime("%Y-%m"),
            "record_count": self.record_count,
            "total_net": float(self.total_net),
            "average_net": float(self.average_net),
            "total_base": float(self.total_base),
            "total_bonus": float(self.total_bonus),
            "total_deductions": float(self.total_deductions),
            "status_counts": dict(self.status_counts),
        }


@dataclass(frozen=True)
class ComponentBreakdown:
    """Bonus and penalty components summed over a period."""

    bonuses: dict[str, Decimal]
    penalties: dict[str, Decimal]

    def to_dict(self) -> dict:
        return {
            "bonuses": {k: float(v) for k, v in self.bonuses.items()},
            "penalties": {k: float(v) for k, v in self.penalties.items()},
        }
