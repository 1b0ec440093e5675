from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from ..attendance.aggregator import AttendanceAggregator
from ..attendance.model import WorkingDataResult
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_months, month_bounds, normalize_month
from ..common.validators import require_non_empty
from ..core.enums import NotificationType, SalaryStatus
from ..core.exceptions import InvalidStatusTransition, NotFoundError, PersistenceError, ValidationError
from ..notifications.notifier import NullNotifier, SalaryNotification, SalaryNotifier
from ..settings.service import SettingsService
from ..shifts.model import ShiftExpectation
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import ComponentBreakdown, MonthlyStatistics, SalaryBreakdown, SalaryInput, SalaryRecord
from .repository import SalaryRepository

logger = logging.getLogger(__name__)

# paid is terminal; draft and pending may move back and forth
_ALLOWED_TRANSITIONS = {
    SalaryStatus.DRAFT: {SalaryStatus.DRAFT, SalaryStatus.PENDING, SalaryStatus.PAID},
    SalaryStatus.PENDING: {SalaryStatus.PENDING, SalaryStatus.DRAFT, SalaryStatus.PAID},
    SalaryStatus.PAID: {SalaryStatus.PAID},
}


def ensure_not_paid(salaries: SalaryRepository, employee_id: str, month: date) -> None:
    """Recomputing never touches a paid record; its status and figures are final."""
    existing = salaries.get_for_employee_month(employee_id, month)
    if existing is not None and existing.status == SalaryStatus.PAID:
        raise InvalidStatusTransition(
            f"Bảng lương tháng {month.strftime('%Y-%m')} của {employee_id} đã thanh toán, không thể tính lại"
        )


_BONUS_FIELDS = ("kpi_bonus", "sales_bonus", "weekend_bonus", "other_bonus")
_PENALTY_FIELDS = ("late_penalty", "absence_penalty", "violation_penalty")


class PayrollService:
    """Interactive payroll operations for a single employee plus read models."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        salaries: SalaryRepository,
        settings: SettingsService,
        *,
        aggregator: Optional[AttendanceAggregator] = None,
        calculator: Optional[PayrollCalculator] = None,
        notifier: Optional[SalaryNotifier] = None,
    ):
        self._attendance = attendance
        self._salaries = salaries
        self._settings = settings
        self._aggregator = aggregator or AttendanceAggregator()
        self._calculator = calculator or StandardPayrollCalculator()
        self._notifier = notifier or NullNotifier()

    def compute_working_data(
        self,
        *,
        employee_id: str,
        month: date,
        shift: Optional[ShiftExpectation] = None,
    ) -> WorkingDataResult:
        employee_id = require_non_empty(employee_id, "Nhân viên")
        start, end = month_bounds(month)
        events = self._attendance.list_for_period(start_date=start, end_date=end, employee_id=employee_id)
        return self._aggregator.aggregate(events, month, shift)

    def build_input(self, values: dict) -> SalaryInput:
        """SalaryInput from form values, missing rates taken from the current settings."""
        settings = self._settings.get()
        data = {k: v for k, v in values.items() if v is not None and v != ""}
        data.setdefault("shift_rate", settings.default_shift_rate)
        data.setdefault("overtime_rate", settings.default_overtime_rate)
        data.setdefault("late_penalty_per_time", settings.late_penalty_per_time)
        data.setdefault("absence_penalty_per_day", settings.absence_penalty_per_day)
        return SalaryInput.from_mapping(data)

    def calculate(self, salary_input: SalaryInput) -> SalaryBreakdown:
        return self._calculator.calculate(salary_input)

    def save_salary(
        self,
        *,
        employee_id: str,
        month: date,
        salary_input: SalaryInput,
        violation_notes: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> SalaryRecord:
        employee_id = require_non_empty(employee_id, "Nhân viên")
        if month is None:
            raise ValidationError("Vui lòng chọn nhân viên và tháng")

        month = normalize_month(month)
        ensure_not_paid(self._salaries, employee_id, month)

        breakdown = self._calculator.calculate(salary_input)
        record = SalaryRecord.from_calculation(
            employee_id=employee_id,
            month=month,
            salary_input=salary_input,
            breakdown=breakdown,
            status=SalaryStatus.DRAFT,
            violation_notes=(violation_notes or "").strip() or None,
            notes=(notes or "").strip() or None,
        )

        # Persistence errors propagate untouched; nothing else has happened yet.
        record_id = self._salaries.upsert(record)
        saved = self._salaries.get_by_id(record_id) or record
        logger.info("Saved salary %s for employee %s month %s", record_id, employee_id, record.month.strftime("%Y-%m"))

        self._notify_safely(
            SalaryNotification(
                type=NotificationType.NEW_SALARY,
                employee_id=employee_id,
                month=record.month,
                net_salary=record.net_salary,
            )
        )
        return saved

    def update_status(self, *, record_id: int, status: SalaryStatus | str) -> SalaryRecord:
        try:
            target = SalaryStatus(status)
        except ValueError:
            raise ValidationError(f"Trạng thái không hợp lệ: {status!r}")

        record = self._salaries.get_by_id(int(record_id))
        if not record:
            raise NotFoundError("Không tìm thấy bảng lương")

        if target not in _ALLOWED_TRANSITIONS[record.status]:
            raise InvalidStatusTransition(
                f"Không thể chuyển trạng thái từ {record.status.value} sang {target.value}"
            )
        if target == record.status:
            return record

        if not self._salaries.update_status(int(record_id), target):
            raise PersistenceError("Không thể cập nhật trạng thái bảng lương")
        logger.info("Salary %s status %s -> %s", record_id, record.status.value, target.value)

        if target == SalaryStatus.PAID:
            self._notify_safely(
                SalaryNotification(
                    type=NotificationType.SALARY_PAID,
                    employee_id=record.employee_id,
                    month=record.month,
                    net_salary=record.net_salary,
                )
            )

        return self._salaries.get_by_id(int(record_id)) or record

    def list_salaries(
        self,
        *,
        start_month: date,
        end_month: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[SalaryRecord]:
        if normalize_month(end_month) < normalize_month(start_month):
            raise ValidationError("Khoảng thời gian không hợp lệ")
        return self._salaries.list_for_period(
            start_month=normalize_month(start_month),
            end_month=normalize_month(end_month),
            employee_id=employee_id,
        )

    def monthly_statistics(self, *, start_month: date, end_month: date) -> list[MonthlyStatistics]:
        """Per-month totals over the period; months without records report zeros."""
        records = self.list_salaries(start_month=start_month, end_month=end_month)

        by_month: dict[date, list[SalaryRecord]] = defaultdict(list)
        for r in records:
            by_month[normalize_month(r.month)].append(r)

        stats: list[MonthlyStatistics] = []
        for month in iter_months(start_month, end_month):
            rows = by_month.get(month, [])
            total_net = sum((r.net_salary for r in rows), Decimal(0))
            average = (total_net / len(rows)).quantize(Decimal(1), rounding=ROUND_HALF_UP) if rows else Decimal(0)

            status_counts = {s.value: 0 for s in SalaryStatus}
            for r in rows:
                status_counts[r.status.value] += 1

            stats.append(
                MonthlyStatistics(
                    month=month,
                    record_count=len(rows),
                    total_net=total_net,
                    average_net=average,
                    total_base=sum((r.base_salary for r in rows), Decimal(0)),
                    total_bonus=sum((r.bonus for r in rows), Decimal(0)),
                    total_deductions=sum((r.deductions for r in rows), Decimal(0)),
                    status_counts=status_counts,
                )
            )
        return stats

    def component_breakdown(self, *, start_month: date, end_month: date) -> ComponentBreakdown:
        records = self.list_salaries(start_month=start_month, end_month=end_month)
        return ComponentBreakdown(
            bonuses={f: sum((getattr(r, f) for r in records), Decimal(0)) for f in _BONUS_FIELDS},
            penalties={f: sum((getattr(r, f) for r in records), Decimal(0)) for f in _PENALTY_FIELDS},
        )

    def _notify_safely(self, notification: SalaryNotification) -> None:
        try:
            self._notifier.notify(notification)
        except Exception:
            # Notifications are best-effort; the salary write already succeeded.
            logger.exception("Salary notification %s failed", notification.type.value)
