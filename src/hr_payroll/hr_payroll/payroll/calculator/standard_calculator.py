from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.enums import OvertimeRounding
from ..model import SalaryBreakdown, SalaryDetails, SalaryInput
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule.

    net = (days * shift rate + OT hours * OT rate)
          + (kpi + sales + weekend + other)
          - (late * rate + absence * rate + violation), not below 0.
    """

    def __init__(self, overtime_rounding: OvertimeRounding = OvertimeRounding.FRACTIONAL):
        self._overtime_rounding = OvertimeRounding(overtime_rounding)

    @property
    def overtime_rounding(self) -> OvertimeRounding:
        return self._overtime_rounding

    def billable_overtime_hours(self, overtime_hours: Decimal) -> Decimal:
        if self._overtime_rounding == OvertimeRounding.WHOLE_HOURS:
            return overtime_hours.quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return overtime_hours

    def calculate(self, salary_input: SalaryInput) -> SalaryBreakdown:
        shift_salary = salary_input.working_days * salary_input.shift_rate
        overtime_salary = self.billable_overtime_hours(salary_input.overtime_hours) * salary_input.overtime_rate
        base_salary = shift_salary + overtime_salary

        total_bonus = (
            salary_input.kpi_bonus
            + salary_input.sales_bonus
            + salary_input.weekend_bonus
            + salary_input.other_bonus
        )

        late_penalty = salary_input.late_count * salary_input.late_penalty_per_time
        absence_penalty = salary_input.absence_count * salary_input.absence_penalty_per_day
        total_deductions = late_penalty + absence_penalty + salary_input.violation_penalty

        net_salary = max(Decimal(0), base_salary + total_bonus - total_deductions)

        return SalaryBreakdown(
            base_salary=base_salary,
            overtime_pay=overtime_salary,
            total_bonus=total_bonus,
            total_deductions=total_deductions,
            net_salary=net_salary,
            details=SalaryDetails(
                shift_salary=shift_salary,
                overtime_salary=overtime_salary,
                kpi_bonus=salary_input.kpi_bonus,
                sales_bonus=salary_input.sales_bonus,
                weekend_bonus=salary_input.weekend_bonus,
                other_bonus=salary_input.other_bonus,
                late_penalty=late_penalty,
                absence_penalty=absence_penalty,
                violation_penalty=salary_input.violation_penalty,
            ),
        )
