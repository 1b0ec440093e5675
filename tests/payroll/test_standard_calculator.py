from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.enums import OvertimeRounding
from src.hr_payroll.hr_payroll.core.exceptions import ValidationError
from src.hr_payroll.hr_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.hr_payroll.hr_payroll.payroll.model import SalaryInput


def _scenario(**overrides) -> SalaryInput:
    values = dict(
        working_days=22,
        shift_rate=200000,
        overtime_hours=5,
        overtime_rate=30000,
        kpi_bonus=500000,
        sales_bonus=0,
        weekend_bonus=0,
        other_bonus=0,
        late_count=2,
        late_penalty_per_time=50000,
        absence_count=0,
        absence_penalty_per_day=200000,
        violation_penalty=0,
    )
    values.update(overrides)
    return SalaryInput(**values)


def test_concrete_month():
    breakdown = StandardPayrollCalculator().calculate(_scenario())

    assert breakdown.details.shift_salary == 4400000
    assert breakdown.overtime_pay == 150000
    assert breakdown.base_salary == 4550000
    assert breakdown.total_bonus == 500000
    assert breakdown.total_deductions == 100000
    assert breakdown.net_salary == 4950000


def test_itemized_details_are_exposed():
    breakdown = StandardPayrollCalculator().calculate(
        _scenario(sales_bonus=100, weekend_bonus=200, other_bonus=300, absence_count=1, violation_penalty=7)
    )

    d = breakdown.details
    assert (d.kpi_bonus, d.sales_bonus, d.weekend_bonus, d.other_bonus) == (500000, 100, 200, 300)
    assert d.late_penalty == 100000
    assert d.absence_penalty == 200000
    assert d.violation_penalty == 7
    assert breakdown.total_bonus == 500600
    assert breakdown.total_deductions == 300007


def test_net_salary_is_floored_at_zero():
    breakdown = StandardPayrollCalculator().calculate(
        _scenario(working_days=1, overtime_hours=0, kpi_bonus=0, late_count=10, violation_penalty=1_000_000)
    )

    assert breakdown.total_deductions > breakdown.base_salary + breakdown.total_bonus
    assert breakdown.net_salary == 0


def test_same_input_gives_identical_breakdown():
    calc = StandardPayrollCalculator()

    assert calc.calculate(_scenario()) == calc.calculate(_scenario())


def test_fractional_overtime_is_billed_as_is():
    calc = StandardPayrollCalculator(OvertimeRounding.FRACTIONAL)

    breakdown = calc.calculate(SalaryInput(overtime_hours=2.7, overtime_rate=30000))

    assert breakdown.overtime_pay == 81000


def test_whole_hours_overtime_rounds_half_up_first():
    calc = StandardPayrollCalculator(OvertimeRounding.WHOLE_HOURS)

    assert calc.calculate(SalaryInput(overtime_hours=2.7, overtime_rate=30000)).overtime_pay == 90000
    assert calc.calculate(SalaryInput(overtime_hours=2.5, overtime_rate=30000)).overtime_pay == 90000
    assert calc.calculate(SalaryInput(overtime_hours=2.49, overtime_rate=30000)).overtime_pay == 60000


def test_input_values_are_normalized():
    salary_input = SalaryInput(working_days="3", shift_rate="200000.50", overtime_hours=1.25)

    assert salary_input.working_days == 3
    assert salary_input.shift_rate == Decimal("200000.50")
    assert salary_input.overtime_hours == Decimal("1.25")


@pytest.mark.parametrize(
    "field, value",
    [
        ("shift_rate", -1),
        ("overtime_hours", -0.5),
        ("kpi_bonus", "abc"),
        ("violation_penalty", None),
        ("late_count", 1.5),
        ("absence_count", -2),
    ],
)
def test_invalid_input_is_rejected(field, value):
    with pytest.raises(ValidationError):
        SalaryInput(**{field: value})


def test_from_mapping_ignores_unknown_and_missing_keys():
    salary_input = SalaryInput.from_mapping({"working_days": 2, "shift_rate": 100, "employee_id": "x", "kpi_bonus": None})

    assert salary_input.working_days == 2
    assert salary_input.kpi_bonus == 0
