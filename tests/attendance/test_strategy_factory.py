from datetime import date, datetime, time

from src.hr_payroll.hr_payroll.attendance.factory import LatenessStrategyFactory
from src.hr_payroll.hr_payroll.attendance.model import DayAttendance
from src.hr_payroll.hr_payroll.attendance.strategies.normal_strategy import NormalStrategy
from src.hr_payroll.hr_payroll.attendance.strategies.shift_strategy import ShiftStrategy
from src.hr_payroll.hr_payroll.attendance.strategies.validation_strategy import ValidationStrategy
from src.hr_payroll.hr_payroll.shifts.model import ShiftExpectation
from tests.fakes import check_in, check_out


def _day(*, on_time=None, minutes_late=0) -> DayAttendance:
    return DayAttendance(
        work_date=date(2025, 1, 2),
        check_in=check_in("e1", datetime(2025, 1, 2, 8, 10), on_time=on_time, minutes_late=minutes_late),
        check_out=check_out("e1", datetime(2025, 1, 2, 17, 0)),
    )


def test_factory_without_shift_uses_normal_strategy():
    assert isinstance(LatenessStrategyFactory().for_shift(None), NormalStrategy)


def test_factory_with_shift_uses_shift_strategy():
    shift = ShiftExpectation(start_time=time(8, 0), end_time=time(17, 0))

    assert isinstance(LatenessStrategyFactory().for_shift(shift), ShiftStrategy)


def test_validation_late_only_after_grace():
    strategy = LatenessStrategyFactory(grace_minutes=5).for_validations()

    assert isinstance(strategy, ValidationStrategy)
    assert strategy.is_late(_day(on_time=False, minutes_late=6))
    assert not strategy.is_late(_day(on_time=False, minutes_late=5))


def test_validation_flagged_on_time_is_never_late():
    strategy = LatenessStrategyFactory().for_validations()

    assert not strategy.is_late(_day(on_time=True, minutes_late=30))


def test_validation_missing_is_not_late():
    strategy = LatenessStrategyFactory().for_validations()

    assert not strategy.is_late(_day())
    assert not strategy.is_early_leave(_day())
