from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..common.datetime_utils import month_bounds
from ..core.constants import STANDARD_HOURS_PER_DAY
from ..core.enums import AttendanceKind
from ..shifts.model import ShiftExpectation
from .factory import LatenessStrategyFactory
from .model import AttendanceEvent, DayAttendance, WorkingDataResult
from .strategies.base import LatenessStrategy

logger = logging.getLogger(__name__)

_SECONDS_PER_HOUR = Decimal(3600)
_TWO_PLACES = Decimal("0.01")


def round_hours(value: Decimal) -> float:
    """Round to 2 decimals, half away from zero (never truncate)."""
    return float(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


class AttendanceAggregator:
    """Turn one employee's raw check-in/check-out events into monthly working data.

    Rules:
    - only events whose calendar date falls inside the month are used
    - per date the earliest check-in and the latest check-out form the pair
    - a date without both kinds contributes nothing
    - a pair whose check-out precedes the check-in contributes nothing
    - overtime is anything above 8 hours on a single date
    - hours are rounded to 2 decimals once, after summing
    """

    def __init__(
        self,
        *,
        strategy_factory: Optional[LatenessStrategyFactory] = None,
        standard_hours_per_day: int = STANDARD_HOURS_PER_DAY,
    ):
        self._factory = strategy_factory or LatenessStrategyFactory()
        self._standard_seconds = Decimal(standard_hours_per_day) * _SECONDS_PER_HOUR

    def aggregate(
        self,
        events: Iterable[AttendanceEvent],
        month: date,
        shift: Optional[ShiftExpectation] = None,
        *,
        lateness: Optional[LatenessStrategy] = None,
    ) -> WorkingDataResult:
        strategy = lateness or self._factory.for_shift(shift)

        working_days = 0
        total_seconds = Decimal(0)
        overtime_seconds = Decimal(0)
        late_count = 0
        early_leave_count = 0

        for day in self.pair_days(events, month):
            worked = Decimal(str(day.worked_seconds))
            if worked < 0:
                logger.warning(
                    "Skipping inverted attendance for employee %s on %s (check-out before check-in)",
                    day.check_in.employee_id,
                    day.work_date,
                )
                continue

            working_days += 1
            total_seconds += worked
            if worked > self._standard_seconds:
                overtime_seconds += worked - self._standard_seconds

            if strategy.is_late(day):
                late_count += 1
            if strategy.is_early_leave(day):
                early_leave_count += 1

        return WorkingDataResult(
            working_days=working_days,
            total_hours=round_hours(total_seconds / _SECONDS_PER_HOUR),
            overtime_hours=round_hours(overtime_seconds / _SECONDS_PER_HOUR),
            late_count=late_count,
            early_leave_count=early_leave_count,
        )

    @staticmethod
    def pair_days(events: Iterable[AttendanceEvent], month: date) -> list[DayAttendance]:
        first, last = month_bounds(month)

        by_date: dict[date, list[AttendanceEvent]] = defaultdict(list)
        for e in events:
            work_date = e.work_date
            if first <= work_date <= last:
                by_date[work_date].append(e)

        days: list[DayAttendance] = []
        for work_date in sorted(by_date):
            day_events = by_date[work_date]
            check_ins = [e for e in day_events if e.kind == AttendanceKind.CHECK_IN]
            check_outs = [e for e in day_events if e.kind == AttendanceKind.CHECK_OUT]
            if not check_ins or not check_outs:
                continue

            days.append(
                DayAttendance(
                    work_date=work_date,
                    check_in=min(check_ins, key=lambda e: e.timestamp),
                    check_out=max(check_outs, key=lambda e: e.timestamp),
                )
            )
        return days
