from __future__ import annotations

from datetime import datetime

from ...shifts.model import ShiftExpectation
from ..model import DayAttendance
from .base import LatenessStrategy


class ShiftStrategy(LatenessStrategy):
    """Compare wall-clock check-in/check-out against the expected shift on the same date."""

    def __init__(self, shift: ShiftExpectation):
        self._shift = shift

    def is_late(self, day: DayAttendance) -> bool:
        check_in = day.check_in.timestamp
        expected_start = datetime.combine(check_in.date(), self._shift.start_time, tzinfo=check_in.tzinfo)
        return check_in > expected_start

    def is_early_leave(self, day: DayAttendance) -> bool:
        check_out = day.check_out.timestamp
        expected_end = datetime.combine(check_out.date(), self._shift.end_time, tzinfo=check_out.tzinfo)
        return check_out < expected_end
