from __future__ import annotations

from ..model import DayAttendance
from .base import LatenessStrategy


class ValidationStrategy(LatenessStrategy):
    """Trust the lateness annotation attached to the check-in by the validation subsystem.

    A day is late only when the check-in is flagged not on time AND the
    minutes late exceed the grace period. Early leave is not annotated.
    """

    def __init__(self, grace_minutes: int):
        self._grace_minutes = int(grace_minutes)

    def is_late(self, day: DayAttendance) -> bool:
        validation = day.check_in.validation
        if validation is None:
            return False
        return not validation.is_on_time and validation.minutes_late > self._grace_minutes

    def is_early_leave(self, day: DayAttendance) -> bool:
        return False
