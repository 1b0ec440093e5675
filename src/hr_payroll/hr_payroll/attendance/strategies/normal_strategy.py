from __future__ import annotations

from ..model import DayAttendance
from .base import LatenessStrategy


class NormalStrategy(LatenessStrategy):
    """No expectation to compare against: every day is on time."""

    def is_late(self, day: DayAttendance) -> bool:
        return False

    def is_early_leave(self, day: DayAttendance) -> bool:
        return False
