from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import DayAttendance


class LatenessStrategy(ABC):
    """Strategy Pattern: encapsulate how a worked day is judged late / early leave."""

    @abstractmethod
    def is_late(self, day: DayAttendance) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_early_leave(self, day: DayAttendance) -> bool:
        raise NotImplementedError
