from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_LATE_GRACE_MINUTES
from ..shifts.model import ShiftExpectation
from .strategies.base import LatenessStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.shift_strategy import ShiftStrategy
from .strategies.validation_strategy import ValidationStrategy


@dataclass
class LatenessStrategyFactory:
    """Factory Pattern: choose how lateness is detected for an aggregation run."""

    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES

    def for_shift(self, shift: Optional[ShiftExpectation]) -> LatenessStrategy:
        if not shift:
            return NormalStrategy()
        return ShiftStrategy(shift)

    def for_validations(self) -> LatenessStrategy:
        return ValidationStrategy(self.grace_minutes)
