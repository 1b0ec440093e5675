from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from ..core.constants import (
    DEFAULT_ABSENCE_PENALTY_PER_DAY,
    DEFAULT_LATE_PENALTY_PER_TIME,
    DEFAULT_OVERTIME_RATE,
    DEFAULT_SHIFT_RATE,
)


@dataclass(frozen=True)
class SalarySettings:
    """Đơn giá mặc định dùng khi tính lương (một bản ghi duy nhất mỗi hệ thống)."""

    default_shift_rate: Decimal
    default_overtime_rate: Decimal
    late_penalty_per_time: Decimal
    absence_penalty_per_day: Decimal
    settings_id: Optional[int] = None

    @classmethod
    def defaults(cls) -> "SalarySettings":
        return cls(
            default_shift_rate=Decimal(DEFAULT_SHIFT_RATE),
            default_overtime_rate=Decimal(DEFAULT_OVERTIME_RATE),
            late_penalty_per_time=Decimal(DEFAULT_LATE_PENALTY_PER_TIME),
            absence_penalty_per_day=Decimal(DEFAULT_ABSENCE_PENALTY_PER_DAY),
        )

    def with_id(self, settings_id: int) -> "SalarySettings":
        return replace(self, settings_id=settings_id)

    def to_dict(self) -> dict:
        return {
            "default_shift_rate": float(self.default_shift_rate),
            "default_overtime_rate": float(self.default_overtime_rate),
            "late_penalty_per_time": float(self.late_penalty_per_time),
            "absence_penalty_per_day": float(self.absence_penalty_per_day),
        }
