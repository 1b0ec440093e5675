from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class ShiftExpectation:
    """Ca làm việc dự kiến (chỉ giờ bắt đầu/kết thúc, không có ngày)."""

    start_time: time
    end_time: time
