from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceKind


@dataclass(frozen=True)
class LatenessValidation:
    """Kết quả kiểm tra đi muộn gắn với một lần chấm công vào."""

    is_on_time: bool
    minutes_late: int = 0


@dataclass(frozen=True)
class AttendanceEvent:
    """Thực thể miền (domain): Một lần quẹt thẻ vào/ra."""

    employee_id: str
    timestamp: datetime
    kind: AttendanceKind
    event_id: Optional[str] = None
    validation: Optional[LatenessValidation] = None

    @property
    def work_date(self) -> date:
        return self.timestamp.date()


@dataclass(frozen=True)
class DayAttendance:
    """The check-in/check-out pair chosen for one calendar date."""

    work_date: date
    check_in: AttendanceEvent
    check_out: AttendanceEvent

    @property
    def worked_seconds(self) -> float:
        return (self.check_out.timestamp - self.check_in.timestamp).total_seconds()


@dataclass(frozen=True)
class WorkingDataResult:
    working_days: int = 0
    total_hours: float = 0.0
    overtime_hours: float = 0.0
    late_count: int = 0
    early_leave_count: int = 0
