from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

from src.hr_payroll.hr_payroll.attendance.model import AttendanceEvent, LatenessValidation
from src.hr_payroll.hr_payroll.core.enums import AttendanceKind, SalaryStatus
from src.hr_payroll.hr_payroll.payroll.model import SalaryRecord
from src.hr_payroll.hr_payroll.settings.model import SalarySettings


def check_in(employee_id: str, ts: datetime, *, on_time: Optional[bool] = None, minutes_late: int = 0) -> AttendanceEvent:
    validation = None
    if on_time is not None:
        validation = LatenessValidation(is_on_time=on_time, minutes_late=minutes_late)
    return AttendanceEvent(employee_id=employee_id, timestamp=ts, kind=AttendanceKind.CHECK_IN, validation=validation)


def check_out(employee_id: str, ts: datetime) -> AttendanceEvent:
    return AttendanceEvent(employee_id=employee_id, timestamp=ts, kind=AttendanceKind.CHECK_OUT)


def workday(employee_id: str, day: date, start: tuple[int, int], end: tuple[int, int], **validation) -> list[AttendanceEvent]:
    return [
        check_in(employee_id, datetime(day.year, day.month, day.day, *start), **validation),
        check_out(employee_id, datetime(day.year, day.month, day.day, *end)),
    ]


@dataclass
class InMemoryAttendance:
    events: list[AttendanceEvent] = field(default_factory=list)
    calls: int = 0

    def list_for_period(self, *, start_date: date, end_date: date, employee_id: Optional[str] = None):
        self.calls += 1
        return [
            e
            for e in self.events
            if start_date <= e.timestamp.date() <= end_date and (employee_id is None or e.employee_id == employee_id)
        ]


class InMemorySalaries:
    def __init__(self, *, fail_for: Optional[set[str]] = None):
        self._by_key: dict[tuple[str, date], SalaryRecord] = {}
        self._lock = threading.Lock()
        self._id = 0
        self.fail_for = set(fail_for or ())
        self.upsert_calls = 0

    def upsert(self, record: SalaryRecord) -> int:
        with self._lock:
            self.upsert_calls += 1
            if record.employee_id in self.fail_for:
                raise RuntimeError(f"Duplicate entry for {record.employee_id}")

            key = (record.employee_id, record.month)
            existing = self._by_key.get(key)
            if existing is not None:
                if existing.status != SalaryStatus.PAID:
                    self._by_key[key] = replace(record, record_id=existing.record_id, status=existing.status)
                return existing.record_id

            self._id += 1
            self._by_key[key] = replace(record, record_id=self._id)
            return self._id

    def get_by_id(self, record_id: int) -> Optional[SalaryRecord]:
        for r in self._by_key.values():
            if r.record_id == record_id:
                return r
        return None

    def get_for_employee_month(self, employee_id: str, month: date) -> Optional[SalaryRecord]:
        return self._by_key.get((employee_id, month.replace(day=1)))

    def update_status(self, record_id: int, status: SalaryStatus) -> bool:
        for key, r in self._by_key.items():
            if r.record_id == record_id:
                self._by_key[key] = replace(r, status=SalaryStatus(status))
                return True
        return False

    def list_for_period(self, *, start_month: date, end_month: date, employee_id: Optional[str] = None):
        rows = [
            r
            for r in self._by_key.values()
            if start_month <= r.month <= end_month and (employee_id is None or r.employee_id == employee_id)
        ]
        return sorted(rows, key=lambda r: (r.month, r.employee_id))

    def all(self) -> list[SalaryRecord]:
        return list(self._by_key.values())


class InMemorySettingsRepo:
    def __init__(self, settings: Optional[SalarySettings] = None):
        self._settings = settings
        self.get_calls = 0

    def get(self) -> Optional[SalarySettings]:
        self.get_calls += 1
        return self._settings

    def save(self, settings: SalarySettings) -> int:
        settings_id = settings.settings_id or 1
        self._settings = settings.with_id(settings_id)
        return settings_id


class RecordingNotifier:
    def __init__(self, *, fail: bool = False):
        self.sent = []
        self.fail = fail

    def notify(self, notification) -> None:
        if self.fail:
            raise ConnectionError("notification endpoint down")
        self.sent.append(notification)
