from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import SalaryStatus
from .model import SalaryRecord


class SalaryRepository(Protocol):
    def upsert(self, record: SalaryRecord) -> int:
        """Insert or replace the record keyed by (employee_id, month); returns its id.

        An existing row keeps its status, and a paid row is left untouched.
        """

        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def get_for_employee_month(self, employee_id: str, month: date) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def update_status(self, record_id: int, status: SalaryStatus) -> bool:
        raise NotImplementedError

    def list_for_period(
        self,
        *,
        start_month: date,
        end_month: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[SalaryRecord]:
        raise NotImplementedError
