from __future__ import annotations

import logging
import time
from collections import defaultdict
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from datetime import date
from typing import Optional, Sequence

from ..attendance.aggregator import AttendanceAggregator
from ..attendance.factory import LatenessStrategyFactory
from ..attendance.model import AttendanceEvent
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, normalize_month
from ..core.constants import (
    AUTO_CALCULATED_NOTE,
    DEFAULT_BULK_EMPLOYEE_TIMEOUT_SECONDS,
    DEFAULT_BULK_MAX_WORKERS,
    DEFAULT_BULK_UPSERT_RETRIES,
)
from ..core.enums import SalaryStatus
from ..settings.model import SalarySettings
from ..settings.service import SettingsService
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import BulkRunResult, SalaryInput, SalaryRecord
from .repository import SalaryRepository
from .service import ensure_not_paid

logger = logging.getLogger(__name__)


class BulkPayrollRunner:
    """Derive and upsert a draft salary record for every employee with attendance in a month.

    Employees are processed independently on a bounded thread pool. Any
    exception (aggregation, calculation or upsert) or a timeout marks only
    that employee as failed; successes are never rolled back. A record
    that is already paid is left untouched and reported as failed; other
    existing records keep their status.

    Bulk records carry no bonuses, absences or violation penalties; those
    are edited manually afterwards.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        salaries: SalaryRepository,
        settings: SettingsService,
        *,
        aggregator: Optional[AttendanceAggregator] = None,
        calculator: Optional[PayrollCalculator] = None,
        strategy_factory: Optional[LatenessStrategyFactory] = None,
        max_workers: int = DEFAULT_BULK_MAX_WORKERS,
        employee_timeout: float = DEFAULT_BULK_EMPLOYEE_TIMEOUT_SECONDS,
        upsert_retries: int = DEFAULT_BULK_UPSERT_RETRIES,
        poll_interval: float = 0.05,
    ):
        self._attendance = attendance
        self._salaries = salaries
        self._settings = settings
        self._factory = strategy_factory or LatenessStrategyFactory()
        self._aggregator = aggregator or AttendanceAggregator(strategy_factory=self._factory)
        self._calculator = calculator or StandardPayrollCalculator()
        self._max_workers = max(1, int(max_workers))
        self._employee_timeout = float(employee_timeout)
        self._upsert_retries = max(0, int(upsert_retries))
        self._poll_interval = float(poll_interval)

    def run_for_month(self, month: date) -> BulkRunResult:
        month = normalize_month(month)
        start, end = month_bounds(month)

        # Read once so every employee in this run sees the same rates.
        settings = self._settings.get()
        by_employee = self._group_by_employee(self._attendance.list_for_period(start_date=start, end_date=end))
        employee_ids = list(by_employee)

        logger.info("Bulk payroll %s: %d employees with attendance", month.strftime("%Y-%m"), len(employee_ids))

        succeeded: set[str] = set()
        errors: dict[str, str] = {}
        started: dict[str, float] = {}
        stalled: list[Future] = []

        def task(employee_id: str) -> int:
            started[employee_id] = time.monotonic()
            return self._process_employee(employee_id, by_employee[employee_id], month, settings)

        executor = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="bulk-payroll")
        try:
            pending: dict[Future, str] = {executor.submit(task, emp): emp for emp in employee_ids}
            while pending:
                done, _ = wait(list(pending), timeout=self._poll_interval, return_when=FIRST_COMPLETED)
                for fut in done:
                    emp = pending.pop(fut)
                    exc = fut.exception()
                    if exc is None:
                        succeeded.add(emp)
                    else:
                        logger.error("Bulk payroll failed for employee %s: %s", emp, exc)
                        errors[emp] = str(exc) or exc.__class__.__name__

                now = time.monotonic()
                for fut, emp in list(pending.items()):
                    t0 = started.get(emp)
                    if t0 is not None and not fut.done() and now - t0 > self._employee_timeout:
                        pending.pop(fut)
                        stalled.append(fut)
                        logger.warning("Bulk payroll timed out for employee %s after %.1fs", emp, self._employee_timeout)
                        errors[emp] = "timeout"

                # Every worker is held by a timed-out task: queued employees would never start.
                stalled = [f for f in stalled if not f.done()]
                if len(stalled) >= self._max_workers:
                    for fut, emp in list(pending.items()):
                        if emp not in started and fut.cancel():
                            pending.pop(fut)
                            logger.warning("Bulk payroll skipped employee %s: all workers stalled", emp)
                            errors[emp] = "timeout"
        finally:
            # A stuck worker must not stall the batch.
            executor.shutdown(wait=False, cancel_futures=True)

        result = BulkRunResult(
            month=month,
            succeeded_employee_ids=[e for e in employee_ids if e in succeeded],
            failed_employee_ids=[e for e in employee_ids if e in errors],
            errors=errors,
        )
        logger.info(
            "Bulk payroll %s finished: %d succeeded, %d failed",
            month.strftime("%Y-%m"),
            result.succeeded_count,
            result.failed_count,
        )
        return result

    @staticmethod
    def _group_by_employee(events: Sequence[AttendanceEvent]) -> dict[str, list[AttendanceEvent]]:
        grouped: dict[str, list[AttendanceEvent]] = defaultdict(list)
        for e in events:
            grouped[str(e.employee_id)].append(e)
        return dict(grouped)

    def build_record(
        self,
        employee_id: str,
        events: Sequence[AttendanceEvent],
        month: date,
        settings: SalarySettings,
    ) -> SalaryRecord:
        working = self._aggregator.aggregate(events, month, lateness=self._factory.for_validations())

        salary_input = SalaryInput(
            working_days=working.working_days,
            shift_rate=settings.default_shift_rate,
            overtime_hours=working.overtime_hours,
            overtime_rate=settings.default_overtime_rate,
            late_count=working.late_count,
            late_penalty_per_time=settings.late_penalty_per_time,
            absence_penalty_per_day=settings.absence_penalty_per_day,
        )
        breakdown = self._calculator.calculate(salary_input)

        return SalaryRecord.from_calculation(
            employee_id=employee_id,
            month=month,
            salary_input=salary_input,
            breakdown=breakdown,
            status=SalaryStatus.DRAFT,
            notes=AUTO_CALCULATED_NOTE,
        )

    def _process_employee(
        self,
        employee_id: str,
        events: Sequence[AttendanceEvent],
        month: date,
        settings: SalarySettings,
    ) -> int:
        ensure_not_paid(self._salaries, employee_id, month)
        record = self.build_record(employee_id, events, month, settings)

        attempt = 0
        while True:
            try:
                return self._salaries.upsert(record)
            except Exception as e:
                if attempt >= self._upsert_retries:
                    raise
                attempt += 1
                logger.warning("Retrying salary upsert for employee %s (attempt %d): %s", employee_id, attempt, e)
