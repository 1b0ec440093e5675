from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.aggregator import AttendanceAggregator
from .attendance.factory import LatenessStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .core.constants import (
    DEFAULT_BULK_EMPLOYEE_TIMEOUT_SECONDS,
    DEFAULT_BULK_MAX_WORKERS,
    DEFAULT_BULK_UPSERT_RETRIES,
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_NOTIFY_TIMEOUT_SECONDS,
)
from .core.enums import OvertimeRounding
from .database.connection import DBConfig, DatabaseConnection
from .notifications.notifier import SalaryNotifier, build_notifier
from .payroll.bulk_runner import BulkPayrollRunner
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.repository import SalaryRepository
from .payroll.service import PayrollService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService


@dataclass(frozen=True)
class PayrollOptions:
    overtime_rounding: OvertimeRounding = OvertimeRounding.FRACTIONAL
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    bulk_max_workers: int = DEFAULT_BULK_MAX_WORKERS
    bulk_employee_timeout: float = DEFAULT_BULK_EMPLOYEE_TIMEOUT_SECONDS
    bulk_upsert_retries: int = DEFAULT_BULK_UPSERT_RETRIES
    notify_url: Optional[str] = None
    notify_api_key: Optional[str] = None
    notify_timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS

    @classmethod
    def from_settings(cls, settings) -> "PayrollOptions":
        return cls(
            overtime_rounding=OvertimeRounding(getattr(settings, "OVERTIME_ROUNDING", OvertimeRounding.FRACTIONAL.value)),
            late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
            bulk_max_workers=int(getattr(settings, "BULK_MAX_WORKERS", DEFAULT_BULK_MAX_WORKERS)),
            bulk_employee_timeout=float(getattr(settings, "BULK_EMPLOYEE_TIMEOUT_SECONDS", DEFAULT_BULK_EMPLOYEE_TIMEOUT_SECONDS)),
            bulk_upsert_retries=int(getattr(settings, "BULK_UPSERT_RETRIES", DEFAULT_BULK_UPSERT_RETRIES)),
            notify_url=getattr(settings, "NOTIFY_URL", None) or None,
            notify_api_key=getattr(settings, "NOTIFY_API_KEY", None) or None,
            notify_timeout=float(getattr(settings, "NOTIFY_TIMEOUT_SECONDS", DEFAULT_NOTIFY_TIMEOUT_SECONDS)),
        )


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    settings_repo: SettingsRepository
    salaries_repo: SalaryRepository

    settings_service: SettingsService
    payroll_service: PayrollService
    bulk_runner: BulkPayrollRunner


def wire_services(
    *,
    conn: Optional[DatabaseConnection],
    attendance_repo: AttendanceRepository,
    settings_repo: SettingsRepository,
    salaries_repo: SalaryRepository,
    options: PayrollOptions,
    notifier: Optional[SalaryNotifier] = None,
) -> Container:
    factory = LatenessStrategyFactory(grace_minutes=options.late_grace_minutes)
    aggregator = AttendanceAggregator(strategy_factory=factory)
    calculator = StandardPayrollCalculator(options.overtime_rounding)
    notifier = notifier or build_notifier(
        options.notify_url,
        api_key=options.notify_api_key,
        timeout=options.notify_timeout,
    )

    settings_service = SettingsService(settings_repo)
    payroll_service = PayrollService(
        attendance_repo,
        salaries_repo,
        settings_service,
        aggregator=aggregator,
        calculator=calculator,
        notifier=notifier,
    )
    bulk_runner = BulkPayrollRunner(
        attendance_repo,
        salaries_repo,
        settings_service,
        aggregator=aggregator,
        calculator=calculator,
        strategy_factory=factory,
        max_workers=options.bulk_max_workers,
        employee_timeout=options.bulk_employee_timeout,
        upsert_retries=options.bulk_upsert_retries,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        salaries_repo=salaries_repo,
        settings_service=settings_service,
        payroll_service=payroll_service,
        bulk_runner=bulk_runner,
    )


def build_container(*, db_config: dict, options: Optional[PayrollOptions] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        conn=conn,
        attendance_repo=MySQLAttendanceRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        options=options or PayrollOptions(),
    )
