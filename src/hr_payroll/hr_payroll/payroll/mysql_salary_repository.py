from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import SalaryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import SalaryRecord
from .repository import SalaryRepository

_COLUMNS = (
    "employee_id",
    "month",
    "working_days",
    "shift_rate",
    "overtime_hours",
    "overtime_rate",
    "kpi_bonus",
    "sales_bonus",
    "weekend_bonus",
    "other_bonus",
    "late_count",
    "late_penalty",
    "absence_count",
    "absence_penalty",
    "violation_penalty",
    "violation_notes",
    "base_salary",
    "bonus",
    "deductions",
    "net_salary",
    "status",
    "notes",
)

_SELECT = f"SELECT id, {', '.join(_COLUMNS)} FROM salaries"


def _to_record(r: Dict[str, Any]) -> SalaryRecord:
    return SalaryRecord(
        record_id=int(r["id"]),
        employee_id=str(r["employee_id"]),
        month=r["month"],
        working_days=int(r.get("working_days") or 0),
        shift_rate=as_decimal(r.get("shift_rate")),
        overtime_hours=as_decimal(r.get("overtime_hours")),
        overtime_rate=as_decimal(r.get("overtime_rate")),
        kpi_bonus=as_decimal(r.get("kpi_bonus")),
        sales_bonus=as_decimal(r.get("sales_bonus")),
        weekend_bonus=as_decimal(r.get("weekend_bonus")),
        other_bonus=as_decimal(r.get("other_bonus")),
        late_count=int(r.get("late_count") or 0),
        late_penalty=as_decimal(r.get("late_penalty")),
        absence_count=int(r.get("absence_count") or 0),
        absence_penalty=as_decimal(r.get("absence_penalty")),
        violation_penalty=as_decimal(r.get("violation_penalty")),
        violation_notes=r.get("violation_notes"),
        base_salary=as_decimal(r.get("base_salary")),
        bonus=as_decimal(r.get("bonus")),
        deductions=as_decimal(r.get("deductions")),
        net_salary=as_decimal(r.get("net_salary")),
        status=SalaryStatus(r.get("status") or SalaryStatus.DRAFT.value),
        notes=r.get("notes"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, record: SalaryRecord) -> int:
        values = []
        for col in _COLUMNS:
            v = getattr(record, col)
            if isinstance(v, SalaryStatus):
                v = v.value
            values.append(v)

        placeholders = ",".join(["%s"] * len(_COLUMNS))
        # status is only set on insert; a paid row keeps its figures.
        updates = ", ".join(
            f"{c}=IF(status='paid', {c}, VALUES({c}))"
            for c in _COLUMNS
            if c not in ("employee_id", "month", "status")
        )

        with db_cursor(self._conn_factory) as (_, cur):
            # LAST_INSERT_ID(id) makes lastrowid point at the replaced row too.
            cur.execute(
                f"""
                INSERT INTO salaries({', '.join(_COLUMNS)})
                VALUES({placeholders})
                ON DUPLICATE KEY UPDATE id=LAST_INSERT_ID(id), {updates}
                """,
                tuple(values),
            )
            return int(cur.lastrowid)

    def get_by_id(self, record_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_month(self, employee_id: str, month: date) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE employee_id=%s AND month=%s", (str(employee_id), month.replace(day=1)))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def update_status(self, record_id: int, status: SalaryStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE salaries SET status=%s WHERE id=%s",
                (SalaryStatus(status).value, int(record_id)),
            )
            return cur.rowcount > 0

    def list_for_period(
        self,
        *,
        start_month: date,
        end_month: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[SalaryRecord]:
        clauses = ["month BETWEEN %s AND %s"]
        params: list[object] = [start_month.replace(day=1), end_month.replace(day=1)]

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(str(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where} ORDER BY month ASC, employee_id ASC", tuple(params))
            return [_to_record(r) for r in fetchall(cur)]
