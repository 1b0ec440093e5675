from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..core.enums import AttendanceKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEvent, LatenessValidation
from .repository import AttendanceRepository


def _window(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    return datetime.combine(start_date, time.min), datetime.combine(end_date + timedelta(days=1), time.min)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_period(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceEvent]:
        start_ts, end_ts = _window(start_date, end_date)
        clauses = ["a.timestamp >= %s", "a.timestamp < %s"]
        params: list[object] = [start_ts, end_ts]

        if employee_id is not None:
            clauses.append("a.employee_id=%s")
            params.append(str(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    a.id, a.employee_id, a.timestamp, a.type,
                    v.is_on_time, v.minutes_late
                FROM attendance a
                LEFT JOIN attendance_validations v ON v.attendance_id = a.id
                WHERE {where}
                ORDER BY a.employee_id ASC, a.timestamp ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            events: list[AttendanceEvent] = []
            seen: set[str] = set()
            for r in rows:
                event_id = str(r["id"])
                # one validation per event; extra joined rows are ignored
                if event_id in seen:
                    continue
                seen.add(event_id)

                validation = None
                if r.get("is_on_time") is not None:
                    validation = LatenessValidation(
                        is_on_time=bool(r["is_on_time"]),
                        minutes_late=int(r.get("minutes_late") or 0),
                    )
                events.append(
                    AttendanceEvent(
                        event_id=event_id,
                        employee_id=str(r["employee_id"]),
                        timestamp=r["timestamp"],
                        kind=AttendanceKind(r["type"]),
                        validation=validation,
                    )
                )
            return events

