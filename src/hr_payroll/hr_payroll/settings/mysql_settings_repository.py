from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchone
from .model import SalarySettings
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[SalarySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, default_shift_rate, default_overtime_rate,
                       late_penalty_per_time, absence_penalty_per_day
                FROM salary_settings
                ORDER BY id
                LIMIT 1
                """
            )
            r = fetchone(cur)
            if not r:
                return None
            return SalarySettings(
                settings_id=int(r["id"]),
                default_shift_rate=as_decimal(r["default_shift_rate"]),
                default_overtime_rate=as_decimal(r["default_overtime_rate"]),
                late_penalty_per_time=as_decimal(r["late_penalty_per_time"]),
                absence_penalty_per_day=as_decimal(r["absence_penalty_per_day"]),
            )

    def save(self, settings: SalarySettings) -> int:
        existing = self.get() if settings.settings_id is None else settings
        with db_cursor(self._conn_factory) as (_, cur):
            if existing is None:
                cur.execute(
                    """
                    INSERT INTO salary_settings(default_shift_rate, default_overtime_rate,
                                                late_penalty_per_time, absence_penalty_per_day)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (
                        settings.default_shift_rate,
                        settings.default_overtime_rate,
                        settings.late_penalty_per_time,
                        settings.absence_penalty_per_day,
                    ),
                )
                return int(cur.lastrowid)

            cur.execute(
                """
                UPDATE salary_settings
                SET default_shift_rate=%s, default_overtime_rate=%s,
                    late_penalty_per_time=%s, absence_penalty_per_day=%s
                WHERE id=%s
                """,
                (
                    settings.default_shift_rate,
                    settings.default_overtime_rate,
                    settings.late_penalty_per_time,
                    settings.absence_penalty_per_day,
                    existing.settings_id,
                ),
            )
            return int(existing.settings_id)
