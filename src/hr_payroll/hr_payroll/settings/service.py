from __future__ import annotations

import logging

from ..common.validators import require_non_negative
from .model import SalarySettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get(self) -> SalarySettings:
        """Current settings; built-in defaults when no row exists."""
        current = self._settings.get()
        if current is None:
            logger.info("No salary_settings row, using built-in defaults")
            return SalarySettings.defaults()
        return current

    def update(
        self,
        *,
        default_shift_rate,
        default_overtime_rate,
        late_penalty_per_time,
        absence_penalty_per_day,
    ) -> SalarySettings:
        current = self._settings.get()
        updated = SalarySettings(
            default_shift_rate=require_non_negative(default_shift_rate, "Lương/buổi"),
            default_overtime_rate=require_non_negative(default_overtime_rate, "Lương OT/giờ"),
            late_penalty_per_time=require_non_negative(late_penalty_per_time, "Phạt đi muộn/lần"),
            absence_penalty_per_day=require_non_negative(absence_penalty_per_day, "Phạt nghỉ KP/ngày"),
            settings_id=current.settings_id if current else None,
        )
        settings_id = self._settings.save(updated)
        logger.info("Salary settings %s updated", settings_id)
        return updated.with_id(settings_id)
