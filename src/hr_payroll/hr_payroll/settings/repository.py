from __future__ import annotations

from typing import Optional, Protocol

from .model import SalarySettings


class SettingsRepository(Protocol):
    def get(self) -> Optional[SalarySettings]:
        """The single settings row, or None when it was never saved."""

        raise NotImplementedError

    def save(self, settings: SalarySettings) -> int:
        raise NotImplementedError
