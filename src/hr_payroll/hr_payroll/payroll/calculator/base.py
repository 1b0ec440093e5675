from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import SalaryBreakdown, SalaryInput


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, salary_input: SalaryInput) -> SalaryBreakdown:
        raise NotImplementedError
