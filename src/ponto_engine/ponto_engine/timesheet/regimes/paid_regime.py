from __future__ import annotations

from ..model import OvertimeSplit
from .base import OvertimeRegimeStrategy


class PaidRegime(OvertimeRegimeStrategy):
    """Overtime goes entirely to payroll."""

    def split(self, overtime_minutes: int) -> OvertimeSplit:
        return OvertimeSplit(bank_minutes=0, paid_minutes=max(overtime_minutes, 0))
