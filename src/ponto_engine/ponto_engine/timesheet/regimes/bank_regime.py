from __future__ import annotations

from ..model import OvertimeSplit
from .base import OvertimeRegimeStrategy


class BankRegime(OvertimeRegimeStrategy):
    """Banco de horas: every overtime minute is compensated later."""

    def split(self, overtime_minutes: int) -> OvertimeSplit:
        return OvertimeSplit(bank_minutes=max(overtime_minutes, 0), paid_minutes=0)
