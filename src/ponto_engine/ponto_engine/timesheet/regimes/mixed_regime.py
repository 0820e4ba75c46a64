from __future__ import annotations

from ..model import OvertimeSplit
from .base import OvertimeRegimeStrategy


class MixedRegime(OvertimeRegimeStrategy):
    """50% banked, 50% paid; an odd minute stays in the bank."""

    def split(self, overtime_minutes: int) -> OvertimeSplit:
        overtime = max(overtime_minutes, 0)
        paid = overtime // 2
        return OvertimeSplit(bank_minutes=overtime - paid, paid_minutes=paid)
