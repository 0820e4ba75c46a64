from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import OvertimeRegime
from .regimes.bank_regime import BankRegime
from .regimes.base import OvertimeRegimeStrategy
from .regimes.mixed_regime import MixedRegime
from .regimes.paid_regime import PaidRegime


@dataclass
class OvertimeRegimeFactory:
    """Factory Pattern: choose the overtime strategy configured for the company."""

    def for_regime(self, regime: OvertimeRegime) -> OvertimeRegimeStrategy:
        if regime == OvertimeRegime.PAID:
            return PaidRegime()
        if regime == OvertimeRegime.MIXED:
            return MixedRegime()
        return BankRegime()
