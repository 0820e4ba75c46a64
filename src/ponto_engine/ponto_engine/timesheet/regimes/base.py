from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import OvertimeSplit


class OvertimeRegimeStrategy(ABC):
    """Strategy Pattern: how monthly overtime is split between bank and payroll."""

    @abstractmethod
    def split(self, overtime_minutes: int) -> OvertimeSplit:
        raise NotImplementedError
