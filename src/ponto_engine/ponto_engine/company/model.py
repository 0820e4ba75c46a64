from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.constants import (
    DEFAULT_BANK_EXPIRATION_MONTHS,
    DEFAULT_NIGHT_END,
    DEFAULT_NIGHT_START,
    DEFAULT_TOLERANCE_MINUTES,
)
from ..core.enums import OvertimeRegime


@dataclass(frozen=True)
class CompanyPolicy:
    """Entidade de domínio: configuração única da empresa.

    Read by every calculation; mutated only by HR through the persistence layer.
    """

    razao_social: str = ""
    cnpj: str = ""
    endereco: str = ""
    tolerance_minutes: int = DEFAULT_TOLERANCE_MINUTES
    night_start: time = DEFAULT_NIGHT_START
    night_end: time = DEFAULT_NIGHT_END
    overtime_regime: OvertimeRegime = OvertimeRegime.BANK
    bank_expiration_months: int = DEFAULT_BANK_EXPIRATION_MONTHS
    weekly_rest_enabled: bool = True

    def as_company(self) -> dict:
        return {"razao_social": self.razao_social, "cnpj": self.cnpj, "endereco": self.endereco}


@dataclass(frozen=True)
class Holiday:
    day: date
    description: str
    holiday_id: Optional[int] = None
