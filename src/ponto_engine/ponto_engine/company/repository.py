from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CompanyPolicy, Holiday


class CompanyRepository(Protocol):
    def get_policy(self) -> Optional[CompanyPolicy]:
        raise NotImplementedError

    def list_holidays(self, *, start_date: date, end_date: date) -> Sequence[Holiday]:
        raise NotImplementedError
