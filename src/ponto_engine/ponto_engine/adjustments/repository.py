from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..audit.model import AuditEntry
from ..core.enums import AdjustmentStatus
from ..punches.model import PunchInsert
from .model import Adjustment


class AdjustmentRepository(Protocol):
    def create(self, adjustment: Adjustment) -> int:
        """Persist a new pending adjustment and return its id."""

        raise NotImplementedError

    def get_by_id(self, adjustment_id: int) -> Optional[Adjustment]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[AdjustmentStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[Adjustment]:
        raise NotImplementedError

    def list_approved_for_period(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[Adjustment]:
        """Approved adjustments whose day (or day range) touches the period."""

        raise NotImplementedError

    def apply_decision(
        self,
        adjustment: Adjustment,
        *,
        punches: Sequence[PunchInsert],
        audit: AuditEntry,
    ) -> bool:
        """Store the decided adjustment, its punches and audit entry in one transaction.

        Returns False (and writes nothing) when the stored row is no longer pending.
        """

        raise NotImplementedError
