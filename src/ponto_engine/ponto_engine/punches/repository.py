from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..audit.model import AuditEntry
from .model import Punch, PunchInsert


class PunchRepository(Protocol):
    def get_by_id(self, punch_id: int) -> Optional[Punch]:
        raise NotImplementedError

    def list_for_period(
        self,
        *,
        employee_id: int,
        start: datetime,
        end: datetime,
        include_deleted: bool = False,
    ) -> Sequence[Punch]:
        """Punches with start <= timestamp < end, ordered by timestamp."""

        raise NotImplementedError

    def insert_many(self, punches: Sequence[PunchInsert], *, audit: Sequence[AuditEntry] = ()) -> int:
        """Insert all punches in one transaction (all-or-nothing)."""

        raise NotImplementedError

    def save_change(self, punch: Punch, *, audit: AuditEntry) -> bool:
        """Persist an edited/soft-deleted punch together with its audit entry.

        Returns False (and writes nothing) when the stored punch is already deleted.
        """

        raise NotImplementedError
