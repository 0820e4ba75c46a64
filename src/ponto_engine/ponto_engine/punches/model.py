from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PunchSource


@dataclass(frozen=True)
class Punch:
    """Entidade de domínio: marcação de ponto.

    A persisted punch is never physically removed: deletion sets ``is_deleted``
    and an edit keeps the first ``original_timestamp``.
    """

    punch_id: int
    employee_id: int
    timestamp: datetime
    source: PunchSource = PunchSource.IMPORTED
    raw_line: Optional[str] = None
    justification: Optional[str] = None
    adjustment_id: Optional[int] = None
    is_deleted: bool = False
    original_timestamp: Optional[datetime] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    afd_file_id: Optional[int] = None

    def as_dict(self) -> dict:
        return {
            "punch_id": self.punch_id,
            "employee_id": self.employee_id,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source.value,
            "justification": self.justification,
            "adjustment_id": self.adjustment_id,
            "afd_file_id": self.afd_file_id,
            "is_deleted": self.is_deleted,
            "original_timestamp": self.original_timestamp.isoformat() if self.original_timestamp else None,
        }


@dataclass(frozen=True)
class PunchInsert:
    """A punch waiting to be persisted (no id yet)."""

    employee_id: int
    timestamp: datetime
    source: PunchSource
    raw_line: Optional[str] = None
    justification: Optional[str] = None
    adjustment_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    afd_file_id: Optional[int] = None

    def dedup_key(self) -> tuple:
        return (self.employee_id, self.timestamp, self.raw_line)
