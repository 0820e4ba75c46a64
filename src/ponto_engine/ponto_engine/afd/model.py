from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..punches.model import PunchInsert


@dataclass(frozen=True)
class CandidatePunch:
    """A decoded type-3 AFD record, not yet linked to an employee."""

    identifier: str
    timestamp: datetime
    raw_line: str


@dataclass(frozen=True)
class ParseResult:
    candidates: list[CandidatePunch] = field(default_factory=list)
    total_lines: int = 0
    malformed_lines: int = 0


@dataclass(frozen=True)
class MatchResult:
    punch_inserts: list[PunchInsert] = field(default_factory=list)
    matched_count: int = 0
    unmatched_count: int = 0


@dataclass(frozen=True)
class AfdImportResult:
    punch_inserts: list[PunchInsert]
    matched_count: int
    total_records: int
    unprocessed_count: int
    malformed_lines: int = 0
    afd_file_id: Optional[int] = None


@dataclass(frozen=True)
class AfdFile:
    """Histórico de importação: one uploaded AFD file."""

    afd_file_id: Optional[int]
    filename: str
    uploaded_at: datetime
    record_count: int = 0
    matched_count: int = 0
    inserted_count: int = 0
    malformed_lines: int = 0
    processed: bool = False

    def as_dict(self) -> dict:
        return {
            "afd_file_id": self.afd_file_id,
            "filename": self.filename,
            "uploaded_at": self.uploaded_at.isoformat(),
            "record_count": self.record_count,
            "matched_count": self.matched_count,
            "inserted_count": self.inserted_count,
            "malformed_lines": self.malformed_lines,
            "processed": self.processed,
        }
