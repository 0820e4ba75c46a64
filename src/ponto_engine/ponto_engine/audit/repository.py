from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AuditEntry


class AuditRepository(Protocol):
    def append(self, entry: AuditEntry) -> int:
        raise NotImplementedError

    def list_recent(self, *, employee_id: Optional[int] = None, limit: int = 200) -> Sequence[AuditEntry]:
        raise NotImplementedError
