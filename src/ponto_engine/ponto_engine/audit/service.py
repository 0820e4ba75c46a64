from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AuditAction
from ..punches.model import Punch, PunchInsert
from .model import AuditEntry
from .repository import AuditRepository


def describe_punch(punch: Union[Punch, PunchInsert, None]) -> Optional[str]:
    if punch is None:
        return None
    text = f"{punch.timestamp:%Y-%m-%d %H:%M} ({punch.source.value})"
    if isinstance(punch, Punch):
        text = f"#{punch.punch_id} {text}"
        if punch.is_deleted:
            text += " [excluída]"
    return text


def audit_entry(
    action: AuditAction,
    *,
    actor_id: Optional[int],
    target_employee_id: int,
    before: Optional[str],
    after: Optional[str],
    now: datetime,
    justification: Optional[str] = None,
) -> AuditEntry:
    return AuditEntry(
        action=action,
        actor_id=actor_id,
        target_employee_id=int(target_employee_id),
        before=before,
        after=after,
        created_at=now,
        justification=justification,
    )


class AuditService:
    """Read side of the audit trail; entries are written by the mutating services."""

    def __init__(self, audit: AuditRepository):
        self._audit = audit

    def list_recent(self, *, employee_id: Optional[int] = None, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        return [e.as_dict() for e in self._audit.list_recent(employee_id=employee_id, limit=int(limit))]
