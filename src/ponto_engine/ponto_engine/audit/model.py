from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AuditAction


@dataclass(frozen=True)
class AuditEntry:
    """Append-only record of a punch or adjustment mutation."""

    action: AuditAction
    actor_id: Optional[int]
    target_employee_id: int
    before: Optional[str]
    after: Optional[str]
    created_at: datetime
    justification: Optional[str] = None
    audit_id: Optional[int] = None

    def as_dict(self) -> dict:
        return {
            "audit_id": self.audit_id,
            "action": self.action.value,
            "actor_id": self.actor_id,
            "target_employee_id": self.target_employee_id,
            "before": self.before,
            "after": self.after,
            "justification": self.justification,
            "created_at": self.created_at.isoformat(),
        }
