from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from ..audit.model import AuditEntry
from ..core.enums import AdjustmentStatus, AdjustmentType
from ..punches.model import PunchInsert


@dataclass(frozen=True)
class Adjustment:
    """Solicitação do funcionário (ajuste de ponto / atestado)."""

    adjustment_id: int
    employee_id: int
    type: AdjustmentType
    justification: str
    status: AdjustmentStatus
    created_at: datetime
    timestamp: Optional[datetime] = None
    end_date: Optional[date] = None
    attachment_ref: Optional[str] = None
    reviewer_id: Optional[int] = None
    feedback: Optional[str] = None
    decided_at: Optional[datetime] = None

    @property
    def is_approved(self) -> bool:
        return self.status == AdjustmentStatus.APPROVED

    def covers(self, day: date) -> bool:
        """Whether a certificate/absence applies to ``day``."""
        if self.timestamp is None:
            return False
        first = self.timestamp.date()
        if self.end_date is None:
            return day == first
        return first <= day <= self.end_date

    def as_dict(self) -> dict:
        return {
            "adjustment_id": self.adjustment_id,
            "employee_id": self.employee_id,
            "type": self.type.value,
            "justification": self.justification,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "attachment_ref": self.attachment_ref,
            "reviewer_id": self.reviewer_id,
            "feedback": self.feedback,
            "created_at": self.created_at.isoformat(),
            "decided_at": self.decided_at.isoformat() if self.decided_at else None,
        }


# Request variants: punch-creating types carry one timestamp, excusing types a
# day range.


@dataclass(frozen=True)
class MissingPunchRequest:
    timestamp: datetime
    justification: str
    attachment_ref: Optional[str] = None
    type: AdjustmentType = field(default=AdjustmentType.MISSING_PUNCH, init=False)


@dataclass(frozen=True)
class GenericAdjustmentRequest:
    timestamp: datetime
    justification: str
    attachment_ref: Optional[str] = None
    type: AdjustmentType = field(default=AdjustmentType.GENERIC_ADJUSTMENT, init=False)


@dataclass(frozen=True)
class MedicalCertificateRequest:
    start: datetime
    justification: str
    end_date: Optional[date] = None
    attachment_ref: Optional[str] = None
    type: AdjustmentType = field(default=AdjustmentType.MEDICAL_CERTIFICATE, init=False)


@dataclass(frozen=True)
class AbsenceExcusedRequest:
    start: datetime
    justification: str
    end_date: Optional[date] = None
    attachment_ref: Optional[str] = None
    type: AdjustmentType = field(default=AdjustmentType.ABSENCE_EXCUSED, init=False)


AdjustmentRequest = Union[
    MissingPunchRequest,
    GenericAdjustmentRequest,
    MedicalCertificateRequest,
    AbsenceExcusedRequest,
]


@dataclass(frozen=True)
class ProcessResult:
    updated_adjustment: Adjustment
    synthesized_punches: list[PunchInsert]
    audit_entry: AuditEntry
