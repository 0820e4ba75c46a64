from __future__ import annotations

from enum import Enum


class PunchSource(str, Enum):
    """Origem da marcação (punch)."""

    IMPORTED = "imported"
    MANUAL = "manual"
    WEB = "web"
    EDITED = "edited"
    ADJUSTMENT = "from-adjustment"


class AdjustmentType(str, Enum):
    MISSING_PUNCH = "missing-punch"
    MEDICAL_CERTIFICATE = "medical-certificate"
    GENERIC_ADJUSTMENT = "generic-adjustment"
    ABSENCE_EXCUSED = "absence-excused"

    @property
    def creates_punch(self) -> bool:
        return self in {AdjustmentType.MISSING_PUNCH, AdjustmentType.GENERIC_ADJUSTMENT}

    @property
    def excuses_day(self) -> bool:
        return self in {AdjustmentType.MEDICAL_CERTIFICATE, AdjustmentType.ABSENCE_EXCUSED}


class AdjustmentStatus(str, Enum):
    """Estado do fluxo de aprovação de solicitações."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class OvertimeRegime(str, Enum):
    BANK = "bank"
    PAID = "paid"
    MIXED = "mixed"


class AuditAction(str, Enum):
    PUNCH_CREATED = "punch_created"
    PUNCH_EDITED = "punch_edited"
    PUNCH_DELETED = "punch_deleted"
    ADJUSTMENT_APPROVED = "adjustment_approved"
    ADJUSTMENT_REJECTED = "adjustment_rejected"
