from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional, Union

from ..audit.service import audit_entry, describe_punch
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AdjustmentStatus, AdjustmentType, AuditAction, PunchSource
from ..core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..punches.model import PunchInsert
from .model import (
    AbsenceExcusedRequest,
    Adjustment,
    AdjustmentRequest,
    GenericAdjustmentRequest,
    MedicalCertificateRequest,
    MissingPunchRequest,
    ProcessResult,
)
from .repository import AdjustmentRepository

logger = logging.getLogger(__name__)


def build_request(
    type: Union[AdjustmentType, str],
    justification: str,
    *,
    timestamp: Optional[datetime] = None,
    end_date: Optional[date] = None,
    attachment_ref: Optional[str] = None,
) -> AdjustmentRequest:
    """Turn loose form fields into the request variant of the given type."""
    try:
        kind = AdjustmentType(type)
    except ValueError:
        raise ValidationError(f"Tipo de solicitação inválido: {type!r}")
    justification = require_non_empty(justification, "Justificativa")
    attachment_ref = (attachment_ref or "").strip() or None

    if kind.creates_punch:
        if timestamp is None:
            raise ValidationError("Informe a data/hora da marcação")
        if kind == AdjustmentType.MISSING_PUNCH:
            return MissingPunchRequest(timestamp=timestamp, justification=justification, attachment_ref=attachment_ref)
        return GenericAdjustmentRequest(timestamp=timestamp, justification=justification, attachment_ref=attachment_ref)

    # A certificate without a date applies to the day it is submitted.
    if timestamp is None:
        timestamp = datetime.combine(now_local().date(), time())
    if end_date is not None and end_date < timestamp.date():
        raise ValidationError("Data final deve ser >= data inicial")
    if kind == AdjustmentType.MEDICAL_CERTIFICATE:
        return MedicalCertificateRequest(
            start=timestamp, justification=justification, end_date=end_date, attachment_ref=attachment_ref
        )
    return AbsenceExcusedRequest(
        start=timestamp, justification=justification, end_date=end_date, attachment_ref=attachment_ref
    )


def create_adjustment(
    employee_id: int,
    request: AdjustmentRequest,
    *,
    adjustment_id: int = 0,
    now: Optional[datetime] = None,
) -> Adjustment:
    """New pending adjustment; the id is assigned by the repository."""
    if isinstance(request, (MissingPunchRequest, GenericAdjustmentRequest)):
        timestamp, end_date = request.timestamp, None
    else:
        timestamp, end_date = request.start, request.end_date

    return Adjustment(
        adjustment_id=adjustment_id,
        employee_id=int(employee_id),
        type=request.type,
        justification=request.justification,
        status=AdjustmentStatus.PENDING,
        created_at=now or now_local(),
        timestamp=timestamp,
        end_date=end_date,
        attachment_ref=request.attachment_ref,
    )


def process_adjustment(
    adjustment: Adjustment,
    decision: Union[AdjustmentStatus, str],
    reviewer_id: int,
    feedback: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> ProcessResult:
    """Single pending -> approved|rejected transition.

    Approving a missing-punch or generic adjustment synthesizes one punch at
    the requested time; certificates and excused absences never touch punches.
    """
    try:
        decision = AdjustmentStatus(decision)
    except ValueError:
        raise ValidationError(f"Decisão inválida: {decision!r}")
    if decision == AdjustmentStatus.PENDING:
        raise ValidationError("Decisão deve ser 'approved' ou 'rejected'")
    if adjustment.status != AdjustmentStatus.PENDING:
        raise InvalidTransitionError("Solicitação já foi processada")

    now = now or now_local()
    updated = replace(
        adjustment,
        status=decision,
        reviewer_id=int(reviewer_id),
        feedback=(feedback or "").strip() or None,
        decided_at=now,
    )

    punches: list[PunchInsert] = []
    if decision == AdjustmentStatus.APPROVED and adjustment.type.creates_punch:
        if adjustment.timestamp is None:
            raise ValidationError("Solicitação sem data/hora não pode gerar marcação")
        punches.append(
            PunchInsert(
                employee_id=adjustment.employee_id,
                timestamp=adjustment.timestamp,
                source=PunchSource.ADJUSTMENT,
                justification=adjustment.justification,
                adjustment_id=adjustment.adjustment_id,
            )
        )

    action = AuditAction.ADJUSTMENT_APPROVED if decision == AdjustmentStatus.APPROVED else AuditAction.ADJUSTMENT_REJECTED
    after = f"solicitação #{adjustment.adjustment_id} ({adjustment.type.value}) {decision.value}"
    if punches:
        after += "; marcação criada " + ", ".join(describe_punch(p) for p in punches)
    entry = audit_entry(
        action,
        actor_id=int(reviewer_id),
        target_employee_id=adjustment.employee_id,
        before=f"solicitação #{adjustment.adjustment_id} ({adjustment.type.value}) {adjustment.status.value}",
        after=after,
        justification=updated.feedback,
        now=now,
    )
    return ProcessResult(updated_adjustment=updated, synthesized_punches=punches, audit_entry=entry)


class AdjustmentService:
    def __init__(self, adjustments: AdjustmentRepository, employees: EmployeeRepository):
        self._adjustments = adjustments
        self._employees = employees

    def create(
        self,
        *,
        employee_id: int,
        type: Union[AdjustmentType, str],
        justification: str,
        timestamp: Optional[datetime] = None,
        end_date: Optional[date] = None,
        attachment_ref: Optional[str] = None,
    ) -> Adjustment:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise NotFoundError("Funcionário não encontrado")

        request = build_request(
            type,
            justification,
            timestamp=timestamp,
            end_date=end_date,
            attachment_ref=attachment_ref,
        )
        adjustment = create_adjustment(employee.employee_id, request)
        adjustment_id = self._adjustments.create(adjustment)
        return replace(adjustment, adjustment_id=int(adjustment_id))

    def process(
        self,
        *,
        adjustment_id: int,
        decision: Union[AdjustmentStatus, str],
        reviewer_id: int,
        feedback: Optional[str] = None,
    ) -> ProcessResult:
        adjustment = self._adjustments.get_by_id(int(adjustment_id))
        if not adjustment:
            raise NotFoundError("Solicitação não encontrada")

        result = process_adjustment(adjustment, decision, reviewer_id, feedback)
        ok = self._adjustments.apply_decision(
            result.updated_adjustment,
            punches=result.synthesized_punches,
            audit=result.audit_entry,
        )
        if not ok:
            raise InvalidTransitionError("Solicitação já foi processada")

        logger.info(
            "adjustment %s %s by %s (%d punch(es) synthesized)",
            adjustment_id,
            result.updated_adjustment.status.value,
            reviewer_id,
            len(result.synthesized_punches),
        )
        return result

    def list_for_employee(self, *, employee_id: int) -> list[Adjustment]:
        return list(self._adjustments.list_requests(employee_id=int(employee_id), limit=DEFAULT_HISTORY_LIMIT))

    def list_pending(self) -> list[Adjustment]:
        return list(self._adjustments.list_requests(status=AdjustmentStatus.PENDING, limit=DEFAULT_HISTORY_LIMIT))
