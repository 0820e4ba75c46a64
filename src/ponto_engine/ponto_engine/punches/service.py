from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..audit.model import AuditEntry
from ..audit.service import audit_entry, describe_punch
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import AuditAction, PunchSource
from ..core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Punch, PunchInsert
from .repository import PunchRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PunchChange:
    updated_punch: Punch
    audit_entry: AuditEntry


def edit_punch(
    punch: Punch,
    new_timestamp: datetime,
    justification: str,
    *,
    actor_id: Optional[int] = None,
    now: Optional[datetime] = None,
) -> PunchChange:
    """Move a punch to a new time, keeping the time it had before its first edit."""
    justification = require_non_empty(justification, "Justificativa")
    if punch.is_deleted:
        raise ValidationError("Marcação excluída não pode ser editada")

    updated = replace(
        punch,
        timestamp=new_timestamp,
        source=PunchSource.EDITED,
        justification=justification,
        original_timestamp=punch.original_timestamp or punch.timestamp,
    )
    entry = audit_entry(
        AuditAction.PUNCH_EDITED,
        actor_id=actor_id,
        target_employee_id=punch.employee_id,
        before=describe_punch(punch),
        after=describe_punch(updated),
        justification=justification,
        now=now or now_local(),
    )
    return PunchChange(updated_punch=updated, audit_entry=entry)


def soft_delete_punch(
    punch: Punch,
    justification: str,
    *,
    actor_id: Optional[int] = None,
    now: Optional[datetime] = None,
) -> PunchChange:
    justification = require_non_empty(justification, "Justificativa")
    if punch.is_deleted:
        raise ValidationError("Marcação já excluída")

    updated = replace(punch, is_deleted=True, justification=justification)
    entry = audit_entry(
        AuditAction.PUNCH_DELETED,
        actor_id=actor_id,
        target_employee_id=punch.employee_id,
        before=describe_punch(punch),
        after=describe_punch(updated),
        justification=justification,
        now=now or now_local(),
    )
    return PunchChange(updated_punch=updated, audit_entry=entry)


class PunchService:
    def __init__(self, punches: PunchRepository, employees: EmployeeRepository):
        self._punches = punches
        self._employees = employees

    def _get(self, punch_id: int) -> Punch:
        punch = self._punches.get_by_id(int(punch_id))
        if not punch:
            raise NotFoundError("Marcação não encontrada")
        return punch

    def _require_employee(self, employee_id: int) -> None:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise NotFoundError("Funcionário não encontrado")

    def edit(self, *, punch_id: int, new_timestamp: datetime, justification: str, actor_id: Optional[int]) -> PunchChange:
        change = edit_punch(self._get(punch_id), new_timestamp, justification, actor_id=actor_id)
        if not self._punches.save_change(change.updated_punch, audit=change.audit_entry):
            raise InvalidTransitionError("Marcação foi excluída por outra operação")
        logger.info("punch %s edited by %s", punch_id, actor_id)
        return change

    def soft_delete(self, *, punch_id: int, justification: str, actor_id: Optional[int]) -> AuditEntry:
        change = soft_delete_punch(self._get(punch_id), justification, actor_id=actor_id)
        if not self._punches.save_change(change.updated_punch, audit=change.audit_entry):
            raise InvalidTransitionError("Marcação já excluída")
        logger.info("punch %s soft-deleted by %s", punch_id, actor_id)
        return change.audit_entry

    def create_manual(
        self,
        *,
        employee_id: int,
        timestamp: datetime,
        justification: str,
        actor_id: Optional[int],
    ) -> PunchInsert:
        """Admin entry of a forgotten punch."""
        justification = require_non_empty(justification, "Justificativa")
        self._require_employee(employee_id)

        insert = PunchInsert(
            employee_id=int(employee_id),
            timestamp=timestamp,
            source=PunchSource.MANUAL,
            justification=justification,
        )
        entry = audit_entry(
            AuditAction.PUNCH_CREATED,
            actor_id=actor_id,
            target_employee_id=employee_id,
            before=None,
            after=describe_punch(insert),
            justification=justification,
            now=now_local(),
        )
        self._punches.insert_many([insert], audit=[entry])
        logger.info("manual punch for employee %s by %s", employee_id, actor_id)
        return insert

    def clock_in(
        self,
        *,
        employee_id: int,
        now: Optional[datetime] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> PunchInsert:
        """Self-service punch. Coordinates are stored as given, never validated."""
        self._require_employee(employee_id)
        insert = PunchInsert(
            employee_id=int(employee_id),
            timestamp=(now or now_local()).replace(second=0, microsecond=0),
            source=PunchSource.WEB,
            latitude=latitude,
            longitude=longitude,
        )
        self._punches.insert_many([insert])
        return insert
