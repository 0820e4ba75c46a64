from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import digits_only
from ..core.enums import PunchSource
from ..employees.model import Employee
from ..punches.model import PunchInsert
from .model import CandidatePunch, MatchResult


def find_employee(identifier: str, employees: Sequence[Employee]) -> Optional[Employee]:
    """First active employee whose PIS or CPF appears inside the identifier.

    The AFD field may carry padding or prefix noise, so a substring match is used.
    """
    for employee in employees:
        if not employee.is_active:
            continue
        pis = digits_only(employee.pis)
        cpf = digits_only(employee.cpf)
        if (pis and pis in identifier) or (cpf and cpf in identifier):
            return employee
    return None


def match_candidates(candidates: Sequence[CandidatePunch], employees: Sequence[Employee]) -> MatchResult:
    inserts: list[PunchInsert] = []
    unmatched = 0
    for candidate in candidates:
        employee = find_employee(candidate.identifier, employees)
        if employee is None:
            unmatched += 1
            continue
        inserts.append(
            PunchInsert(
                employee_id=employee.employee_id,
                timestamp=candidate.timestamp,
                source=PunchSource.IMPORTED,
                raw_line=candidate.raw_line,
            )
        )
    return MatchResult(punch_inserts=inserts, matched_count=len(inserts), unmatched_count=unmatched)
