from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .model import MonthlyMirror


@dataclass(frozen=True)
class AbsenteeismRow:
    employee_id: int
    name: str
    absences: int
    certificates: int
    inconsistent_days: int
    shortfall_minutes: int
    absence_rate: float

    def as_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "name": self.name,
            "absences": self.absences,
            "certificates": self.certificates,
            "inconsistent_days": self.inconsistent_days,
            "shortfall_minutes": self.shortfall_minutes,
            "absence_rate": self.absence_rate,
        }


def absenteeism_row(mirror: MonthlyMirror) -> AbsenteeismRow:
    """Faltas: working, non-excused days without a single punch."""
    absences = sum(1 for r in mirror.records if not r.is_day_off and not r.is_excused and not r.punches)
    certificates = sum(1 for r in mirror.records if r.is_excused)
    working_days = mirror.summary.working_days
    rate = round(100.0 * absences / working_days, 1) if working_days else 0.0
    return AbsenteeismRow(
        employee_id=mirror.employee.employee_id,
        name=mirror.employee.name,
        absences=absences,
        certificates=certificates,
        inconsistent_days=mirror.summary.inconsistent_days,
        shortfall_minutes=mirror.summary.shortfall_minutes,
        absence_rate=rate,
    )


def build_absenteeism_report(mirrors: Iterable[MonthlyMirror]) -> list[AbsenteeismRow]:
    rows = [absenteeism_row(m) for m in mirrors]
    rows.sort(key=lambda r: (-r.absences, r.name))
    return rows
