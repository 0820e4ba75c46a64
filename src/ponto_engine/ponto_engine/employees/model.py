from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Optional

from ..core.exceptions import ValidationError


def _clock_minutes(t: time) -> int:
    return t.hour * 60 + t.minute


@dataclass(frozen=True)
class WorkProfile:
    """Jornada esperada: ordered (start, end) intervals for a working day."""

    intervals: tuple[tuple[time, time], ...] = ()

    @classmethod
    def parse(cls, schedule: Optional[str]) -> "WorkProfile":
        """Parse '08:00-12:00,13:00-17:00' into a profile.

        An empty schedule yields a profile with zero expected minutes.
        """
        text = (schedule or "").strip()
        if not text:
            return cls()

        intervals = []
        for chunk in text.split(","):
            parts = [p.strip() for p in chunk.split("-")]
            if len(parts) != 2:
                raise ValidationError(f"Jornada inválida: {chunk!r}")
            try:
                start = datetime.strptime(parts[0], "%H:%M").time()
                end = datetime.strptime(parts[1], "%H:%M").time()
            except ValueError:
                raise ValidationError(f"Jornada inválida: {chunk!r}")
            intervals.append((start, end))
        return cls(intervals=tuple(intervals))

    def expected_minutes(self) -> int:
        total = 0
        for start, end in self.intervals:
            minutes = _clock_minutes(end) - _clock_minutes(start)
            if minutes <= 0:
                # Interval crosses midnight (e.g. 22:00-05:00).
                minutes += 24 * 60
            total += minutes
        return total

    def __str__(self) -> str:
        return ",".join(f"{s:%H:%M}-{e:%H:%M}" for s, e in self.intervals)


@dataclass(frozen=True)
class RoleRules:
    """Regras do cargo: night window override and night premium settings."""

    night_start: Optional[time] = None
    night_end: Optional[time] = None
    night_bonus_percent: int = 20
    apply_night_extension: bool = False


@dataclass(frozen=True)
class Employee:
    """Entidade de domínio: Funcionário.

    Note: Plain data object; employees are soft-deactivated, never deleted.
    """

    employee_id: int
    name: str
    pis: Optional[str] = None
    cpf: Optional[str] = None
    work_profile: WorkProfile = field(default_factory=WorkProfile)
    role_rules: RoleRules = field(default_factory=RoleRules)
    is_active: bool = True
    cargo: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "name": self.name,
            "pis": self.pis,
            "cpf": self.cpf,
            "cargo": self.cargo,
            "work_schedule": str(self.work_profile),
            "is_active": self.is_active,
        }
