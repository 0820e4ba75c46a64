from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..employees.model import Employee
from ..punches.model import Punch


@dataclass(frozen=True)
class Interval:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class PairingResult:
    intervals: list[Interval] = field(default_factory=list)
    worked_minutes: int = 0
    is_inconsistent: bool = False
    unpaired: Optional[Punch] = None


@dataclass(frozen=True)
class NightMinutes:
    """Night time of one interval.

    ``bonus_minutes`` are real clock minutes (base of the night premium);
    ``bank_minutes`` are the same minutes stretched by the reduced night hour.
    """

    bank_minutes: float = 0.0
    bonus_minutes: int = 0

    def __add__(self, other: "NightMinutes") -> "NightMinutes":
        return NightMinutes(
            bank_minutes=self.bank_minutes + other.bank_minutes,
            bonus_minutes=self.bonus_minutes + other.bonus_minutes,
        )


@dataclass(frozen=True)
class DailyRecord:
    """Linha do espelho de ponto. Derived on every read, never stored."""

    date: date
    punches: list[str]
    is_day_off: bool
    holiday: Optional[str]
    is_excused: bool
    excuse_reason: Optional[str]
    raw_worked_minutes: int
    worked_minutes: int
    expected_minutes: int
    balance_minutes: int
    total_hours: str
    balance: str
    night_bank_minutes: float
    night_bonus_minutes: int
    is_inconsistent: bool

    @property
    def is_weekend(self) -> bool:
        return self.date.weekday() >= 5

    def as_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "punches": list(self.punches),
            "is_day_off": self.is_day_off,
            "holiday": self.holiday,
            "is_excused": self.is_excused,
            "excuse_reason": self.excuse_reason,
            "total_hours": self.total_hours,
            "balance": self.balance,
            "worked_minutes": self.worked_minutes,
            "expected_minutes": self.expected_minutes,
            "balance_minutes": self.balance_minutes,
            "night_bank_minutes": round(self.night_bank_minutes, 2),
            "night_bonus_minutes": self.night_bonus_minutes,
            "is_inconsistent": self.is_inconsistent,
        }


@dataclass(frozen=True)
class OvertimeSplit:
    bank_minutes: int
    paid_minutes: int


@dataclass(frozen=True)
class MonthlySummary:
    worked_minutes: int
    expected_minutes: int
    balance_minutes: int
    overtime_minutes: int
    shortfall_minutes: int
    night_bank_minutes: int
    night_bonus_minutes: int
    dsr_minutes: int
    dsr_basis: str
    working_days: int
    rest_days: int
    inconsistent_days: int
    overtime_split: OvertimeSplit
    total_hours: str
    total_overtime: str
    total_negative: str
    final_balance: str
    night_bank: str
    night_bonus: str
    dsr: str

    def as_dict(self) -> dict:
        return {
            "total_hours": self.total_hours,
            "total_overtime": self.total_overtime,
            "total_negative": self.total_negative,
            "final_balance": self.final_balance,
            "night_bank": self.night_bank,
            "night_bonus": self.night_bonus,
            "dsr": self.dsr,
            "dsr_basis": self.dsr_basis,
            "worked_minutes": self.worked_minutes,
            "expected_minutes": self.expected_minutes,
            "balance_minutes": self.balance_minutes,
            "overtime_minutes": self.overtime_minutes,
            "shortfall_minutes": self.shortfall_minutes,
            "night_bank_minutes": self.night_bank_minutes,
            "night_bonus_minutes": self.night_bonus_minutes,
            "dsr_minutes": self.dsr_minutes,
            "working_days": self.working_days,
            "rest_days": self.rest_days,
            "inconsistent_days": self.inconsistent_days,
            "bank_minutes": self.overtime_split.bank_minutes,
            "paid_minutes": self.overtime_split.paid_minutes,
        }


@dataclass(frozen=True)
class MonthlyMirror:
    employee: Employee
    company: dict
    period: str
    records: list[DailyRecord]
    summary: MonthlySummary

    def as_dict(self) -> dict:
        return {
            "employee": self.employee.as_dict(),
            "company": dict(self.company),
            "period": self.period,
            "records": [r.as_dict() for r in self.records],
            "summary": self.summary.as_dict(),
        }
