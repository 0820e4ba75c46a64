from __future__ import annotations

import math
from datetime import date
from typing import Mapping, Optional, Sequence

from ..adjustments.model import Adjustment
from ..common.datetime_utils import iter_days, month_bounds
from ..common.formatting import format_balance, format_minutes
from ..company.holidays import index_by_day
from ..company.model import CompanyPolicy, Holiday
from ..employees.model import Employee
from ..punches.model import Punch
from .daily import evaluate_day, is_weekend
from .factory import OvertimeRegimeFactory
from .model import DailyRecord, MonthlyMirror, MonthlySummary


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def count_working_days(start: date, end: date, holidays: Mapping[date, Holiday]) -> int:
    return sum(1 for day in iter_days(start, end) if not is_weekend(day) and day not in holidays)


def dsr_reflex(
    overtime_minutes: int,
    night_bonus_minutes: int,
    *,
    working_days: int,
    rest_days: int,
) -> int:
    """DSR reflection of variable pay: (overtime + night) / working days * rest days."""
    if working_days <= 0:
        return 0
    return _round_half_up((overtime_minutes + night_bonus_minutes) / working_days * rest_days)


def aggregate_month(
    records: Sequence[DailyRecord],
    *,
    start: date,
    end: date,
    holidays: Mapping[date, Holiday],
    policy: CompanyPolicy,
    regime_factory: Optional[OvertimeRegimeFactory] = None,
) -> MonthlySummary:
    balance = 0
    worked = 0
    expected = 0
    night_bank = 0.0
    night_bonus = 0
    inconsistent = 0
    for record in records:
        if not record.is_day_off or record.worked_minutes > 0:
            balance += record.balance_minutes
        worked += record.worked_minutes
        expected += record.expected_minutes
        night_bank += record.night_bank_minutes
        night_bonus += record.night_bonus_minutes
        inconsistent += int(record.is_inconsistent)

    overtime = max(balance, 0)
    shortfall = max(-balance, 0)

    working_days = count_working_days(start, end, holidays)
    rest_days = (end - start).days + 1 - working_days
    if policy.weekly_rest_enabled:
        dsr = dsr_reflex(overtime, night_bonus, working_days=working_days, rest_days=rest_days)
        if working_days:
            dsr_basis = (
                f"DSR = (extras {format_minutes(overtime)} + noturno {format_minutes(night_bonus)})"
                f" / {working_days} dias úteis x {rest_days} dias de descanso"
            )
        else:
            dsr_basis = "Sem dias úteis no período: DSR não calculado"
    else:
        dsr = 0
        dsr_basis = "Reflexo de DSR desativado na política da empresa"

    factory = regime_factory or OvertimeRegimeFactory()
    split = factory.for_regime(policy.overtime_regime).split(overtime)
    night_bank_rounded = _round_half_up(night_bank)

    return MonthlySummary(
        worked_minutes=worked,
        expected_minutes=expected,
        balance_minutes=balance,
        overtime_minutes=overtime,
        shortfall_minutes=shortfall,
        night_bank_minutes=night_bank_rounded,
        night_bonus_minutes=night_bonus,
        dsr_minutes=dsr,
        dsr_basis=dsr_basis,
        working_days=working_days,
        rest_days=rest_days,
        inconsistent_days=inconsistent,
        overtime_split=split,
        total_hours=format_minutes(worked),
        total_overtime=format_balance(overtime),
        total_negative=format_balance(-shortfall),
        final_balance=format_balance(balance),
        night_bank=format_balance(night_bank_rounded),
        night_bonus=format_balance(night_bonus),
        dsr=format_balance(dsr),
    )


def compute_monthly_mirror(
    employee: Employee,
    policy: CompanyPolicy,
    holidays: Sequence[Holiday],
    punches: Sequence[Punch],
    approved_adjustments: Sequence[Adjustment],
    month_key: str,
) -> MonthlyMirror:
    """Espelho de ponto of one employee for a YYYY-MM period.

    Pure function: every input is passed in, nothing is read from storage.
    """
    start, end = month_bounds(month_key)
    holidays_by_day = index_by_day(holidays)
    adjustments = [a for a in approved_adjustments if a.employee_id == employee.employee_id and a.is_approved]

    by_day: dict[date, list[Punch]] = {}
    for punch in punches:
        if punch.employee_id != employee.employee_id or punch.is_deleted:
            continue
        day = punch.timestamp.date()
        if start <= day <= end:
            by_day.setdefault(day, []).append(punch)

    records = [
        evaluate_day(
            day,
            by_day.get(day, []),
            employee=employee,
            policy=policy,
            holidays=holidays_by_day,
            adjustments=adjustments,
        )
        for day in iter_days(start, end)
    ]
    summary = aggregate_month(records, start=start, end=end, holidays=holidays_by_day, policy=policy)
    return MonthlyMirror(
        employee=employee,
        company=policy.as_company(),
        period=f"{start:%Y-%m}",
        records=records,
        summary=summary,
    )
