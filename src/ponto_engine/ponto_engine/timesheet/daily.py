from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Sequence

from ..adjustments.model import Adjustment
from ..common.formatting import format_balance, format_minutes
from ..company.model import CompanyPolicy, Holiday
from ..employees.model import Employee
from ..punches.model import Punch
from .model import DailyRecord, NightMinutes
from .night_shift import night_overlap, resolve_night_window
from .pairing import active_sorted, pair_punches


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def excusing_adjustment(day: date, adjustments: Sequence[Adjustment]) -> Optional[Adjustment]:
    """Approved certificate/absence covering ``day``, if any."""
    for adj in adjustments:
        if adj.is_approved and adj.type.excuses_day and adj.covers(day):
            return adj
    return None


def evaluate_day(
    day: date,
    punches: Sequence[Punch],
    *,
    employee: Employee,
    policy: CompanyPolicy,
    holidays: Mapping[date, Holiday],
    adjustments: Sequence[Adjustment] = (),
) -> DailyRecord:
    """Build the mirror line of one calendar day.

    ``punches`` must already be restricted to ``day``; soft-deleted punches
    are ignored. Any work on an off day (weekend/holiday) is pure credit.
    Within the company tolerance the worked time is rounded to the schedule,
    and an excused day is credited as fully worked.
    """
    holiday = holidays.get(day)
    is_day_off = is_weekend(day) or holiday is not None
    excuse = excusing_adjustment(day, adjustments)
    is_excused = excuse is not None

    pairing = pair_punches(punches)
    window = resolve_night_window(employee.role_rules, policy)
    night = NightMinutes()
    for interval in pairing.intervals:
        night += night_overlap(interval, window, apply_extension=employee.role_rules.apply_night_extension)

    raw_worked = pairing.worked_minutes
    expected = 0 if is_day_off else employee.work_profile.expected_minutes()

    if is_excused:
        worked = expected
    elif not is_day_off and abs(raw_worked - expected) <= policy.tolerance_minutes:
        worked = expected
    else:
        worked = raw_worked

    balance = worked if is_day_off else worked - expected

    return DailyRecord(
        date=day,
        punches=[f"{p.timestamp:%H:%M}" for p in active_sorted(punches)],
        is_day_off=is_day_off,
        holiday=holiday.description if holiday else None,
        is_excused=is_excused,
        excuse_reason=excuse.justification if excuse else None,
        raw_worked_minutes=raw_worked,
        worked_minutes=worked,
        expected_minutes=expected,
        balance_minutes=balance,
        total_hours=format_minutes(worked),
        balance=format_balance(balance),
        night_bank_minutes=night.bank_minutes,
        night_bonus_minutes=night.bonus_minutes,
        is_inconsistent=pairing.is_inconsistent,
    )
