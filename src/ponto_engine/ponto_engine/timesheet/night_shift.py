"""Night-shift (adicional noturno) minutes of a worked interval.

The window is given as clock times; when ``end <= start`` it crosses midnight
and is handled as the two ranges [00:00, end) and [start, 24:00) of each day.
Overlap is computed with exact interval arithmetic over whole minutes, so it
is additive: splitting an interval at any minute boundary does not change the
raw total.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from ..common.datetime_utils import minutes_between
from ..company.model import CompanyPolicy
from ..core.constants import NIGHT_HOUR_FACTOR
from ..employees.model import RoleRules
from .model import Interval, NightMinutes


@dataclass(frozen=True)
class NightWindow:
    start: time
    end: time

    @property
    def wraps_midnight(self) -> bool:
        return self.end <= self.start

    def ranges_for(self, day: date) -> Iterator[tuple[datetime, datetime]]:
        """Night ranges that begin on ``day``."""
        if self.start == self.end:
            return
        start = datetime.combine(day, self.start)
        if self.wraps_midnight:
            yield start, datetime.combine(day + timedelta(days=1), self.end)
        else:
            yield start, datetime.combine(day, self.end)


def resolve_night_window(role_rules: Optional[RoleRules], policy: CompanyPolicy) -> NightWindow:
    """Role-specific window when both bounds are set, else the company default."""
    if role_rules and role_rules.night_start is not None and role_rules.night_end is not None:
        return NightWindow(start=role_rules.night_start, end=role_rules.night_end)
    return NightWindow(start=policy.night_start, end=policy.night_end)


def _truncate(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


def _night_ranges(start: datetime, end: datetime, window: NightWindow) -> Iterator[tuple[datetime, datetime]]:
    # A range beginning the day before may still be open at ``start``.
    day = start.date() - timedelta(days=1)
    while day <= end.date():
        yield from window.ranges_for(day)
        day += timedelta(days=1)


def raw_night_minutes(start: datetime, end: datetime, window: NightWindow) -> int:
    """Real minutes of [start, end) that fall inside the night window."""
    start, end = _truncate(start), _truncate(end)
    if end <= start:
        return 0

    total = 0
    for night_start, night_end in _night_ranges(start, end, window):
        lo = max(start, night_start)
        hi = min(end, night_end)
        if hi > lo:
            total += minutes_between(lo, hi)
    return total


def extension_minutes(start: datetime, end: datetime, window: NightWindow) -> int:
    """Minutes worked past the end of a night range the interval was inside.

    Applies to the last night range that closes within (start, end]; the
    overflow runs from that close until the exit, or until the next night
    range opens (those minutes are already night time).
    """
    start, end = _truncate(start), _truncate(end)
    if end <= start:
        return 0

    closing: Optional[datetime] = None
    next_open: Optional[datetime] = None
    for night_start, night_end in _night_ranges(start, end, window):
        if start < night_end <= end:
            closing, next_open = night_end, None
        elif closing is not None and next_open is None and night_start >= closing:
            next_open = night_start

    if closing is None:
        return 0
    stop = min(end, next_open) if next_open is not None else end
    return max(minutes_between(closing, stop), 0)


def night_overlap(interval: Interval, window: NightWindow, *, apply_extension: bool = False) -> NightMinutes:
    night = raw_night_minutes(interval.start, interval.end, window)
    if apply_extension:
        night += extension_minutes(interval.start, interval.end, window)
    return NightMinutes(bank_minutes=night * NIGHT_HOUR_FACTOR, bonus_minutes=night)
