from __future__ import annotations

from typing import Iterable, Optional, Sequence

import holidays as holidays_lib

from .model import Holiday


def national_holidays(year: int, *, state: Optional[str] = None) -> list[Holiday]:
    """Brazilian national (and optionally state) holidays for one year."""
    calendar = holidays_lib.Brazil(years=year, subdiv=state)
    return [Holiday(day=day, description=str(name)) for day, name in sorted(calendar.items())]


def merge_holidays(*groups: Iterable[Holiday]) -> list[Holiday]:
    """Merge holiday lists; the first description seen for a date wins."""
    by_day: dict = {}
    for group in groups:
        for h in group:
            by_day.setdefault(h.day, h)
    return [by_day[d] for d in sorted(by_day)]


def index_by_day(holidays: Sequence[Holiday]) -> dict:
    return {h.day: h for h in holidays}
