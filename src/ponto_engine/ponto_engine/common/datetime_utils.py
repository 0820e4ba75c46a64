from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.exceptions import ValidationError


def month_bounds(month_key: str) -> tuple[date, date]:
    """Return first and last day of a YYYY-MM period."""
    try:
        first = datetime.strptime((month_key or "").strip(), "%Y-%m").date()
    except ValueError:
        raise ValidationError(f"Período inválido (AAAA-MM): {month_key!r}")
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
