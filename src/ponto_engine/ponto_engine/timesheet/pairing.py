from __future__ import annotations

from typing import Iterable

from ..common.datetime_utils import minutes_between
from ..punches.model import Punch
from .model import Interval, PairingResult


def active_sorted(punches: Iterable[Punch]) -> list[Punch]:
    """Drop soft-deleted punches and order the rest by timestamp."""
    return sorted((p for p in punches if not p.is_deleted), key=lambda p: p.timestamp)


def pair_punches(punches: Iterable[Punch]) -> PairingResult:
    """Naive sequential pairing: 1st/2nd punch, 3rd/4th punch, ...

    A trailing punch without exit adds no minutes and marks the day inconsistent.
    """
    ordered = active_sorted(punches)

    intervals: list[Interval] = []
    worked = 0
    for i in range(0, len(ordered) - 1, 2):
        interval = Interval(start=ordered[i].timestamp, end=ordered[i + 1].timestamp)
        intervals.append(interval)
        worked += minutes_between(interval.start, interval.end)

    unpaired = ordered[-1] if len(ordered) % 2 == 1 else None
    return PairingResult(
        intervals=intervals,
        worked_minutes=worked,
        is_inconsistent=unpaired is not None,
        unpaired=unpaired,
    )
