from datetime import date

from src.ponto_engine.ponto_engine.timesheet.pairing import pair_punches
from tests.fakes import at, make_punch

DAY = date(2024, 3, 5)


def test_pairs_sequentially_after_sorting():
    punches = [
        make_punch(3, at(DAY, "13:00")),
        make_punch(1, at(DAY, "08:00")),
        make_punch(4, at(DAY, "17:00")),
        make_punch(2, at(DAY, "12:00")),
    ]

    result = pair_punches(punches)

    assert [(i.start.hour, i.end.hour) for i in result.intervals] == [(8, 12), (13, 17)]
    assert result.worked_minutes == 480
    assert result.is_inconsistent is False


def test_trailing_punch_marks_day_inconsistent_and_adds_nothing():
    result = pair_punches([make_punch(1, at(DAY, "08:00")), make_punch(2, at(DAY, "12:00")), make_punch(3, at(DAY, "13:00"))])

    assert result.worked_minutes == 240
    assert result.is_inconsistent is True
    assert result.unpaired.punch_id == 3


def test_soft_deleted_punches_are_ignored():
    punches = [
        make_punch(1, at(DAY, "08:00")),
        make_punch(2, at(DAY, "09:00"), is_deleted=True),
        make_punch(3, at(DAY, "12:00")),
    ]

    result = pair_punches(punches)

    assert result.worked_minutes == 240
    assert result.is_inconsistent is False


def test_no_punches():
    result = pair_punches([])
    assert result.intervals == []
    assert result.worked_minutes == 0
    assert result.is_inconsistent is False
