from datetime import date, time

import pytest

from src.ponto_engine.ponto_engine.common.datetime_utils import month_bounds
from src.ponto_engine.ponto_engine.common.formatting import format_balance, format_minutes
from src.ponto_engine.ponto_engine.core.exceptions import ValidationError
from src.ponto_engine.ponto_engine.employees.model import WorkProfile


def test_format_minutes_and_balance():
    assert format_minutes(475) == "07:55"
    assert format_minutes(6000) == "100:00"
    assert format_balance(0) == "+00:00"
    assert format_balance(-240) == "-04:00"
    assert format_balance(30) == "+00:30"


def test_month_bounds_leap_february():
    assert month_bounds("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    with pytest.raises(ValidationError):
        month_bounds("")


def test_work_profile_expected_minutes():
    assert WorkProfile.parse("08:00-12:00,13:00-17:00").expected_minutes() == 480
    assert WorkProfile.parse("22:00-05:00").expected_minutes() == 420
    assert WorkProfile.parse("").expected_minutes() == 0
    assert WorkProfile.parse(" 08:00 - 12:00 ").intervals == ((time(8, 0), time(12, 0)),)


def test_work_profile_rejects_garbage():
    with pytest.raises(ValidationError):
        WorkProfile.parse("8h-12h")
    with pytest.raises(ValidationError):
        WorkProfile.parse("08:00")
