from datetime import date

from src.ponto_engine.ponto_engine.company.holidays import index_by_day, merge_holidays, national_holidays
from src.ponto_engine.ponto_engine.company.model import Holiday


def test_national_holidays_include_fixed_dates():
    days = {h.day for h in national_holidays(2024)}

    assert date(2024, 1, 1) in days
    assert date(2024, 4, 21) in days
    assert date(2024, 12, 25) in days


def test_merge_prefers_first_group():
    company = [Holiday(day=date(2024, 12, 25), description="Natal (empresa)")]
    national = [Holiday(day=date(2024, 12, 25), description="Natal"), Holiday(day=date(2024, 1, 1), description="Ano novo")]

    merged = merge_holidays(company, national)

    assert [h.day for h in merged] == [date(2024, 1, 1), date(2024, 12, 25)]
    assert index_by_day(merged)[date(2024, 12, 25)].description == "Natal (empresa)"
