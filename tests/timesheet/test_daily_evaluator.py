from datetime import date, datetime

from src.ponto_engine.ponto_engine.adjustments.model import Adjustment
from src.ponto_engine.ponto_engine.company.model import CompanyPolicy
from src.ponto_engine.ponto_engine.core.enums import AdjustmentStatus, AdjustmentType
from src.ponto_engine.ponto_engine.employees.model import RoleRules
from src.ponto_engine.ponto_engine.timesheet.daily import evaluate_day
from tests.fakes import at, holiday, make_employee, make_punch

TUESDAY = date(2024, 3, 5)
SATURDAY = date(2024, 3, 9)
POLICY = CompanyPolicy(tolerance_minutes=10)


def punches_at(day, *times):
    return [make_punch(i, at(day, t)) for i, t in enumerate(times, start=1)]


def certificate(day, *, status=AdjustmentStatus.APPROVED, end_date=None):
    return Adjustment(
        adjustment_id=1,
        employee_id=1,
        type=AdjustmentType.MEDICAL_CERTIFICATE,
        justification="Atestado médico",
        status=status,
        created_at=datetime(2024, 3, 1, 9, 0),
        timestamp=datetime.combine(day, datetime.min.time()),
        end_date=end_date,
    )


def test_tolerance_absorbs_small_difference():
    record = evaluate_day(
        TUESDAY,
        punches_at(TUESDAY, "08:00", "12:00", "13:05", "17:00"),
        employee=make_employee(),
        policy=POLICY,
        holidays={},
    )

    assert record.raw_worked_minutes == 475
    assert record.worked_minutes == 480
    assert record.total_hours == "08:00"
    assert record.balance == "+00:00"
    assert record.is_inconsistent is False


def test_difference_beyond_tolerance_is_kept():
    record = evaluate_day(
        TUESDAY,
        punches_at(TUESDAY, "08:00", "12:00", "13:00", "17:30"),
        employee=make_employee(),
        policy=POLICY,
        holidays={},
    )

    assert record.worked_minutes == 510
    assert record.balance == "+00:30"


def test_missing_afternoon_pair():
    record = evaluate_day(
        TUESDAY,
        punches_at(TUESDAY, "08:00", "12:00"),
        employee=make_employee(),
        policy=POLICY,
        holidays={},
    )

    assert record.worked_minutes == 240
    assert record.balance == "-04:00"


def test_unpaired_trailing_punch_is_flagged():
    record = evaluate_day(
        TUESDAY,
        punches_at(TUESDAY, "08:00", "12:00", "13:00"),
        employee=make_employee(),
        policy=POLICY,
        holidays={},
    )

    assert record.is_inconsistent is True
    assert record.worked_minutes == 240
    assert record.punches == ["08:00", "12:00", "13:00"]


def test_no_punches_on_working_day_is_full_shortfall():
    record = evaluate_day(TUESDAY, [], employee=make_employee(), policy=POLICY, holidays={})

    assert record.balance_minutes == -480
    assert record.balance == "-08:00"


def test_weekend_without_punches_is_neutral():
    record = evaluate_day(SATURDAY, [], employee=make_employee(), policy=POLICY, holidays={})

    assert record.is_day_off is True
    assert record.expected_minutes == 0
    assert record.balance == "+00:00"


def test_work_on_weekend_is_pure_credit():
    record = evaluate_day(
        SATURDAY,
        punches_at(SATURDAY, "08:00", "12:05"),
        employee=make_employee(),
        policy=POLICY,
        holidays={},
    )

    assert record.worked_minutes == 245
    assert record.balance == "+04:05"


def test_holiday_is_day_off_with_description():
    record = evaluate_day(
        TUESDAY,
        [],
        employee=make_employee(),
        policy=POLICY,
        holidays={TUESDAY: holiday(TUESDAY, "Aniversário da cidade")},
    )

    assert record.is_day_off is True
    assert record.holiday == "Aniversário da cidade"
    assert record.balance_minutes == 0


def test_approved_certificate_excuses_the_day():
    record = evaluate_day(
        TUESDAY,
        [],
        employee=make_employee(),
        policy=POLICY,
        holidays={},
        adjustments=[certificate(TUESDAY)],
    )

    assert record.is_excused is True
    assert record.excuse_reason == "Atestado médico"
    assert record.worked_minutes == 480
    assert record.balance == "+00:00"


def test_multi_day_certificate_covers_range():
    adj = certificate(date(2024, 3, 4), end_date=date(2024, 3, 6))
    record = evaluate_day(TUESDAY, [], employee=make_employee(), policy=POLICY, holidays={}, adjustments=[adj])
    assert record.is_excused is True


def test_pending_certificate_does_not_excuse():
    record = evaluate_day(
        TUESDAY,
        [],
        employee=make_employee(),
        policy=POLICY,
        holidays={},
        adjustments=[certificate(TUESDAY, status=AdjustmentStatus.PENDING)],
    )

    assert record.is_excused is False
    assert record.balance_minutes == -480


def test_night_minutes_follow_role_rules():
    employee = make_employee(schedule="22:00-05:00", role_rules=RoleRules(apply_night_extension=True))
    punches = [make_punch(1, at(TUESDAY, "22:00")), make_punch(2, at(TUESDAY, "23:30"))]

    record = evaluate_day(TUESDAY, punches, employee=employee, policy=POLICY, holidays={})

    assert record.expected_minutes == 420
    assert record.night_bonus_minutes == 90
    assert record.night_bank_minutes > 90
