from datetime import date, datetime

import pytest

from src.ponto_engine.ponto_engine.core.enums import AuditAction, PunchSource
from src.ponto_engine.ponto_engine.core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from src.ponto_engine.ponto_engine.punches.service import PunchService, edit_punch, soft_delete_punch
from src.ponto_engine.ponto_engine.timesheet.service import TimesheetService
from tests.fakes import (
    InMemoryAdjustments,
    InMemoryCompany,
    InMemoryEmployees,
    InMemoryPunches,
    at,
    make_employee,
    make_punch,
)

TUESDAY = date(2024, 3, 5)


def test_edit_preserves_first_original_timestamp():
    punch = make_punch(1, at(TUESDAY, "08:17"))

    first = edit_punch(punch, at(TUESDAY, "08:00"), "relógio atrasado", actor_id=50).updated_punch
    second = edit_punch(first, at(TUESDAY, "07:58"), "ajuste fino", actor_id=50).updated_punch

    assert first.original_timestamp == at(TUESDAY, "08:17")
    assert second.original_timestamp == at(TUESDAY, "08:17")
    assert second.timestamp == at(TUESDAY, "07:58")
    assert second.source == PunchSource.EDITED


def test_edit_requires_justification():
    with pytest.raises(ValidationError):
        edit_punch(make_punch(1, at(TUESDAY, "08:00")), at(TUESDAY, "08:05"), "  ")


def test_edit_produces_audit_entry():
    change = edit_punch(make_punch(1, at(TUESDAY, "08:17")), at(TUESDAY, "08:00"), "ajuste", actor_id=50)

    entry = change.audit_entry
    assert entry.action == AuditAction.PUNCH_EDITED
    assert entry.actor_id == 50
    assert entry.target_employee_id == 1
    assert "08:17" in entry.before
    assert "08:00" in entry.after


def test_soft_delete_requires_justification_and_only_once():
    punch = make_punch(1, at(TUESDAY, "08:00"))
    with pytest.raises(ValidationError):
        soft_delete_punch(punch, "")

    deleted = soft_delete_punch(punch, "duplicada").updated_punch
    assert deleted.is_deleted is True
    with pytest.raises(ValidationError):
        soft_delete_punch(deleted, "de novo")
    with pytest.raises(ValidationError):
        edit_punch(deleted, at(TUESDAY, "09:00"), "x")


def build(punches):
    employees = InMemoryEmployees([make_employee()])
    repo = InMemoryPunches(punches)
    timesheet = TimesheetService(
        employees, repo, InMemoryAdjustments(repo), InMemoryCompany(), include_national_holidays=False
    )
    return PunchService(repo, employees), timesheet, repo


def tuesday_record(timesheet):
    return next(r for r in timesheet.get_mirror(employee_id=1, month_key="2024-03").records if r.date == TUESDAY)


def test_soft_deleted_punch_stays_stored_but_leaves_pairing():
    service, timesheet, repo = build(
        [
            make_punch(1, at(TUESDAY, "08:00")),
            make_punch(2, at(TUESDAY, "08:01")),
            make_punch(3, at(TUESDAY, "12:00")),
        ]
    )
    assert tuesday_record(timesheet).is_inconsistent is True

    entry = service.soft_delete(punch_id=2, justification="batida duplicada", actor_id=50)

    assert entry.action == AuditAction.PUNCH_DELETED
    assert repo.get_by_id(2).is_deleted is True
    record = tuesday_record(timesheet)
    assert record.punches == ["08:00", "12:00"]
    assert record.worked_minutes == 240
    assert repo.audit.entries[-1].justification == "batida duplicada"


def test_service_edit_persists_and_audits():
    service, timesheet, repo = build([make_punch(1, at(TUESDAY, "08:00")), make_punch(2, at(TUESDAY, "16:40"))])

    change = service.edit(punch_id=2, new_timestamp=at(TUESDAY, "17:00"), justification="saída correta", actor_id=50)

    assert repo.get_by_id(2).timestamp == at(TUESDAY, "17:00")
    assert change.updated_punch.original_timestamp == at(TUESDAY, "16:40")
    assert tuesday_record(timesheet).raw_worked_minutes == 540
    assert len(repo.audit.entries) == 1


def test_service_unknown_punch():
    service, _, _ = build([])
    with pytest.raises(NotFoundError):
        service.edit(punch_id=9, new_timestamp=at(TUESDAY, "08:00"), justification="x", actor_id=50)


def test_create_manual_requires_justification_and_audits():
    service, _, repo = build([])
    with pytest.raises(ValidationError):
        service.create_manual(employee_id=1, timestamp=at(TUESDAY, "08:00"), justification="", actor_id=50)

    service.create_manual(employee_id=1, timestamp=at(TUESDAY, "08:00"), justification="esqueceu", actor_id=50)

    (stored,) = repo.all()
    assert stored.source == PunchSource.MANUAL
    assert repo.audit.entries[-1].action == AuditAction.PUNCH_CREATED


def test_clock_in_truncates_seconds_and_keeps_coordinates():
    service, _, repo = build([])

    insert = service.clock_in(employee_id=1, now=datetime(2024, 3, 5, 8, 1, 42), latitude=-23.55, longitude=-46.63)

    assert insert.timestamp == datetime(2024, 3, 5, 8, 1)
    (stored,) = repo.all()
    assert stored.source == PunchSource.WEB
    assert (stored.latitude, stored.longitude) == (-23.55, -46.63)


def test_clock_in_unknown_employee():
    service, _, _ = build([])
    with pytest.raises(NotFoundError):
        service.clock_in(employee_id=77)


def test_stale_edit_cannot_restore_a_deleted_punch():
    service, timesheet, repo = build([make_punch(1, at(TUESDAY, "08:00")), make_punch(2, at(TUESDAY, "12:00"))])
    stale = repo.get_by_id(1)

    service.soft_delete(punch_id=1, justification="batida indevida", actor_id=50)
    change = edit_punch(stale, at(TUESDAY, "08:05"), "ajuste", actor_id=60)

    assert repo.save_change(change.updated_punch, audit=change.audit_entry) is False
    assert repo.get_by_id(1).is_deleted is True
    assert [e.action for e in repo.audit.entries] == [AuditAction.PUNCH_DELETED]
    assert tuesday_record(timesheet).punches == ["12:00"]


def test_service_edit_of_deleted_punch_is_rejected():
    service, _, repo = build([make_punch(1, at(TUESDAY, "08:00"))])
    service.soft_delete(punch_id=1, justification="batida indevida", actor_id=50)

    with pytest.raises(ValidationError):
        service.edit(punch_id=1, new_timestamp=at(TUESDAY, "08:05"), justification="ajuste", actor_id=50)
    assert repo.get_by_id(1).is_deleted is True


def test_service_edit_racing_a_delete_raises(monkeypatch):
    service, _, repo = build([make_punch(1, at(TUESDAY, "08:00"))])
    stale = repo.get_by_id(1)
    service.soft_delete(punch_id=1, justification="batida indevida", actor_id=50)
    monkeypatch.setattr(repo, "get_by_id", lambda punch_id: stale)

    with pytest.raises(InvalidTransitionError):
        service.edit(punch_id=1, new_timestamp=at(TUESDAY, "08:05"), justification="ajuste", actor_id=60)
    assert len(repo.audit.entries) == 1
