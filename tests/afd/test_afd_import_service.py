from datetime import datetime

from src.ponto_engine.ponto_engine.afd.service import AfdImportService
from src.ponto_engine.ponto_engine.afd import service as afd_service_module
from tests.fakes import InMemoryAfdFiles, InMemoryEmployees, InMemoryPunches, make_employee


def afd_content(*rows):
    return "\n".join(f"{i:09d}3{d}{t}{ident:>12}" for i, (d, t, ident) in enumerate(rows, start=1))


def build(*employees):
    punches = InMemoryPunches()
    files = InMemoryAfdFiles(punches)
    service = AfdImportService(InMemoryEmployees(employees or [make_employee(1, pis="12345678901")]), punches, files)
    return service, punches, files


def test_import_file_inserts_in_one_batch():
    service, punches, _ = build()

    result = service.import_file(
        afd_content(
            ("05032024", "0800", "012345678901"),
            ("05032024", "1200", "012345678901"),
            ("05032024", "1300", "099999999999"),
        ),
        filename="rep.txt",
    )

    assert result.matched_count == 2
    assert result.total_records == 3
    assert result.unprocessed_count == 1
    assert punches.insert_calls == 1
    assert [p.timestamp for p in punches.all()] == [datetime(2024, 3, 5, 8, 0), datetime(2024, 3, 5, 12, 0)]


def test_reimporting_same_file_duplicates_by_default():
    service, punches, _ = build()
    content = afd_content(("05032024", "0800", "012345678901"))

    service.import_file(content)
    service.import_file(content)

    assert len(punches.all()) == 2


def test_reimport_with_skip_duplicates_inserts_nothing_new():
    service, punches, _ = build()
    content = afd_content(("05032024", "0800", "012345678901"), ("05032024", "1200", "012345678901"))

    service.import_file(content)
    second = service.import_file(content, skip_duplicates=True)

    assert second.matched_count == 2
    assert second.punch_inserts == []
    assert len(punches.all()) == 2


def test_import_records_file_history_and_links_punches():
    service, punches, files = build()

    result = service.import_file(
        afd_content(("05032024", "0800", "012345678901"), ("05032024", "1300", "099999999999")) + "\nlixo",
        filename="rep-marco.txt",
    )

    assert result.afd_file_id == 1
    assert len(files.files) == 1
    stored = files.files[0]
    assert stored.filename == "rep-marco.txt"
    assert stored.record_count == 2
    assert stored.matched_count == 1
    assert stored.inserted_count == 1
    assert stored.malformed_lines == 1
    assert stored.processed is True
    assert [p.afd_file_id for p in punches.all()] == [1]
    assert [p.afd_file_id for p in result.punch_inserts] == [1]


def test_file_with_no_matches_is_still_recorded():
    service, punches, files = build()

    result = service.import_file(afd_content(("05032024", "0800", "099999999999")))

    assert result.afd_file_id == 1
    assert files.files[0].inserted_count == 0
    assert files.files[0].filename == "upload.txt"
    assert punches.all() == []


def test_list_files_newest_first(monkeypatch):
    service, _, _ = build()
    moments = iter([datetime(2024, 3, 1, 9, 0), datetime(2024, 3, 2, 9, 0)])
    monkeypatch.setattr(afd_service_module, "now_local", lambda: next(moments))

    service.import_file(afd_content(("05032024", "0800", "012345678901")), filename="primeiro.txt")
    service.import_file(afd_content(("06032024", "0800", "012345678901")), filename="segundo.txt")

    assert [f.filename for f in service.list_files()] == ["segundo.txt", "primeiro.txt"]
    assert [f.filename for f in service.list_files(limit=1)] == ["segundo.txt"]
