from datetime import datetime

import pytest

from src.ponto_engine.ponto_engine.afd.matcher import find_employee, match_candidates
from src.ponto_engine.ponto_engine.afd.parser import decode_content, parse_afd_lines, parse_punch_line
from src.ponto_engine.ponto_engine.afd.service import parse_afd_file
from src.ponto_engine.ponto_engine.core.enums import PunchSource
from src.ponto_engine.ponto_engine.core.exceptions import AfdDecodeError
from tests.fakes import make_employee


def afd_line(nsr: int, ddmmyyyy: str, hhmm: str, identifier: str, record_type: str = "3") -> str:
    return f"{nsr:09d}{record_type}{ddmmyyyy}{hhmm}{identifier:>12}"


def test_parse_punch_line_reads_fixed_width_fields():
    line = afd_line(1, "05032024", "0800", "012345678901")

    candidate = parse_punch_line(line)

    assert candidate is not None
    assert candidate.identifier == "012345678901"
    assert candidate.timestamp == datetime(2024, 3, 5, 8, 0)
    assert candidate.raw_line == line


def test_parse_punch_line_ignores_other_record_types():
    assert parse_punch_line(afd_line(1, "05032024", "0800", "012345678901", record_type="2")) is None


def test_parse_punch_line_rejects_impossible_date():
    assert parse_punch_line(afd_line(1, "32132024", "0800", "012345678901")) is None


def test_parse_afd_lines_counts_malformed_without_raising():
    content = "\n".join(
        [
            afd_line(1, "05032024", "0800", "012345678901"),
            "12345",
            afd_line(2, "05032024", "2599", "012345678901"),
            afd_line(3, "05032024", "0800", "x", record_type="5"),
            "",
        ]
    )

    result = parse_afd_lines(content)

    assert len(result.candidates) == 1
    assert result.total_lines == 4
    assert result.malformed_lines == 2


def test_decode_content_falls_back_to_latin1():
    text = decode_content("Razão Social\n".encode("latin-1"))
    assert text.startswith("Raz")
    assert "ã" in text


def test_decode_content_rejects_binary_payload():
    with pytest.raises(AfdDecodeError):
        decode_content(b"\x00\x01\x02")


def test_find_employee_matches_pis_or_cpf_by_substring():
    ana = make_employee(1, pis="123.456.789-01", cpf=None, name="Ana")
    bia = make_employee(2, pis=None, cpf="98765432100", name="Bia")

    assert find_employee("012345678901", [ana, bia]) is ana
    assert find_employee("098765432100", [ana, bia]) is bia
    assert find_employee("000000000000", [ana, bia]) is None


def test_find_employee_skips_inactive():
    inactive = make_employee(1, pis="12345678901", is_active=False)
    assert find_employee("012345678901", [inactive]) is None


def test_match_candidates_builds_imported_punch_inserts():
    content = "\n".join(
        [
            afd_line(1, "05032024", "0800", "012345678901"),
            afd_line(2, "05032024", "0801", "055555555555"),
        ]
    )
    employee = make_employee(7, pis="12345678901")

    result = match_candidates(parse_afd_lines(content).candidates, [employee])

    assert result.matched_count == 1
    assert result.unmatched_count == 1
    insert = result.punch_inserts[0]
    assert insert.employee_id == 7
    assert insert.source == PunchSource.IMPORTED
    assert insert.timestamp == datetime(2024, 3, 5, 8, 0)


def test_parse_afd_file_valid_line_and_short_line():
    content = (afd_line(1, "05032024", "0800", "012345678901") + "\n12345\n").encode("utf-8")

    result = parse_afd_file(content, [make_employee(1, pis="12345678901")])

    assert result.matched_count == 1
    assert len(result.punch_inserts) == 1
    assert result.malformed_lines == 1
    assert result.total_records == 1
    assert result.unprocessed_count == 0


def test_form_feed_does_not_split_a_record():
    line = afd_line(1, "05032024", "0800", "012345678901")

    result = parse_afd_lines(f"{line}\x0cobs\n{afd_line(2, '05032024', '1200', '012345678901')}")

    assert result.total_lines == 2
    assert result.malformed_lines == 0
    assert [c.timestamp.hour for c in result.candidates] == [8, 12]


def test_control_character_inside_fields_is_one_malformed_record():
    line = afd_line(1, "05032024", "0800", "012345678901")
    broken = line[:12] + "\x1e" + line[13:]

    result = parse_afd_lines(broken + "\u0085\n" + line)

    assert result.total_lines == 2
    assert result.malformed_lines == 1
    assert len(result.candidates) == 1


def test_crlf_line_endings_are_stripped():
    first = afd_line(1, "05032024", "0800", "012345678901")
    second = afd_line(2, "05032024", "1200", "012345678901")

    result = parse_afd_lines(f"{first}\r\n{second}\r\n")

    assert result.total_lines == 2
    assert result.malformed_lines == 0
    assert [c.raw_line for c in result.candidates] == [first, second]
