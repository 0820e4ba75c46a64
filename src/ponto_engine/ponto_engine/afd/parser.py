"""AFD (Portaria 671) fixed-width reader.

Layout of a type-3 (punch) record, 0-indexed:

    [0:9)   NSR, ignored
    [9]     record type
    [10:18) date DDMMYYYY
    [18:22) time HHMM
    [22:34) PIS/CPF
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from ..core.constants import AFD_MIN_LINE_LENGTH, AFD_PUNCH_RECORD_TYPE
from ..core.exceptions import AfdDecodeError
from .model import CandidatePunch, ParseResult


def decode_content(content: Union[bytes, str]) -> str:
    """Decode an uploaded file; binary (non-text) content is rejected."""
    if isinstance(content, (bytes, bytearray)):
        try:
            text = bytes(content).decode("utf-8")
        except UnicodeDecodeError:
            # REP devices commonly export ISO-8859-1.
            text = bytes(content).decode("latin-1")
    elif isinstance(content, str):
        text = content
    else:
        raise AfdDecodeError("Arquivo AFD ilegível")

    if "\x00" in text:
        raise AfdDecodeError("Arquivo AFD ilegível (conteúdo binário)")
    return text


def parse_punch_line(line: str) -> Optional[CandidatePunch]:
    """Decode one line; returns None for non-punch or malformed records."""
    if len(line) < AFD_MIN_LINE_LENGTH or line[9] != AFD_PUNCH_RECORD_TYPE:
        return None

    date_str = line[10:18]
    time_str = line[18:22]
    identifier = line[22:34].strip()
    if not identifier:
        return None
    try:
        timestamp = datetime.strptime(date_str + time_str, "%d%m%Y%H%M")
    except ValueError:
        return None
    return CandidatePunch(identifier=identifier, timestamp=timestamp, raw_line=line.strip())


def parse_afd_lines(content: Union[bytes, str]) -> ParseResult:
    text = decode_content(content)

    candidates: list[CandidatePunch] = []
    total = 0
    malformed = 0
    # Only LF (with an optional CR) ends a record; other control characters stay in the line.
    for line in (raw.rstrip("\r") for raw in text.split("\n")):
        if not line.strip():
            continue
        total += 1
        if len(line) < AFD_MIN_LINE_LENGTH:
            malformed += 1
            continue
        if line[9] != AFD_PUNCH_RECORD_TYPE:
            continue

        candidate = parse_punch_line(line)
        if candidate is None:
            malformed += 1
            continue
        candidates.append(candidate)

    return ParseResult(candidates=candidates, total_lines=total, malformed_lines=malformed)
