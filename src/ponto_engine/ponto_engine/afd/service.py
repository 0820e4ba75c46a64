from __future__ import annotations

import logging
from dataclasses import replace
from datetime import timedelta
from typing import Sequence, Union

from ..common.datetime_utils import now_local

from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..punches.model import PunchInsert
from ..punches.repository import PunchRepository
from .matcher import match_candidates
from .model import AfdFile, AfdImportResult
from .parser import parse_afd_lines
from .repository import AfdFileRepository

logger = logging.getLogger(__name__)


def parse_afd_file(content: Union[bytes, str], active_employees: Sequence[Employee]) -> AfdImportResult:
    """Decode an AFD export and resolve its punches to employees.

    Malformed lines and unmatched identifiers are only counted. Re-running the
    same file yields the same inserts again: duplicates are not detected here.
    """
    parsed = parse_afd_lines(content)
    matched = match_candidates(parsed.candidates, active_employees)
    total_records = len(parsed.candidates)
    return AfdImportResult(
        punch_inserts=matched.punch_inserts,
        matched_count=matched.matched_count,
        total_records=total_records,
        unprocessed_count=total_records - matched.matched_count,
        malformed_lines=parsed.malformed_lines,
    )


class AfdImportService:
    def __init__(self, employees: EmployeeRepository, punches: PunchRepository, files: AfdFileRepository):
        self._employees = employees
        self._punches = punches
        self._files = files

    def import_file(
        self,
        content: Union[bytes, str],
        *,
        filename: str = "",
        skip_duplicates: bool = False,
    ) -> AfdImportResult:
        result = parse_afd_file(content, list(self._employees.list_active()))

        inserts = result.punch_inserts
        if skip_duplicates and inserts:
            inserts = self._drop_already_stored(inserts)

        afd_file = AfdFile(
            afd_file_id=None,
            filename=filename or "upload.txt",
            uploaded_at=now_local(),
            record_count=result.total_records,
            matched_count=result.matched_count,
            inserted_count=len(inserts),
            malformed_lines=result.malformed_lines,
            processed=True,
        )
        afd_file_id = self._files.record_import(afd_file, inserts)
        logger.info(
            "AFD %s (#%d) imported: %d/%d records matched, %d inserted, %d malformed lines",
            afd_file.filename,
            afd_file_id,
            result.matched_count,
            result.total_records,
            len(inserts),
            result.malformed_lines,
        )
        return AfdImportResult(
            punch_inserts=[replace(p, afd_file_id=afd_file_id) for p in inserts],
            matched_count=result.matched_count,
            total_records=result.total_records,
            unprocessed_count=result.unprocessed_count,
            malformed_lines=result.malformed_lines,
            afd_file_id=afd_file_id,
        )

    def list_files(self, *, limit: int = 200) -> list[AfdFile]:
        return list(self._files.list_recent(limit=limit))

    def _drop_already_stored(self, inserts: Sequence[PunchInsert]) -> list[PunchInsert]:
        start = min(p.timestamp for p in inserts)
        end = max(p.timestamp for p in inserts) + timedelta(minutes=1)

        seen: set[tuple] = set()
        for employee_id in {p.employee_id for p in inserts}:
            stored = self._punches.list_for_period(employee_id=employee_id, start=start, end=end, include_deleted=True)
            seen.update((p.employee_id, p.timestamp, p.raw_line) for p in stored)

        kept = []
        for insert in inserts:
            key = insert.dedup_key()
            if key in seen:
                continue
            seen.add(key)
            kept.append(insert)
        return kept
