from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..punches.model import PunchInsert
from ..punches.mysql_punch_repository import insert_punch_rows
from .model import AfdFile
from .repository import AfdFileRepository


def _to_afd_file(r: dict) -> AfdFile:
    return AfdFile(
        afd_file_id=int(r["afd_file_id"]),
        filename=r["filename"],
        uploaded_at=r["uploaded_at"],
        record_count=int(r["record_count"]),
        matched_count=int(r["matched_count"]),
        inserted_count=int(r["inserted_count"]),
        malformed_lines=int(r["malformed_lines"]),
        processed=bool(r["processed"]),
    )


class MySQLAfdFileRepository(AfdFileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record_import(self, afd_file: AfdFile, punches: Sequence[PunchInsert]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO afd_files(filename, uploaded_at, record_count, matched_count, inserted_count, malformed_lines, processed)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    afd_file.filename,
                    afd_file.uploaded_at,
                    afd_file.record_count,
                    afd_file.matched_count,
                    afd_file.inserted_count,
                    afd_file.malformed_lines,
                    int(afd_file.processed),
                ),
            )
            afd_file_id = int(cur.lastrowid)
            insert_punch_rows(cur, [replace(p, afd_file_id=afd_file_id) for p in punches])
            return afd_file_id

    def list_recent(self, *, limit: int = 200) -> Sequence[AfdFile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT afd_file_id, filename, uploaded_at, record_count, matched_count,
                       inserted_count, malformed_lines, processed
                FROM afd_files
                ORDER BY uploaded_at DESC, afd_file_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_afd_file(r) for r in fetchall(cur)]
