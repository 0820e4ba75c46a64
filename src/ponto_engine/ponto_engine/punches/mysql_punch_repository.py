from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..audit.model import AuditEntry
from ..audit.mysql_audit_repository import insert_audit_row
from ..core.enums import PunchSource
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Punch, PunchInsert
from .repository import PunchRepository

_COLUMNS = """
    punch_id, employee_id, punched_at, source, raw_line, justification,
    adjustment_id, is_deleted, original_punched_at, latitude, longitude, afd_file_id
"""


def _to_punch(r: dict) -> Punch:
    return Punch(
        punch_id=int(r["punch_id"]),
        employee_id=int(r["employee_id"]),
        timestamp=r["punched_at"],
        source=PunchSource(r["source"]),
        raw_line=r.get("raw_line"),
        justification=r.get("justification"),
        adjustment_id=r.get("adjustment_id"),
        is_deleted=bool(r.get("is_deleted")),
        original_timestamp=r.get("original_punched_at"),
        latitude=float(r["latitude"]) if r.get("latitude") is not None else None,
        longitude=float(r["longitude"]) if r.get("longitude") is not None else None,
        afd_file_id=r.get("afd_file_id"),
    )


def insert_punch_rows(cur, punches: Sequence[PunchInsert]) -> int:
    """Batch INSERT on an open cursor; part of the caller's transaction."""
    if not punches:
        return 0
    cur.executemany(
        """
        INSERT INTO punches(employee_id, punched_at, source, raw_line, justification, adjustment_id, latitude, longitude, afd_file_id)
        VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
        """,
        [
            (
                p.employee_id,
                p.timestamp,
                p.source.value,
                p.raw_line,
                p.justification,
                p.adjustment_id,
                p.latitude,
                p.longitude,
                p.afd_file_id,
            )
            for p in punches
        ],
    )
    return len(punches)


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, punch_id: int) -> Optional[Punch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM punches WHERE punch_id=%s", (int(punch_id),))
            r = fetchone(cur)
            return _to_punch(r) if r else None

    def list_for_period(
        self,
        *,
        employee_id: int,
        start: datetime,
        end: datetime,
        include_deleted: bool = False,
    ) -> Sequence[Punch]:
        deleted_clause = "" if include_deleted else "AND is_deleted=0"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punches
                WHERE employee_id=%s AND punched_at >= %s AND punched_at < %s {deleted_clause}
                ORDER BY punched_at ASC, punch_id ASC
                """,
                (int(employee_id), start, end),
            )
            return [_to_punch(r) for r in fetchall(cur)]

    def insert_many(self, punches: Sequence[PunchInsert], *, audit: Sequence[AuditEntry] = ()) -> int:
        if not punches and not audit:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            count = insert_punch_rows(cur, punches)
            for entry in audit:
                insert_audit_row(cur, entry)
            return count

    def save_change(self, punch: Punch, *, audit: AuditEntry) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # A deleted row is final: a stale edit must not bring it back.
            cur.execute(
                """
                UPDATE punches
                SET punched_at=%s, source=%s, justification=%s, is_deleted=%s, original_punched_at=%s
                WHERE punch_id=%s AND is_deleted=0
                """,
                (
                    punch.timestamp,
                    punch.source.value,
                    punch.justification,
                    int(punch.is_deleted),
                    punch.original_timestamp,
                    int(punch.punch_id),
                ),
            )
            if cur.rowcount <= 0:
                return False
            insert_audit_row(cur, audit)
            return True
