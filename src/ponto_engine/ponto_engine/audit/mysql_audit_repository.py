from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AuditAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AuditEntry
from .repository import AuditRepository


def insert_audit_row(cur, entry: AuditEntry) -> int:
    """INSERT on an open cursor so callers can share their transaction."""
    cur.execute(
        """
        INSERT INTO audit_logs(action, actor_id, target_employee_id, before_state, after_state, justification, created_at)
        VALUES(%s,%s,%s,%s,%s,%s,%s)
        """,
        (
            entry.action.value,
            entry.actor_id,
            entry.target_employee_id,
            entry.before,
            entry.after,
            entry.justification,
            entry.created_at,
        ),
    )
    return int(cur.lastrowid)


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, entry: AuditEntry) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return insert_audit_row(cur, entry)

    def list_recent(self, *, employee_id: Optional[int] = None, limit: int = 200) -> Sequence[AuditEntry]:
        where = ""
        params: list[object] = []
        if employee_id is not None:
            where = "WHERE target_employee_id=%s"
            params.append(int(employee_id))
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT audit_id, action, actor_id, target_employee_id, before_state, after_state, justification, created_at
                FROM audit_logs
                {where}
                ORDER BY created_at DESC, audit_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [
                AuditEntry(
                    audit_id=int(r["audit_id"]),
                    action=AuditAction(r["action"]),
                    actor_id=r.get("actor_id"),
                    target_employee_id=int(r["target_employee_id"]),
                    before=r.get("before_state"),
                    after=r.get("after_state"),
                    justification=r.get("justification"),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]
