from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..audit.model import AuditEntry
from ..audit.mysql_audit_repository import insert_audit_row
from ..core.enums import AdjustmentStatus, AdjustmentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..punches.model import PunchInsert
from ..punches.mysql_punch_repository import insert_punch_rows
from .model import Adjustment
from .repository import AdjustmentRepository

_COLUMNS = """
    adjustment_id, employee_id, type, requested_at, end_date, justification,
    attachment_ref, status, reviewer_id, feedback, created_at, decided_at
"""


def _to_adjustment(r: dict) -> Adjustment:
    return Adjustment(
        adjustment_id=int(r["adjustment_id"]),
        employee_id=int(r["employee_id"]),
        type=AdjustmentType(r["type"]),
        justification=r["justification"],
        status=AdjustmentStatus(r["status"]),
        created_at=r["created_at"],
        timestamp=r.get("requested_at"),
        end_date=r.get("end_date"),
        attachment_ref=r.get("attachment_ref"),
        reviewer_id=r.get("reviewer_id"),
        feedback=r.get("feedback"),
        decided_at=r.get("decided_at"),
    )


class MySQLAdjustmentRepository(AdjustmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, adjustment: Adjustment) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO adjustments(employee_id, type, requested_at, end_date, justification, attachment_ref, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    adjustment.employee_id,
                    adjustment.type.value,
                    adjustment.timestamp,
                    adjustment.end_date,
                    adjustment.justification,
                    adjustment.attachment_ref,
                    AdjustmentStatus.PENDING.value,
                    adjustment.created_at,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, adjustment_id: int) -> Optional[Adjustment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM adjustments WHERE adjustment_id=%s", (int(adjustment_id),))
            r = fetchone(cur)
            return _to_adjustment(r) if r else None

    def list_requests(
        self,
        *,
        status: Optional[AdjustmentStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[Adjustment]:
        clauses = ["1=1"]
        params: list[object] = []
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM adjustments
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at DESC, adjustment_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_adjustment(r) for r in fetchall(cur)]

    def list_approved_for_period(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[Adjustment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM adjustments
                WHERE employee_id=%s AND status=%s
                  AND DATE(requested_at) <= %s
                  AND COALESCE(end_date, DATE(requested_at)) >= %s
                ORDER BY requested_at ASC
                """,
                (int(employee_id), AdjustmentStatus.APPROVED.value, end_date, start_date),
            )
            return [_to_adjustment(r) for r in fetchall(cur)]

    def apply_decision(
        self,
        adjustment: Adjustment,
        *,
        punches: Sequence[PunchInsert],
        audit: AuditEntry,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Guarded on status so a concurrent decision cannot be applied twice.
            cur.execute(
                """
                UPDATE adjustments
                SET status=%s, reviewer_id=%s, feedback=%s, decided_at=%s
                WHERE adjustment_id=%s AND status=%s
                """,
                (
                    adjustment.status.value,
                    adjustment.reviewer_id,
                    adjustment.feedback,
                    adjustment.decided_at,
                    int(adjustment.adjustment_id),
                    AdjustmentStatus.PENDING.value,
                ),
            )
            if cur.rowcount <= 0:
                return False
            insert_punch_rows(cur, punches)
            insert_audit_row(cur, audit)
            return True
