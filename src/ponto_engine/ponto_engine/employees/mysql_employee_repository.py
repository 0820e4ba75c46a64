from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Employee, RoleRules, WorkProfile
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.employee_id, e.name, e.pis, e.cpf, e.cargo, e.work_schedule, e.is_active,
           r.night_start, r.night_end,
           COALESCE(r.night_bonus_percent, 20) AS night_bonus_percent,
           COALESCE(r.apply_night_extension, 0) AS apply_night_extension
    FROM employees e
    LEFT JOIN role_rules r ON r.role_id = e.role_id
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        pis=r.get("pis"),
        cpf=r.get("cpf"),
        cargo=r.get("cargo"),
        work_profile=WorkProfile.parse(r.get("work_schedule")),
        role_rules=RoleRules(
            night_start=normalize_mysql_time(r.get("night_start")),
            night_end=normalize_mysql_time(r.get("night_end")),
            night_bonus_percent=int(r["night_bonus_percent"]),
            apply_night_extension=bool(r["apply_night_extension"]),
        ),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.is_active=1 ORDER BY e.name ASC")
            return [_to_employee(r) for r in fetchall(cur)]
