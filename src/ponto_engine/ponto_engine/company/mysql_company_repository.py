from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import OvertimeRegime
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import CompanyPolicy, Holiday
from .repository import CompanyRepository


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_policy(self) -> Optional[CompanyPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT razao_social, cnpj, endereco, tolerance_minutes, night_start, night_end,
                       overtime_regime, bank_expiration_months, weekly_rest_enabled
                FROM company_settings
                ORDER BY company_id ASC
                LIMIT 1
                """
            )
            r = fetchone(cur)
            if not r:
                return None
            return CompanyPolicy(
                razao_social=r["razao_social"],
                cnpj=r["cnpj"],
                endereco=r["endereco"],
                tolerance_minutes=int(r["tolerance_minutes"]),
                night_start=normalize_mysql_time(r["night_start"]),
                night_end=normalize_mysql_time(r["night_end"]),
                overtime_regime=OvertimeRegime(r["overtime_regime"]),
                bank_expiration_months=int(r["bank_expiration_months"]),
                weekly_rest_enabled=bool(r["weekly_rest_enabled"]),
            )

    def list_holidays(self, *, start_date: date, end_date: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, holiday_date, description
                FROM holidays
                WHERE holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date ASC
                """,
                (start_date, end_date),
            )
            return [
                Holiday(holiday_id=int(r["holiday_id"]), day=r["holiday_date"], description=r["description"])
                for r in fetchall(cur)
            ]
