from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .adjustments.mysql_adjustment_repository import MySQLAdjustmentRepository
from .adjustments.service import AdjustmentService
from .afd.mysql_afd_file_repository import MySQLAfdFileRepository
from .afd.service import AfdImportService
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.service import AuditService
from .company.mysql_company_repository import MySQLCompanyRepository
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.service import PunchService
from .timesheet.service import TimesheetService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    company_repo: MySQLCompanyRepository
    punches_repo: MySQLPunchRepository
    adjustments_repo: MySQLAdjustmentRepository
    audit_repo: MySQLAuditRepository
    afd_files_repo: MySQLAfdFileRepository

    afd_service: AfdImportService
    punch_service: PunchService
    adjustment_service: AdjustmentService
    timesheet_service: TimesheetService
    audit_service: AuditService


def build_container(
    *,
    db_config: dict,
    include_national_holidays: bool = True,
    holiday_state: Optional[str] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    company_repo = MySQLCompanyRepository(conn)
    punches_repo = MySQLPunchRepository(conn)
    adjustments_repo = MySQLAdjustmentRepository(conn)
    audit_repo = MySQLAuditRepository(conn)
    afd_files_repo = MySQLAfdFileRepository(conn)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        company_repo=company_repo,
        punches_repo=punches_repo,
        adjustments_repo=adjustments_repo,
        audit_repo=audit_repo,
        afd_files_repo=afd_files_repo,
        afd_service=AfdImportService(employees_repo, punches_repo, afd_files_repo),
        punch_service=PunchService(punches_repo, employees_repo),
        adjustment_service=AdjustmentService(adjustments_repo, employees_repo),
        timesheet_service=TimesheetService(
            employees_repo,
            punches_repo,
            adjustments_repo,
            company_repo,
            include_national_holidays=include_national_holidays,
            holiday_state=holiday_state,
        ),
        audit_service=AuditService(audit_repo),
    )
