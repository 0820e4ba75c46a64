from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Optional

from ..adjustments.repository import AdjustmentRepository
from ..common.datetime_utils import month_bounds
from ..company.holidays import merge_holidays, national_holidays
from ..company.model import CompanyPolicy, Holiday
from ..company.repository import CompanyRepository
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..punches.repository import PunchRepository
from .absenteeism import AbsenteeismRow, build_absenteeism_report
from .model import MonthlyMirror
from .monthly import compute_monthly_mirror


class TimesheetService:
    """Loads one employee-month from storage and runs the mirror pipeline."""

    def __init__(
        self,
        employees: EmployeeRepository,
        punches: PunchRepository,
        adjustments: AdjustmentRepository,
        company: CompanyRepository,
        *,
        include_national_holidays: bool = True,
        holiday_state: Optional[str] = None,
    ):
        self._employees = employees
        self._punches = punches
        self._adjustments = adjustments
        self._company = company
        self._include_national = bool(include_national_holidays)
        self._holiday_state = holiday_state

    def _policy(self) -> CompanyPolicy:
        return self._company.get_policy() or CompanyPolicy()

    def _holidays(self, month_key: str) -> list[Holiday]:
        start, end = month_bounds(month_key)
        company_days = list(self._company.list_holidays(start_date=start, end_date=end))
        if not self._include_national:
            return company_days
        national = [h for h in national_holidays(start.year, state=self._holiday_state) if start <= h.day <= end]
        return merge_holidays(company_days, national)

    def _mirror_for(self, employee: Employee, month_key: str, policy: CompanyPolicy, holidays: list[Holiday]) -> MonthlyMirror:
        start, end = month_bounds(month_key)
        punches = self._punches.list_for_period(
            employee_id=employee.employee_id,
            start=datetime.combine(start, time()),
            end=datetime.combine(end + timedelta(days=1), time()),
        )
        adjustments = self._adjustments.list_approved_for_period(
            employee_id=employee.employee_id,
            start_date=start,
            end_date=end,
        )
        return compute_monthly_mirror(employee, policy, holidays, punches, adjustments, month_key)

    def get_mirror(self, *, employee_id: int, month_key: str) -> MonthlyMirror:
        month_bounds(month_key)
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Funcionário não encontrado")
        return self._mirror_for(employee, month_key, self._policy(), self._holidays(month_key))

    def absenteeism_report(self, *, month_key: str) -> list[AbsenteeismRow]:
        policy = self._policy()
        holidays = self._holidays(month_key)
        mirrors = [self._mirror_for(e, month_key, policy, holidays) for e in self._employees.list_active()]
        return build_absenteeism_report(mirrors)
