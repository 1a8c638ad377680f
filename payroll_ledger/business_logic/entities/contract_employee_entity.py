# payroll_ledger/business_logic/entities/contract_employee_entity.py
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .employee_entity import EmployeeEntity
from payroll_ledger.constants import EmployeeType, CONTRACT_TAX_RATE
from payroll_ledger.utils.date_converter import days_between


@dataclass(eq=False)
class ContractEmployeeEntity(EmployeeEntity):
    """
    Project-based worker paid a fixed contract amount.

    Until the project is marked complete, the amount owed is pro-rated by calendar
    time elapsed between the contract start and end dates, capped at the full amount.
    """
    employee_type = EmployeeType.CONTRACT

    contract_amount: float
    contract_end_date: date
    project_name: str
    contract_start_date: date = field(default_factory=date.today, kw_only=True)
    is_project_completed: bool = field(default=False, kw_only=True)

    def _default_base_salary(self) -> float:
        return self.contract_amount

    def calculate_salary(self, as_of: Optional[date] = None) -> float:
        if self.is_project_completed:
            return self.contract_amount

        as_of = as_of or date.today()
        total_days = days_between(self.contract_start_date, self.contract_end_date)
        elapsed_days = days_between(self.contract_start_date, as_of)

        if total_days <= 0:
            return self.contract_amount

        # Nothing is owed before the contract starts; the ratio is held within [0, 1].
        progress_ratio = max(0.0, min(1.0, elapsed_days / total_days))
        return self.contract_amount * progress_ratio

    def calculate_tax(self, as_of: Optional[date] = None) -> float:
        return self.calculate_salary(as_of) * CONTRACT_TAX_RATE

    def complete_project(self) -> None:
        self.is_project_completed = True

    def is_contract_expired(self, as_of: Optional[date] = None) -> bool:
        return (as_of or date.today()) > self.contract_end_date

    def remaining_days(self, as_of: Optional[date] = None) -> int:
        as_of = as_of or date.today()
        if self.is_contract_expired(as_of):
            return 0
        return days_between(as_of, self.contract_end_date)
