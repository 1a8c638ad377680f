# payroll_ledger/business_logic/entities/payslip_entity.py
from dataclasses import dataclass, field
from typing import List

from payroll_ledger.constants import EmployeeType


@dataclass
class PayslipEntity:
    employee_id: str
    full_name: str
    employee_type: EmployeeType
    gross_salary: float
    tax: float
    # net_salary is a @property

    @property
    def net_salary(self) -> float:
        return self.gross_salary - self.tax

    @property
    def tax_rate(self) -> float:
        """Tax as a percentage of gross salary; 0 when there is no gross salary."""
        if self.gross_salary == 0:
            return 0.0
        return self.tax / self.gross_salary * 100


@dataclass
class PayrollTotalsEntity:
    payslips: List[PayslipEntity] = field(default_factory=list)

    @property
    def employee_count(self) -> int:
        return len(self.payslips)

    @property
    def total_gross(self) -> float:
        return sum(p.gross_salary for p in self.payslips)

    @property
    def total_tax(self) -> float:
        return sum(p.tax for p in self.payslips)

    @property
    def total_net(self) -> float:
        return sum(p.net_salary for p in self.payslips)

    @property
    def average_tax_rate(self) -> float:
        total_gross = self.total_gross
        if total_gross == 0:
            return 0.0
        return self.total_tax / total_gross * 100
