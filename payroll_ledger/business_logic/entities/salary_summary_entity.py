# payroll_ledger/business_logic/entities/salary_summary_entity.py
from dataclasses import dataclass
from typing import List

from .employee_entity import EmployeeEntity


@dataclass
class GroupSummaryEntity:
    key: str
    employees: List[EmployeeEntity]
    total_salary: float
    percentage: float # share of active headcount

    @property
    def count(self) -> int:
        return len(self.employees)

    @property
    def average_salary(self) -> float:
        return self.total_salary / self.count if self.count else 0.0


@dataclass
class SalaryStatisticsEntity:
    count: int
    total_salary: float
    average_salary: float
    highest_salary: float
    lowest_salary: float
    highest_paid: EmployeeEntity
    lowest_paid: EmployeeEntity


@dataclass
class OvertimeLineEntity:
    employee_id: str
    full_name: str
    hours_worked: float
    overtime_hours: float
    overtime_pay: float
