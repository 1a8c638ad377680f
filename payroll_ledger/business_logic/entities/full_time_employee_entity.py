# payroll_ledger/business_logic/entities/full_time_employee_entity.py
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .employee_entity import EmployeeEntity
from payroll_ledger.constants import (
    EmployeeType, FULL_TIME_TAX_BRACKETS, MONTHLY_STANDARD_HOURS, OVERTIME_MULTIPLIER,
    DEFAULT_SICK_LEAVE_DAYS, DEFAULT_VACATION_DAYS
)
from payroll_ledger.utils.tax import progressive_tax


@dataclass(eq=False)
class FullTimeEmployeeEntity(EmployeeEntity):
    """Monthly salaried employee; hours beyond 160 a month are paid at 1.5x the hourly equivalent."""
    employee_type = EmployeeType.FULL_TIME

    base_salary: float = field() # the monthly salary; positional for full-time employees
    benefits: float
    monthly_bonus: float = field(default=0.0, kw_only=True)
    sick_leave_days: int = field(default=DEFAULT_SICK_LEAVE_DAYS, kw_only=True)
    vacation_days: int = field(default=DEFAULT_VACATION_DAYS, kw_only=True)

    def calculate_salary(self, as_of: Optional[date] = None) -> float:
        total_salary = self.base_salary + self.monthly_bonus + self.benefits

        if self.hours_worked > MONTHLY_STANDARD_HOURS:
            overtime_hours = self.hours_worked - MONTHLY_STANDARD_HOURS
            hourly_equivalent = self.base_salary / MONTHLY_STANDARD_HOURS
            total_salary += overtime_hours * hourly_equivalent * OVERTIME_MULTIPLIER

        return total_salary

    def calculate_tax(self, as_of: Optional[date] = None) -> float:
        return progressive_tax(self.calculate_salary(as_of), FULL_TIME_TAX_BRACKETS)

    def annual_salary(self, as_of: Optional[date] = None) -> float:
        return self.calculate_salary(as_of) * 12
