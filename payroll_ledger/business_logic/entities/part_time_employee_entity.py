# payroll_ledger/business_logic/entities/part_time_employee_entity.py
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .employee_entity import EmployeeEntity
from payroll_ledger.constants import (
    EmployeeType, PART_TIME_TAX_BRACKETS, MONTHLY_STANDARD_HOURS, WEEKS_PER_MONTH,
    AVERAGE_WEEKS_PER_MONTH, OVERTIME_MULTIPLIER, PART_TIME_BENEFITS_MIN_WEEKLY_HOURS,
    PART_TIME_ESTIMATED_WEEKLY_HOURS, PART_TIME_QUICK_ENTRY_MAX_WEEKLY_HOURS,
    QUICK_ENTRY_DEPARTMENT, QUICK_ENTRY_EMAIL_DOMAIN
)
from payroll_ledger.utils.tax import progressive_tax


@dataclass(eq=False)
class PartTimeEmployeeEntity(EmployeeEntity):
    employee_type = EmployeeType.PART_TIME

    hourly_rate: float = field() # positional for part-time employees
    max_hours_per_week: float

    def _default_base_salary(self) -> float:
        # Monthly estimate at 20 hours a week
        return self.hourly_rate * PART_TIME_ESTIMATED_WEEKLY_HOURS * WEEKS_PER_MONTH

    @classmethod
    def from_quick_entry(cls, employee_id: str, name: str,
                         hours_worked: float, hourly_rate: float) -> "PartTimeEmployeeEntity":
        """Builds an employee from just a name, hours and rate, filling the rest with defaults."""
        name_parts = name.split(" ", 1)
        first_name = name_parts[0]
        last_name = name_parts[1] if len(name_parts) > 1 else ""
        return cls(
            employee_id,
            first_name,
            last_name,
            f"{first_name.lower()}.{last_name.lower()}@{QUICK_ENTRY_EMAIL_DOMAIN}",
            QUICK_ENTRY_DEPARTMENT,
            hourly_rate,
            PART_TIME_QUICK_ENTRY_MAX_WEEKLY_HOURS,
            base_salary=hourly_rate * MONTHLY_STANDARD_HOURS,
            hours_worked=hours_worked,
        )

    @property
    def eligible_for_benefits(self) -> bool:
        return self.max_hours_per_week >= PART_TIME_BENEFITS_MIN_WEEKLY_HOURS

    def calculate_salary(self, as_of: Optional[date] = None) -> float:
        max_regular_hours = min(MONTHLY_STANDARD_HOURS, self.max_hours_per_week * WEEKS_PER_MONTH)

        if self.hours_worked <= max_regular_hours:
            return self.hours_worked * self.hourly_rate

        regular_pay = max_regular_hours * self.hourly_rate
        overtime_pay = (self.hours_worked - max_regular_hours) * self.hourly_rate * OVERTIME_MULTIPLIER
        return regular_pay + overtime_pay

    def calculate_tax(self, as_of: Optional[date] = None) -> float:
        return progressive_tax(self.calculate_salary(as_of), PART_TIME_TAX_BRACKETS)

    def is_within_hour_limits(self) -> bool:
        return self.hours_worked <= self.max_hours_per_week * AVERAGE_WEEKS_PER_MONTH
