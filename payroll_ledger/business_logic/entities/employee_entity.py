# payroll_ledger/business_logic/entities/employee_entity.py
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, Optional

from payroll_ledger.constants import (
    EmployeeType, OVERTIME_MULTIPLIER, WEEKLY_STANDARD_HOURS
)
from payroll_ledger.utils import date_converter


@dataclass(eq=False)
class EmployeeEntity(ABC):
    """
    Common record shared by every kind of employee.

    Salary and tax rules live in the three variants (full-time, part-time, contract).
    Every calculation takes an optional ``as_of`` date so results can be reproduced;
    when omitted, today's date is used.
    """
    employee_type: ClassVar[EmployeeType]

    employee_id: str
    first_name: str
    last_name: str
    email: str
    department: str

    base_salary: Optional[float] = field(default=None, kw_only=True) # None -> variant default
    hours_worked: float = field(default=0.0, kw_only=True)
    hourly_rate: float = field(default=0.0, kw_only=True)
    date_of_joining: date = field(default_factory=date.today, kw_only=True)
    is_active: bool = field(default=True, kw_only=True)

    phone_number: Optional[str] = field(default=None, kw_only=True)
    date_of_birth: Optional[date] = field(default=None, kw_only=True)
    address: Optional[str] = field(default=None, kw_only=True)

    def __post_init__(self):
        if self.base_salary is None:
            self.base_salary = self._default_base_salary()

    def __setattr__(self, name, value):
        if name == "employee_id" and "employee_id" in self.__dict__:
            raise AttributeError("employee_id cannot be changed once the employee is created.")
        super().__setattr__(name, value)

    def __eq__(self, other):
        if not isinstance(other, EmployeeEntity):
            return NotImplemented
        return self.employee_id.casefold() == other.employee_id.casefold()

    def __hash__(self):
        return hash(self.employee_id.casefold())

    def _default_base_salary(self) -> float:
        return 0.0

    @abstractmethod
    def calculate_salary(self, as_of: Optional[date] = None) -> float:
        """Gross salary for the current period."""

    @abstractmethod
    def calculate_tax(self, as_of: Optional[date] = None) -> float:
        """Tax owed on the gross salary."""

    def calculate_net_salary(self, as_of: Optional[date] = None) -> float:
        return self.calculate_salary(as_of) - self.calculate_tax(as_of)

    def calculate_overtime(self) -> float:
        # Flat weekly rule used by the overtime report; independent of PartTime's own salary overtime.
        if self.hours_worked <= WEEKLY_STANDARD_HOURS:
            return 0.0
        return (self.hours_worked - WEEKLY_STANDARD_HOURS) * self.hourly_rate * OVERTIME_MULTIPLIER

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def formatted_date_of_joining(self) -> str:
        return date_converter.format_display_date(self.date_of_joining)

    def years_of_service(self, as_of: Optional[date] = None) -> int:
        if self.date_of_joining is None:
            return 0
        return date_converter.whole_years_between(self.date_of_joining, as_of or date.today())

    def __str__(self) -> str:
        return (f"{type(self).__name__}(ID='{self.employee_id}', Name='{self.full_name}', "
                f"Department='{self.department}', Type='{self.employee_type.value}', Active={self.is_active})")
