# payroll_ledger/business_logic/payroll_manager.py

from typing import Optional, List, Dict, Callable, TYPE_CHECKING
from datetime import date
from dataclasses import fields
import sqlite3
import logging

from payroll_ledger.business_logic.entities import (
    EmployeeEntity, PayslipEntity, PayrollTotalsEntity, GroupSummaryEntity,
    SalaryStatisticsEntity, OvertimeLineEntity
)
from payroll_ledger.constants import PersistenceStatus, WEEKLY_STANDARD_HOURS

if TYPE_CHECKING:
    from payroll_ledger.data_access.employees_repository import EmployeesRepository

logger = logging.getLogger(__name__)

PERSISTENCE_ERRORS = (sqlite3.Error, OSError, ValueError, KeyError, TypeError)

class PayrollManager:
    """
    The in-memory employee ledger.

    Records are kept in insertion order, keyed by the case-folded employee ID, so an ID
    can only be present once regardless of case. Conflicts and persistence failures are
    logged and reported through return values; nothing here terminates the caller.
    """

    def __init__(self,
                 employees_repository: "EmployeesRepository",
                 backup_repository: Optional["EmployeesRepository"] = None,
                 today: Callable[[], date] = date.today):
        """
        :param employees_repository: Repository for the main snapshot file.
        :param backup_repository: Repository for the manual backup snapshot file.
        :param today: Clock used when a calculation is not given an explicit date.
        """
        if employees_repository is None: raise ValueError("employees_repository cannot be None")

        self.employees_repository = employees_repository
        self.backup_repository = backup_repository
        self._today = today
        self._employees: Dict[str, EmployeeEntity] = {}

    @staticmethod
    def _key(employee_id: str) -> str:
        return employee_id.casefold()

    def today(self) -> date:
        return self._today()

    def _as_of(self, as_of: Optional[date]) -> date:
        return as_of or self.today()

    # --- Employee management ---

    def add_employee(self, employee: Optional[EmployeeEntity]) -> bool:
        if employee is None:
            logger.warning("Attempted to add an empty employee record.")
            return False
        if self.employee_exists(employee.employee_id):
            logger.warning(f"Employee with ID '{employee.employee_id}' already exists. Record not added.")
            return False

        self._employees[self._key(employee.employee_id)] = employee
        logger.info(f"Employee '{employee.employee_id}' ({employee.employee_type.value}) added.")
        return True

    def employee_exists(self, employee_id: str) -> bool:
        return self._key(employee_id) in self._employees

    def find_employee(self, employee_id: str) -> Optional[EmployeeEntity]:
        return self._employees.get(self._key(employee_id))

    def remove_employee(self, employee_id: str) -> bool:
        removed = self._employees.pop(self._key(employee_id), None)
        if removed is None:
            logger.warning(f"Employee with ID '{employee_id}' not found for deletion.")
            return False
        logger.info(f"Employee '{removed.employee_id}' deleted.")
        return True

    def update_employee(self, employee_id: str, /, **changes) -> Optional[EmployeeEntity]:
        """
        Assigns the given attributes on an existing employee.
        Returns the updated employee, or None if no employee has that ID.
        """
        employee = self.find_employee(employee_id)
        if employee is None:
            logger.warning(f"Employee with ID '{employee_id}' not found for update.")
            return None

        if "employee_id" in changes:
            raise ValueError("employee_id cannot be updated.")
        allowed = {f.name for f in fields(employee)}
        unknown = [name for name in changes if name not in allowed]
        if unknown:
            raise ValueError(f"Unknown field(s) for {employee.employee_type.value} employee: {', '.join(unknown)}")

        for name, value in changes.items():
            setattr(employee, name, value)

        if changes:
            logger.info(f"Employee '{employee.employee_id}' updated: {', '.join(changes)}.")
        else:
            logger.info(f"No updates provided for employee '{employee.employee_id}'.")
        return employee

    def update_employee_hours(self, employee_id: str, hours_worked: float) -> Optional[EmployeeEntity]:
        return self.update_employee(employee_id, hours_worked=hours_worked)

    def toggle_active(self, employee_id: str) -> Optional[EmployeeEntity]:
        employee = self.find_employee(employee_id)
        if employee is None:
            logger.warning(f"Employee with ID '{employee_id}' not found for status change.")
            return None
        return self.update_employee(employee_id, is_active=not employee.is_active)

    # --- Queries ---

    def list_all(self) -> List[EmployeeEntity]:
        return list(self._employees.values())

    def list_active(self) -> List[EmployeeEntity]:
        return [e for e in self._employees.values() if e.is_active]

    @property
    def total_employees(self) -> int:
        return len(self._employees)

    @property
    def active_employee_count(self) -> int:
        return len(self.list_active())

    def search_by_name(self, term: str) -> List[EmployeeEntity]:
        needle = term.casefold()
        return [e for e in self._employees.values() if needle in e.full_name.casefold()]

    def search_by_department(self, term: str) -> List[EmployeeEntity]:
        needle = term.casefold()
        return [e for e in self._employees.values() if needle in e.department.casefold()]

    # --- Aggregation ---

    def aggregate(self, key_func: Callable[[EmployeeEntity], str],
                  as_of: Optional[date] = None) -> Dict[str, GroupSummaryEntity]:
        """Groups active employees by `key_func`, in order of first appearance."""
        as_of = self._as_of(as_of)
        active = self.list_active()

        groups: Dict[str, List[EmployeeEntity]] = {}
        for employee in active:
            groups.setdefault(key_func(employee), []).append(employee)

        return {
            key: GroupSummaryEntity(
                key=key,
                employees=members,
                total_salary=sum(e.calculate_salary(as_of) for e in members),
                percentage=len(members) * 100.0 / len(active),
            )
            for key, members in groups.items()
        }

    def department_summary(self, as_of: Optional[date] = None) -> Dict[str, GroupSummaryEntity]:
        return self.aggregate(lambda e: e.department, as_of)

    def employee_type_summary(self, as_of: Optional[date] = None) -> Dict[str, GroupSummaryEntity]:
        return self.aggregate(lambda e: e.employee_type.value, as_of)

    def statistics(self, as_of: Optional[date] = None) -> Optional[SalaryStatisticsEntity]:
        """Salary statistics over active employees, or None when there are none."""
        as_of = self._as_of(as_of)
        active = self.list_active()
        if not active:
            logger.info("No active employees found; no salary statistics available.")
            return None

        salaries = [(e, e.calculate_salary(as_of)) for e in active]
        highest_paid, highest_salary = salaries[0]
        lowest_paid, lowest_salary = salaries[0]
        for employee, salary in salaries[1:]:
            if salary > highest_salary:
                highest_paid, highest_salary = employee, salary
            if salary < lowest_salary:
                lowest_paid, lowest_salary = employee, salary

        total_salary = sum(salary for _, salary in salaries)
        return SalaryStatisticsEntity(
            count=len(active),
            total_salary=total_salary,
            average_salary=total_salary / len(active),
            highest_salary=highest_salary,
            lowest_salary=lowest_salary,
            highest_paid=highest_paid,
            lowest_paid=lowest_paid,
        )

    def payslip(self, employee_id: str, as_of: Optional[date] = None) -> Optional[PayslipEntity]:
        employee = self.find_employee(employee_id)
        if employee is None:
            logger.warning(f"Employee with ID '{employee_id}' not found for payslip.")
            return None
        return self._payslip_for(employee, self._as_of(as_of))

    def payroll_totals(self, as_of: Optional[date] = None) -> PayrollTotalsEntity:
        as_of = self._as_of(as_of)
        return PayrollTotalsEntity(payslips=[self._payslip_for(e, as_of) for e in self.list_active()])

    @staticmethod
    def _payslip_for(employee: EmployeeEntity, as_of: date) -> PayslipEntity:
        return PayslipEntity(
            employee_id=employee.employee_id,
            full_name=employee.full_name,
            employee_type=employee.employee_type,
            gross_salary=employee.calculate_salary(as_of),
            tax=employee.calculate_tax(as_of),
        )

    def overtime_report(self) -> List[OvertimeLineEntity]:
        return [
            OvertimeLineEntity(
                employee_id=e.employee_id,
                full_name=e.full_name,
                hours_worked=e.hours_worked,
                overtime_hours=e.hours_worked - WEEKLY_STANDARD_HOURS,
                overtime_pay=e.calculate_overtime(),
            )
            for e in self.list_active() if e.hours_worked > WEEKLY_STANDARD_HOURS
        ]

    # --- Persistence ---

    def save_data(self) -> PersistenceStatus:
        return self._save_to(self.employees_repository, "data")

    def load_data(self) -> PersistenceStatus:
        """Replaces the collection with the main snapshot; resets to empty when it is missing or unreadable."""
        if not self.employees_repository.db_manager.exists():
            logger.warning(f"No data file found at {self.employees_repository.db_manager.db_path}. Starting with an empty ledger.")
            self._employees = {}
            return PersistenceStatus.MISSING
        return self._load_from(self.employees_repository, "data")

    def backup_data(self) -> PersistenceStatus:
        if self.backup_repository is None:
            logger.error("No backup location configured.")
            return PersistenceStatus.FAILED
        return self._save_to(self.backup_repository, "backup")

    def restore_data(self) -> PersistenceStatus:
        """Replaces the collection with the backup snapshot; a missing backup leaves the ledger untouched."""
        if self.backup_repository is None or not self.backup_repository.db_manager.exists():
            logger.warning("No backup file found. Ledger left unchanged.")
            return PersistenceStatus.MISSING
        return self._load_from(self.backup_repository, "backup")

    def reset_all_data(self) -> PersistenceStatus:
        """Clears the ledger and deletes both snapshot files."""
        self._employees = {}
        try:
            for repository in (self.employees_repository, self.backup_repository):
                if repository is not None:
                    repository.db_manager.delete_file()
        except OSError as e:
            logger.error(f"Ledger cleared but a snapshot file could not be deleted: {e}", exc_info=True)
            return PersistenceStatus.FAILED
        logger.info("All payroll data reset.")
        return PersistenceStatus.RESET

    def _save_to(self, repository: "EmployeesRepository", label: str) -> PersistenceStatus:
        try:
            count = repository.save_all(self.list_all())
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error saving {label} to {repository.db_manager.db_path}: {e}", exc_info=True)
            return PersistenceStatus.FAILED
        logger.info(f"{count} employee(s) saved to {label} file {repository.db_manager.db_path}.")
        return PersistenceStatus.SAVED

    def _load_from(self, repository: "EmployeesRepository", label: str) -> PersistenceStatus:
        try:
            loaded = repository.load_all()
            employees: Dict[str, EmployeeEntity] = {}
            for employee in loaded:
                key = self._key(employee.employee_id)
                if key in employees:
                    raise ValueError(f"Duplicate employee ID '{employee.employee_id}' in {label} file.")
                employees[key] = employee
        except PERSISTENCE_ERRORS as e:
            logger.error(f"Error loading {label} from {repository.db_manager.db_path}: {e}", exc_info=True)
            self._employees = {}
            return PersistenceStatus.CORRUPT

        self._employees = employees
        logger.info(f"{len(employees)} employee(s) loaded from {label} file {repository.db_manager.db_path}.")
        return PersistenceStatus.LOADED
