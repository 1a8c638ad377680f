# payroll_ledger/data_access/__init__.py

from .database_manager import DatabaseManager
from .base_repository import BaseRepository
from .employees_repository import EmployeesRepository
