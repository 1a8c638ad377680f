# payroll_ledger/business_logic/__init__.py
from .payroll_manager import PayrollManager
from .report_manager import ReportManager
