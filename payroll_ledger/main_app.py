# payroll_ledger/main_app.py
import argparse
import logging
import logging.config
import sys
from typing import Optional, List, Tuple

# --- Configuration and Constants ---
from payroll_ledger.config import (
    DATA_FILE_PATH, BACKUP_FILE_PATH, REPORTS_DIR, LOGGING_CONFIG, ensure_directories
)
from payroll_ledger.constants import PersistenceStatus

# --- Data Access Layer (DAL) ---
from payroll_ledger.data_access.database_manager import DatabaseManager
from payroll_ledger.data_access.employees_repository import EmployeesRepository

# --- Business Logic Layer (BLL) ---
from payroll_ledger.business_logic.payroll_manager import PayrollManager
from payroll_ledger.business_logic.report_manager import ReportManager

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    ensure_directories()
    logging.config.dictConfig(LOGGING_CONFIG)


def build_managers(data_file: str = DATA_FILE_PATH,
                   backup_file: str = BACKUP_FILE_PATH) -> Tuple[PayrollManager, ReportManager]:
    """Wires repositories and managers for one pair of snapshot files."""
    employees_repository = EmployeesRepository(DatabaseManager(data_file))
    backup_repository = EmployeesRepository(DatabaseManager(backup_file))
    payroll_manager = PayrollManager(employees_repository, backup_repository)
    report_manager = ReportManager(payroll_manager)
    return payroll_manager, report_manager


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="payroll-ledger",
        description="Load the payroll snapshot and export the payroll reports."
    )
    parser.add_argument("--data-file", default=DATA_FILE_PATH, help="Snapshot file to load.")
    parser.add_argument("--backup-file", default=BACKUP_FILE_PATH, help="Backup snapshot file.")
    parser.add_argument("--export-dir", default=REPORTS_DIR, help="Directory for the text reports.")
    parser.add_argument("--pdf", default=None, help="Also write the payroll report as PDF to this path.")
    parser.add_argument("--overtime", action="store_true", help="Print the overtime report.")
    parser.add_argument("--payslip", metavar="EMPLOYEE_ID", default=None, help="Print the salary breakdown of one employee.")
    args = parser.parse_args(argv)

    configure_logging()
    payroll_manager, report_manager = build_managers(args.data_file, args.backup_file)

    status = payroll_manager.load_data()
    if status is PersistenceStatus.CORRUPT:
        logger.error(f"Data file {args.data_file} could not be read; continuing with an empty ledger.")
    logger.info(f"Ledger ready: {payroll_manager.total_employees} employee(s), "
                f"{payroll_manager.active_employee_count} active.")

    exit_code = 0
    if not report_manager.export_reports(args.export_dir):
        exit_code = 1
    if args.pdf and not report_manager.export_payroll_pdf(args.pdf):
        exit_code = 1
    if args.overtime:
        print(report_manager.overtime_report_text(), end="")
    if args.payslip:
        payslip = report_manager.payslip_text(args.payslip)
        if payslip is None:
            logger.error(f"Employee with ID '{args.payslip}' not found.")
            exit_code = 1
        else:
            print(payslip, end="")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
