# payroll_ledger/business_logic/report_manager.py

from typing import Optional, List
from datetime import date, datetime
from html import escape
import os
import logging

from payroll_ledger.business_logic.entities import (
    FullTimeEmployeeEntity, PartTimeEmployeeEntity, ContractEmployeeEntity
)
from payroll_ledger.business_logic.payroll_manager import PayrollManager
from payroll_ledger.config import REPORT_CALENDAR
from payroll_ledger.constants import REPORT_TIMESTAMP_FORMAT, EXPORT_FILE_TIMESTAMP_FORMAT, WEEKLY_STANDARD_HOURS
from payroll_ledger.utils import date_converter

logger = logging.getLogger(__name__)

# --- WeasyPrint Import ---
try:
    from weasyprint import HTML
    WEASYPRINT_AVAILABLE = True
except (ImportError, OSError): # OSError: native Pango/Cairo libraries missing
    WEASYPRINT_AVAILABLE = False
    HTML = None


def _truncate(name: str, width: int = 20) -> str:
    return name if len(name) <= width else name[:width - 3] + "..."


class ReportManager:
    """Builds the human-readable payroll reports and writes them to disk."""

    def __init__(self, payroll_manager: PayrollManager, calendar: str = REPORT_CALENDAR):
        if payroll_manager is None: raise ValueError("payroll_manager cannot be None")
        self.payroll_manager = payroll_manager
        self.calendar = calendar

    def _generated_on(self, now: datetime) -> str:
        if self.calendar == date_converter.SHAMSI_CALENDAR:
            return f"{date_converter.to_shamsi_str(now.date())} {now.strftime('%H:%M')}"
        return now.strftime(REPORT_TIMESTAMP_FORMAT)

    def employee_list_text(self, now: Optional[datetime] = None, as_of: Optional[date] = None) -> str:
        now = now or datetime.now()
        lines = [
            "EMPLOYEE LIST REPORT",
            f"Generated on: {self._generated_on(now)}",
            "=" * 80,
        ]
        for emp in self.payroll_manager.list_all():
            lines.extend([
                f"ID: {emp.employee_id}",
                f"Name: {emp.full_name}",
                f"Type: {emp.employee_type.value}",
                f"Department: {emp.department}",
                f"Email: {emp.email}",
                f"Status: {'Active' if emp.is_active else 'Inactive'}",
                f"Date of Joining: {date_converter.format_display_date(emp.date_of_joining, self.calendar)}",
                f"Salary: ${emp.calculate_salary(as_of or now.date()):.2f}",
                "-" * 40,
            ])
        return "\n".join(lines) + "\n"

    def payroll_report_text(self, now: Optional[datetime] = None, as_of: Optional[date] = None) -> str:
        now = now or datetime.now()
        totals = self.payroll_manager.payroll_totals(as_of or now.date())
        lines = [
            "MONTHLY PAYROLL REPORT",
            f"Generated on: {self._generated_on(now)}",
            "=" * 80,
            f"{'ID':<15} {'Name':<25} {'Gross':<13} {'Tax':<11} {'Net':<13}",
        ]
        for slip in totals.payslips:
            lines.append(
                f"{slip.employee_id:<15} {slip.full_name:<25} ${slip.gross_salary:<12.2f} "
                f"${slip.tax:<10.2f} ${slip.net_salary:<12.2f}"
            )
        lines.append("-" * 80)
        lines.append(
            f"TOTAL ({totals.employee_count} employees): {'':<19} ${totals.total_gross:<12.2f} "
            f"${totals.total_tax:<10.2f} ${totals.total_net:<12.2f}"
        )
        return "\n".join(lines) + "\n"

    def statistics_text(self, now: Optional[datetime] = None, as_of: Optional[date] = None) -> str:
        now = now or datetime.now()
        as_of = as_of or now.date()
        lines = [
            "PAYROLL STATISTICS REPORT",
            f"Generated on: {self._generated_on(now)}",
            "=" * 60,
        ]
        stats = self.payroll_manager.statistics(as_of)
        if stats is None:
            lines.append("No active employees found.")
            return "\n".join(lines) + "\n"

        lines.extend([
            f"Total Employees: {stats.count}",
            f"Total Salary Cost: ${stats.total_salary:.2f}",
            f"Average Salary: ${stats.average_salary:.2f}",
            f"Highest Salary: ${stats.highest_salary:.2f} - {stats.highest_paid.full_name} ({stats.highest_paid.employee_id})",
            f"Lowest Salary: ${stats.lowest_salary:.2f} - {stats.lowest_paid.full_name} ({stats.lowest_paid.employee_id})",
            "",
            "DEPARTMENT BREAKDOWN:",
        ])
        for department, summary in self.payroll_manager.department_summary(as_of).items():
            lines.append(f"{department:<20}: {summary.count} employees, total ${summary.total_salary:.2f}, "
                         f"average ${summary.average_salary:.2f}")

        lines.extend(["", "EMPLOYEE TYPE BREAKDOWN:"])
        for employee_type, summary in self.payroll_manager.employee_type_summary(as_of).items():
            lines.append(f"{employee_type:<15}: {summary.count} employees ({summary.percentage:.1f}%)")
        return "\n".join(lines) + "\n"

    def tax_report_text(self, as_of: Optional[date] = None) -> str:
        totals = self.payroll_manager.payroll_totals(as_of)
        lines = [
            "TAX SUMMARY REPORT",
            "=" * 80,
            f"{'Employee ID':<15} {'Name':<20} {'Gross Salary':<15} {'Tax Amount':<12} {'Tax Rate':>12}",
            "-" * 80,
        ]
        for slip in totals.payslips:
            lines.append(
                f"{slip.employee_id:<15} {_truncate(slip.full_name):<20} ${slip.gross_salary:<14.2f} "
                f"${slip.tax:<11.2f} {slip.tax_rate:11.2f}%"
            )
        lines.append("-" * 80)
        lines.append(
            f"{'TOTAL:':<37} ${totals.total_gross:<14.2f} ${totals.total_tax:<11.2f} {totals.average_tax_rate:11.2f}%"
        )
        return "\n".join(lines) + "\n"

    def overtime_report_text(self) -> str:
        lines = [
            "OVERTIME REPORT",
            "=" * 80,
        ]
        overtime_lines = self.payroll_manager.overtime_report()
        if not overtime_lines:
            lines.append("No employees with overtime hours found.")
            return "\n".join(lines) + "\n"

        lines.append(f"{'Employee ID':<15} {'Name':<20} {'Total Hours':<12} {'Overtime Hours':<15} {'Overtime Pay':<15}")
        lines.append("-" * 80)
        for line in overtime_lines:
            lines.append(
                f"{line.employee_id:<15} {_truncate(line.full_name):<20} {line.hours_worked:<12.1f} "
                f"{line.overtime_hours:<15.1f} ${line.overtime_pay:<14.2f}"
            )
        lines.append("-" * 80)
        lines.append(f"Total overtime pay: ${sum(line.overtime_pay for line in overtime_lines):.2f}")
        return "\n".join(lines) + "\n"

    def payslip_text(self, employee_id: str, as_of: Optional[date] = None) -> Optional[str]:
        """Salary breakdown for one employee, or None if the ID is unknown."""
        employee = self.payroll_manager.find_employee(employee_id)
        slip = self.payroll_manager.payslip(employee_id, as_of)
        if employee is None or slip is None:
            return None

        lines = [
            "SALARY BREAKDOWN",
            f"Employee: {slip.full_name} ({slip.employee_id})",
            f"Type: {slip.employee_type.value}",
            "-" * 40,
        ]
        if isinstance(employee, FullTimeEmployeeEntity):
            lines.extend([
                f"Base Salary: ${employee.base_salary:.2f}",
                f"Benefits: ${employee.benefits:.2f}",
                f"Monthly Bonus: ${employee.monthly_bonus:.2f}",
            ])
        elif isinstance(employee, PartTimeEmployeeEntity):
            lines.extend([
                f"Hourly Rate: ${employee.hourly_rate:.2f}",
                f"Hours Worked: {employee.hours_worked:.1f}",
            ])
            if employee.hours_worked > WEEKLY_STANDARD_HOURS:
                lines.append(f"Overtime Pay: ${employee.calculate_overtime():.2f}")
        elif isinstance(employee, ContractEmployeeEntity):
            lines.extend([
                f"Contract Amount: ${employee.contract_amount:.2f}",
                f"Project: {employee.project_name}",
                f"Contract End Date: {date_converter.format_display_date(employee.contract_end_date, self.calendar)}",
                f"Days Remaining: {employee.remaining_days(as_of or self.payroll_manager.today())}",
            ])

        lines.extend([
            "-" * 40,
            f"Gross Salary: ${slip.gross_salary:.2f}",
            f"Tax Deduction: ${slip.tax:.2f}",
            f"Net Salary: ${slip.net_salary:.2f}",
        ])
        return "\n".join(lines) + "\n"

    def export_reports(self, export_dir: str, now: Optional[datetime] = None) -> List[str]:
        """
        Writes the employee list, payroll and statistics reports as timestamped text files.
        Returns the written paths, or an empty list if any file could not be written.
        """
        now = now or datetime.now()
        timestamp = now.strftime(EXPORT_FILE_TIMESTAMP_FORMAT)
        reports = {
            f"employees_{timestamp}.txt": self.employee_list_text(now),
            f"payroll_{timestamp}.txt": self.payroll_report_text(now),
            f"statistics_{timestamp}.txt": self.statistics_text(now),
        }

        written: List[str] = []
        try:
            os.makedirs(export_dir, exist_ok=True)
            for file_name, content in reports.items():
                file_path = os.path.join(export_dir, file_name)
                with open(file_path, "w", encoding="utf-8") as report_file:
                    report_file.write(content)
                written.append(file_path)
        except OSError as e:
            logger.error(f"Error exporting reports to {export_dir}: {e}", exc_info=True)
            return []

        logger.info(f"Reports exported successfully to {export_dir}.")
        return written

    def payroll_report_html(self, now: Optional[datetime] = None, as_of: Optional[date] = None) -> str:
        now = now or datetime.now()
        totals = self.payroll_manager.payroll_totals(as_of or now.date())

        html = (
            "<html><head><meta charset='utf-8'><style>"
            "body { font-family: sans-serif; font-size: 10pt; }"
            "table { width: 100%; border-collapse: collapse; }"
            "th, td { border: 1px solid #999; padding: 4px; }"
            ".amount { text-align: right; }"
            "</style></head><body>"
            "<h2>Monthly Payroll Report</h2>"
            f"<p>Generated on: {escape(self._generated_on(now))}</p>"
            "<table><thead><tr><th>ID</th><th>Name</th><th>Type</th>"
            "<th>Gross Salary</th><th>Tax</th><th>Net Salary</th></tr></thead><tbody>"
        )
        if totals.payslips:
            for slip in totals.payslips:
                html += (
                    f"<tr><td>{escape(slip.employee_id)}</td><td>{escape(slip.full_name)}</td>"
                    f"<td>{slip.employee_type.value}</td><td class='amount'>{slip.gross_salary:,.2f}</td>"
                    f"<td class='amount'>{slip.tax:,.2f}</td><td class='amount'>{slip.net_salary:,.2f}</td></tr>"
                )
        else:
            html += "<tr><td colspan='6'>No active employees found.</td></tr>"

        html += (
            f"<tr><th colspan='3'>TOTAL ({totals.employee_count} employees)</th>"
            f"<th class='amount'>{totals.total_gross:,.2f}</th><th class='amount'>{totals.total_tax:,.2f}</th>"
            f"<th class='amount'>{totals.total_net:,.2f}</th></tr>"
        )
        html += "</tbody></table></body></html>"
        return html

    def export_payroll_pdf(self, file_path: str, now: Optional[datetime] = None) -> bool:
        if not WEASYPRINT_AVAILABLE:
            logger.error("WeasyPrint is not available; PDF export skipped.")
            return False
        try:
            HTML(string=self.payroll_report_html(now)).write_pdf(file_path)
        except Exception as e:
            logger.error(f"Failed to export payroll report to PDF: {e}", exc_info=True)
            return False
        logger.info(f"Payroll report saved as PDF: {file_path}")
        return True
