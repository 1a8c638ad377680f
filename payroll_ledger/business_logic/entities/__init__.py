# payroll_ledger/business_logic/entities/__init__.py
from payroll_ledger.constants import EmployeeType

from .employee_entity import EmployeeEntity
from .full_time_employee_entity import FullTimeEmployeeEntity
from .part_time_employee_entity import PartTimeEmployeeEntity
from .contract_employee_entity import ContractEmployeeEntity
from .payslip_entity import PayslipEntity, PayrollTotalsEntity
from .salary_summary_entity import GroupSummaryEntity, SalaryStatisticsEntity, OvertimeLineEntity

# The only employee kinds the ledger recognises
EMPLOYEE_ENTITY_TYPES = {
    EmployeeType.FULL_TIME: FullTimeEmployeeEntity,
    EmployeeType.PART_TIME: PartTimeEmployeeEntity,
    EmployeeType.CONTRACT: ContractEmployeeEntity,
}

__all__ = [
    "EmployeeEntity", "FullTimeEmployeeEntity", "PartTimeEmployeeEntity",
    "ContractEmployeeEntity", "PayslipEntity", "PayrollTotalsEntity",
    "GroupSummaryEntity", "SalaryStatisticsEntity", "OvertimeLineEntity",
    "EMPLOYEE_ENTITY_TYPES",
]
