# payroll_ledger/constants.py

from enum import Enum

# General
DISPLAY_DATE_FORMAT = "%d/%m/%Y"
REPORT_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M"
EXPORT_FILE_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# Snapshot schema
SCHEMA_VERSION = 1


class EmployeeType(Enum):
    FULL_TIME = "Full-Time"
    PART_TIME = "Part-Time"
    CONTRACT = "Contract"


class PersistenceStatus(Enum):
    SAVED = "saved"
    LOADED = "loaded"
    MISSING = "missing"   # no snapshot file on disk
    CORRUPT = "corrupt"   # file exists but could not be read back
    FAILED = "failed"     # write failed, in-memory state untouched
    RESET = "reset"


# Working-time rules
MONTHLY_STANDARD_HOURS = 160          # 40 hours/week * 4 weeks
WEEKLY_STANDARD_HOURS = 40
WEEKS_PER_MONTH = 4
AVERAGE_WEEKS_PER_MONTH = 4.33
OVERTIME_MULTIPLIER = 1.5
PART_TIME_BENEFITS_MIN_WEEKLY_HOURS = 20
PART_TIME_ESTIMATED_WEEKLY_HOURS = 20
PART_TIME_QUICK_ENTRY_MAX_WEEKLY_HOURS = 30

# Full-time leave allowances (days per year)
DEFAULT_SICK_LEAVE_DAYS = 12
DEFAULT_VACATION_DAYS = 20

# Progressive tax brackets: (upper bound of the slice or None for the top slice, rate)
FULL_TIME_TAX_BRACKETS = (
    (50000.0, 0.05),
    (100000.0, 0.10),
    (None, 0.15),
)
PART_TIME_TAX_BRACKETS = (
    (30000.0, 0.03),
    (60000.0, 0.08),
    (None, 0.12),
)
CONTRACT_TAX_RATE = 0.20

# Quick-entry defaults
QUICK_ENTRY_DEPARTMENT = "General"
QUICK_ENTRY_EMAIL_DOMAIN = "company.com"
