# payroll_ledger/utils/date_converter.py

from datetime import date, datetime
from typing import Optional, Union
import jdatetime

from payroll_ledger.constants import DISPLAY_DATE_FORMAT

SHAMSI_CALENDAR = "shamsi"
GREGORIAN_CALENDAR = "gregorian"


def to_shamsi_str(value: Optional[date]) -> str:
    """Jalali rendering (YYYY/MM/DD) of a date or datetime; "-" when missing."""
    if value is None:
        return "-"
    if isinstance(value, datetime):
        value = value.date()
    return jdatetime.date.fromgregorian(date=value).strftime("%Y/%m/%d")

def format_display_date(value: Optional[Union[date, datetime]], calendar: str = GREGORIAN_CALENDAR) -> str:
    """Formats a date for reports in the requested calendar; N/A when missing."""
    if value is None:
        return "N/A"
    if calendar == SHAMSI_CALENDAR:
        return to_shamsi_str(value)
    return value.strftime(DISPLAY_DATE_FORMAT)

def days_between(start: date, end: date) -> int:
    """Calendar days from start to end (negative when end is earlier)."""
    return (end - start).days

def whole_years_between(start: date, end: date) -> int:
    """Completed years from start to end, 0 if end is not after start."""
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return max(0, years)
