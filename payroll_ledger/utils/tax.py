# payroll_ledger/utils/tax.py

from typing import Iterable, Optional, Tuple

TaxBracket = Tuple[Optional[float], float]


def progressive_tax(gross_salary: float, brackets: Iterable[TaxBracket]) -> float:
    """
    Applies each bracket's rate to the slice of gross salary that falls inside it.
    Brackets are ordered by upper bound; the last one has an upper bound of None.
    """
    tax = 0.0
    lower = 0.0
    for upper, rate in brackets:
        if upper is None or gross_salary <= upper:
            return tax + (gross_salary - lower) * rate
        tax += (upper - lower) * rate
        lower = upper
    return tax
