# payroll_ledger/utils/__init__.py
