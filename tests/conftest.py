"""Shared fixtures: a fixed reference date, sample employees and ledgers on temporary snapshot files."""

from datetime import date, timedelta

import pytest

from payroll_ledger.business_logic.entities import (
    FullTimeEmployeeEntity,
    PartTimeEmployeeEntity,
    ContractEmployeeEntity,
)
from payroll_ledger.business_logic.payroll_manager import PayrollManager
from payroll_ledger.data_access.database_manager import DatabaseManager
from payroll_ledger.data_access.employees_repository import EmployeesRepository

AS_OF = date(2026, 10, 18)


@pytest.fixture
def as_of():
    return AS_OF


@pytest.fixture
def full_time():
    return FullTimeEmployeeEntity(
        "FT001", "Ada", "Lovelace", "ada@example.com", "Engineering", 40000.0, 5000.0,
        date_of_joining=date(2020, 3, 1),
    )


@pytest.fixture
def part_time():
    return PartTimeEmployeeEntity(
        "PT001", "Grace", "Hopper", "grace@example.com", "Support", 10.0, 40.0,
        hours_worked=180.0, date_of_joining=date(2024, 1, 15),
    )


@pytest.fixture
def contract():
    return ContractEmployeeEntity(
        "CT001", "Alan", "Turing", "alan@example.com", "Research", 12000.0,
        AS_OF + timedelta(days=50), "Enigma",
        contract_start_date=AS_OF - timedelta(days=50), date_of_joining=AS_OF - timedelta(days=50),
    )


@pytest.fixture
def snapshot_paths(tmp_path):
    return str(tmp_path / "payroll_data.db"), str(tmp_path / "payroll_backup.db")


@pytest.fixture
def manager(snapshot_paths):
    data_file, backup_file = snapshot_paths
    return PayrollManager(
        EmployeesRepository(DatabaseManager(data_file)),
        EmployeesRepository(DatabaseManager(backup_file)),
        today=lambda: AS_OF,
    )


@pytest.fixture
def populated_manager(manager, full_time, part_time, contract):
    for employee in (full_time, part_time, contract):
        assert manager.add_employee(employee)
    return manager
