"""Salary, tax and derived-field behaviour of the three employee kinds."""

import os
import subprocess
import sys
from datetime import date, timedelta

import pytest

from payroll_ledger.business_logic.entities import (
    EmployeeEntity,
    FullTimeEmployeeEntity,
    PartTimeEmployeeEntity,
    ContractEmployeeEntity,
    EMPLOYEE_ENTITY_TYPES,
)
from payroll_ledger.constants import EmployeeType, FULL_TIME_TAX_BRACKETS
from payroll_ledger.utils.tax import progressive_tax


def make_full_time(base_salary, benefits=0.0, **kwargs):
    return FullTimeEmployeeEntity("F1", "A", "B", "a@b.c", "Ops", base_salary, benefits, **kwargs)


def make_part_time(hourly_rate, max_hours_per_week, **kwargs):
    return PartTimeEmployeeEntity("P1", "A", "B", "a@b.c", "Ops", hourly_rate, max_hours_per_week, **kwargs)


class TestFullTimeEmployee:
    def test_salary_is_base_plus_bonus_plus_benefits(self):
        emp = make_full_time(4000.0, 500.0, monthly_bonus=250.0)
        assert emp.calculate_salary() == 4750.0

    def test_overtime_above_160_hours_uses_hourly_equivalent(self):
        emp = make_full_time(3200.0, hours_worked=170.0)
        # 3200 / 160 = 20 per hour; 10 overtime hours at 1.5x = 300
        assert emp.calculate_salary() == pytest.approx(3500.0)

    def test_no_overtime_at_exactly_160_hours(self):
        emp = make_full_time(3200.0, hours_worked=160.0)
        assert emp.calculate_salary() == 3200.0

    @pytest.mark.parametrize("gross, expected_tax", [
        (50000.0, 2500.0),
        (100000.0, 7500.0),
        (150000.0, 15000.0),
        (20000.0, 1000.0),
        (60000.0, 3500.0),
    ])
    def test_progressive_tax_brackets(self, gross, expected_tax):
        emp = make_full_time(gross)
        assert emp.calculate_tax() == pytest.approx(expected_tax)

    def test_defaults(self):
        emp = make_full_time(1000.0)
        assert emp.monthly_bonus == 0.0
        assert emp.sick_leave_days == 12
        assert emp.vacation_days == 20
        assert emp.is_active is True
        assert emp.date_of_joining == date.today()

    def test_annual_salary(self):
        assert make_full_time(1000.0, 100.0).annual_salary() == pytest.approx(13200.0)

    def test_employee_type(self):
        assert make_full_time(1.0).employee_type.value == "Full-Time"


class TestPartTimeEmployee:
    def test_overtime_beyond_monthly_cap(self):
        emp = make_part_time(10.0, 40.0, hours_worked=180.0)
        assert emp.calculate_salary() == pytest.approx(1900.0)

    def test_regular_cap_follows_max_hours_per_week(self):
        emp = make_part_time(10.0, 20.0, hours_worked=100.0)
        # cap is 80 hours; 20 hours at 15
        assert emp.calculate_salary() == pytest.approx(800.0 + 300.0)

    def test_pay_within_cap(self):
        emp = make_part_time(12.5, 30.0, hours_worked=80.0)
        assert emp.calculate_salary() == pytest.approx(1000.0)

    @pytest.mark.parametrize("hourly_rate, hours, expected_tax", [
        (200.0, 150.0, 900.0),    # gross 30000
        (400.0, 150.0, 3300.0),   # gross 60000
        (500.0, 160.0, 5700.0),   # gross 80000
    ])
    def test_progressive_tax_brackets(self, hourly_rate, hours, expected_tax):
        emp = make_part_time(hourly_rate, 40.0, hours_worked=hours)
        assert emp.calculate_tax() == pytest.approx(expected_tax)

    def test_eligibility_for_benefits_follows_max_hours(self):
        emp = make_part_time(10.0, 19.0)
        assert emp.eligible_for_benefits is False
        emp.max_hours_per_week = 20.0
        assert emp.eligible_for_benefits is True

    def test_default_base_salary_estimate(self):
        assert make_part_time(15.0, 25.0).base_salary == pytest.approx(1200.0)

    def test_explicit_base_salary_is_kept(self):
        assert make_part_time(15.0, 25.0, base_salary=999.0).base_salary == 999.0

    def test_hour_limits(self):
        emp = make_part_time(10.0, 20.0, hours_worked=86.0)
        assert emp.is_within_hour_limits()
        emp.hours_worked = 87.0
        assert not emp.is_within_hour_limits()

    def test_quick_entry(self):
        emp = PartTimeEmployeeEntity.from_quick_entry("Q1", "Linus Benedict Torvalds", 50.0, 20.0)
        assert emp.first_name == "Linus"
        assert emp.last_name == "Benedict Torvalds"
        assert emp.email == "linus.benedict torvalds@company.com"
        assert emp.department == "General"
        assert emp.max_hours_per_week == 30
        assert emp.base_salary == pytest.approx(3200.0)
        assert emp.hours_worked == 50.0


class TestContractEmployee:
    START = date(2026, 1, 1)

    def make(self, **kwargs):
        return ContractEmployeeEntity(
            "C1", "A", "B", "a@b.c", "Ops", 12000.0, self.START + timedelta(days=100), "Apollo",
            contract_start_date=self.START, **kwargs
        )

    def test_pro_ration_at_halfway(self):
        emp = self.make()
        assert emp.calculate_salary(self.START + timedelta(days=50)) == pytest.approx(6000.0)

    def test_pro_ration_capped_at_full_amount(self):
        emp = self.make()
        assert emp.calculate_salary(self.START + timedelta(days=400)) == pytest.approx(12000.0)

    def test_completed_project_pays_full_amount(self):
        emp = self.make()
        emp.complete_project()
        assert emp.is_project_completed
        assert emp.calculate_salary(self.START + timedelta(days=1)) == 12000.0

    def test_zero_length_contract_pays_full_amount(self):
        emp = ContractEmployeeEntity("C2", "A", "B", "a@b.c", "Ops", 500.0, self.START, "X",
                                     contract_start_date=self.START)
        assert emp.calculate_salary(self.START) == 500.0

    def test_before_start_owes_nothing(self):
        emp = self.make()
        assert emp.calculate_salary(self.START - timedelta(days=10)) == 0.0

    def test_flat_tax(self):
        emp = self.make()
        assert emp.calculate_tax(self.START + timedelta(days=50)) == pytest.approx(1200.0)

    def test_expiry_and_remaining_days(self):
        emp = self.make()
        assert emp.remaining_days(self.START + timedelta(days=30)) == 70
        assert not emp.is_contract_expired(self.START + timedelta(days=100))
        assert emp.is_contract_expired(self.START + timedelta(days=101))
        assert emp.remaining_days(self.START + timedelta(days=101)) == 0

    def test_defaults(self):
        emp = ContractEmployeeEntity("C3", "A", "B", "a@b.c", "Ops", 700.0, date(2030, 1, 1), "Y")
        assert emp.contract_start_date == date.today()
        assert emp.base_salary == 700.0
        assert emp.is_project_completed is False


class TestCommonBehaviour:
    @pytest.fixture
    def employees(self, full_time, part_time, contract):
        return [full_time, part_time, contract]

    def test_net_salary_identity(self, employees, as_of):
        for emp in employees:
            assert emp.calculate_net_salary(as_of) == emp.calculate_salary(as_of) - emp.calculate_tax(as_of)

    def test_weekly_overtime_rule_is_independent(self, part_time):
        # 140 hours beyond 40 at 1.5x the rate, not the monthly cap used for salary
        assert part_time.calculate_overtime() == pytest.approx(2100.0)

    def test_overtime_zero_at_or_below_40_hours(self):
        assert make_part_time(10.0, 20.0, hours_worked=40.0).calculate_overtime() == 0.0

    def test_full_name_and_years_of_service(self, full_time, as_of):
        assert full_time.full_name == "Ada Lovelace"
        assert full_time.years_of_service(as_of) == 6
        assert full_time.years_of_service(date(2021, 2, 28)) == 0
        assert full_time.formatted_date_of_joining == "01/03/2020"

    def test_employee_id_cannot_be_reassigned(self, full_time):
        with pytest.raises(AttributeError):
            full_time.employee_id = "OTHER"
        assert full_time.employee_id == "FT001"

    def test_other_fields_are_mutable(self, full_time):
        full_time.department = "Finance"
        full_time.email = "ada@new.example.com"
        assert full_time.department == "Finance"
        assert full_time.email == "ada@new.example.com"

    def test_equality_is_case_insensitive_on_id(self):
        a = make_full_time(1.0)
        b = make_part_time(1.0, 1.0)
        lower = FullTimeEmployeeEntity("f1", "X", "Y", "x@y.z", "Other", 2.0, 0.0)
        assert a == lower
        assert hash(a) == hash(lower)
        assert a != b

    def test_variant_set_is_closed(self):
        assert set(EMPLOYEE_ENTITY_TYPES) == set(EmployeeType)
        with pytest.raises(TypeError):
            EmployeeEntity("E", "A", "B", "a@b.c", "Ops")


def test_progressive_tax_helper_matches_closed_form():
    for gross in (0.0, 12345.0, 50000.0, 75000.0, 100000.0, 250000.0):
        if gross <= 50000:
            expected = 0.05 * gross
        elif gross <= 100000:
            expected = 2500 + 0.10 * (gross - 50000)
        else:
            expected = 2500 + 5000 + 0.15 * (gross - 100000)
        assert progressive_tax(gross, FULL_TIME_TAX_BRACKETS) == pytest.approx(expected)


class TestPositionalConstruction:
    def test_variants_take_their_salary_inputs_positionally(self):
        full = FullTimeEmployeeEntity("F1", "A", "B", "a@b.c", "Ops", 4000.0, 500.0)
        part = PartTimeEmployeeEntity("P1", "A", "B", "a@b.c", "Ops", 15.0, 25.0)
        contract = ContractEmployeeEntity("C1", "A", "B", "a@b.c", "Ops", 900.0, date(2030, 1, 1), "X")

        assert (full.base_salary, full.benefits) == (4000.0, 500.0)
        assert (part.hourly_rate, part.max_hours_per_week) == (15.0, 25.0)
        assert part.base_salary == 15.0 * 20 * 4
        assert (contract.contract_amount, contract.project_name) == (900.0, "X")

    def test_salary_inputs_are_required(self):
        with pytest.raises(TypeError):
            FullTimeEmployeeEntity("F1", "A", "B", "a@b.c", "Ops", 4000.0)
        with pytest.raises(TypeError):
            PartTimeEmployeeEntity("P1", "A", "B", "a@b.c", "Ops", 15.0)

    def test_entities_import_in_a_fresh_interpreter(self):
        code = (
            "from payroll_ledger.business_logic.entities import FullTimeEmployeeEntity, PartTimeEmployeeEntity\n"
            "FullTimeEmployeeEntity('F1', 'A', 'B', 'a@b.c', 'Ops', 4000.0, 500.0)\n"
            "PartTimeEmployeeEntity('P1', 'A', 'B', 'a@b.c', 'Ops', 15.0, 25.0)\n"
        )
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        result = subprocess.run([sys.executable, "-c", code], cwd=project_root, capture_output=True, text=True)
        assert result.returncode == 0, result.stderr
