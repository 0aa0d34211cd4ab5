import pytest

from hospital_admin.core.errors import InvalidInput, NotFound
from hospital_admin.modules.aggregation.payroll import net_salary, payroll, tax_deductions_label
from hospital_admin.modules.payroll.schemas import SalaryStructureIn
from hospital_admin.modules.payroll.service import SalaryService, validate_tax_policy
from hospital_admin.modules.staff.service import StaffService


def taxes(*pcts):
    return [{"name": f"T{i}", "percentage": p} for i, p in enumerate(pcts)]


def test_net_salary_subtracts_active_taxes():
    assert net_salary(10000, taxes(10, 5, 0)) == 8500
    assert net_salary(0, taxes(15, 15, 15)) == 0


def test_net_salary_is_never_negative():
    for base in (0, 1, 999.99, 120000):
        for pcts in ((5, 5), (15, 15, 15), (5, 10, 15), (100, 50)):
            net = net_salary(base, taxes(*pcts))
            assert net >= 0
            assert net == max(0, base - sum(base * p / 100 for p in pcts))


def test_tax_policy_bounds(settings):
    validate_tax_policy(taxes(5, 15), settings)
    validate_tax_policy(taxes(5, 10, 15, 0), settings)
    with pytest.raises(InvalidInput):
        validate_tax_policy(taxes(10), settings)
    with pytest.raises(InvalidInput):
        validate_tax_policy(taxes(5, 5, 5, 5), settings)
    with pytest.raises(InvalidInput):
        validate_tax_policy(taxes(4, 10), settings)
    with pytest.raises(InvalidInput):
        validate_tax_policy(taxes(10, 16), settings)


def test_tax_policy_is_configurable(settings):
    relaxed = settings.model_copy(update={"TAX_MIN_ACTIVE": 1, "TAX_MAX_PERCENT": 30})
    validate_tax_policy(taxes(25), relaxed)


def test_deductions_label_lists_only_active_taxes():
    assert tax_deductions_label(taxes(10, 0, 5)) == "T0: 10%, T2: 5%"
    assert tax_deductions_label(taxes(0)) == "None"


async def test_unsaved_structure_defaults_to_payroll_salary(store):
    structure = await SalaryService(store).get(1)
    assert structure["baseSalary"] == 180000
    assert structure["netSalary"] == 180000
    assert structure["updatedAt"] is None
    assert all(t["percentage"] == 0 for t in structure["taxTypes"])


async def test_save_structure_flows_into_payroll_and_employment(store, overlay_port):
    svc = SalaryService(store)
    payload = SalaryStructureIn(baseSalary=10000, taxTypes=[
        {"id": "vat", "name": "VAT", "percentage": 10},
        {"id": "medicare", "name": "Medicare", "percentage": 5},
        {"id": "income-tax", "name": "Income Tax", "percentage": 0},
    ])
    out = await svc.save(2, payload)
    assert out["salaryStructure"]["netSalary"] == 8500
    assert overlay_port.data["staff:2:salary"]["netSalary"] == 8500
    assert (await svc.get(2))["updatedAt"] == "2024-03-15T10:30:00+00:00"

    row = next(r for r in await payroll(store) if r["id"] == 2)
    assert row["salary"] == 10000
    assert row["netSalary"] == 8500
    assert row["taxDeductions"] == "VAT: 10%, Medicare: 5%"

    employment = await StaffService(store).employment_financial(2)
    assert employment["salaryAndBenefits"]["netSalary"] == "$8,500 / Month"


async def test_save_rejects_policy_violation_without_writing(store, overlay_port):
    payload = SalaryStructureIn(baseSalary=10000, taxTypes=[{"name": "VAT", "percentage": 20}])
    with pytest.raises(InvalidInput):
        await SalaryService(store).save(2, payload)
    assert "staff:2:salary" not in overlay_port.data


async def test_salary_for_unknown_staff(store):
    with pytest.raises(NotFound):
        await SalaryService(store).get(99)


def test_base_salary_must_be_positive():
    with pytest.raises(ValueError):
        SalaryStructureIn(baseSalary=0)
