import pytest

from hospital_admin.core.errors import OverlayWriteError
from hospital_admin.platform.adapters.overlay_memory import MemoryDurableOverlay
from hospital_admin.platform.adapters.overlay_sql import SqlDurableOverlay
from hospital_admin.store.overlay import DurableOverlay, overlay_key
from hospital_admin.modules.billing.service import BillingService
from hospital_admin.modules.hospitals.schemas import HospitalUpdate
from hospital_admin.modules.hospitals.service import HospitalService
from hospital_admin.modules.patients.schemas import PatientUpdate
from hospital_admin.modules.patients.service import PatientService
from hospital_admin.modules.payroll.schemas import SalaryStructureIn
from hospital_admin.modules.payroll.service import SalaryService
from hospital_admin.modules.staff.schemas import StaffUpdate
from hospital_admin.modules.staff.service import StaffService
from hospital_admin.modules.staff_updates.service import StaffUpdateService


class BrokenPort(MemoryDurableOverlay):
    async def put(self, key, value):
        raise RuntimeError("disk full")

    async def delete(self, key):
        raise RuntimeError("disk full")


def test_overlay_key_layout():
    assert overlay_key("staff", 3, "salary") == "staff:3:salary"


async def test_write_goes_to_durable_then_memory():
    port = MemoryDurableOverlay()
    overlay = DurableOverlay(port)
    await overlay.write("staff:1:salary", {"baseSalary": 100})
    assert port.data["staff:1:salary"] == {"baseSalary": 100}
    assert overlay.memory["staff:1:salary"] == {"baseSalary": 100}


async def test_read_prefers_durable_then_memory_then_default():
    port = MemoryDurableOverlay()
    overlay = DurableOverlay(port)
    assert await overlay.read("k", {"v": "default"}) == {"v": "default"}
    assert await overlay.read("k") is None
    overlay.memory["k"] = {"v": "memory"}
    assert await overlay.read("k", {"v": "default"}) == {"v": "memory"}
    port.data["k"] = {"v": "durable"}
    assert await overlay.read("k") == {"v": "durable"}


async def test_failed_durable_write_leaves_memory_untouched():
    overlay = DurableOverlay(BrokenPort())
    overlay.memory["k"] = {"v": 1}
    with pytest.raises(OverlayWriteError):
        await overlay.write("k", {"v": 2})
    assert overlay.memory["k"] == {"v": 1}
    with pytest.raises(OverlayWriteError):
        await overlay.merge("other", {"v": 3})
    assert "other" not in overlay.memory


async def test_merge_is_shallow_over_default():
    overlay = DurableOverlay(MemoryDurableOverlay())
    default = {"bankAccount": {"bankName": "A", "accountNumber": "1"}, "promotions": []}
    merged = await overlay.merge("staff:1:employment", {"bankAccount": {"bankName": "B"}}, default)
    assert merged == {"bankAccount": {"bankName": "B"}, "promotions": []}


async def test_remove_reports_existence_and_keys_lists_prefix():
    overlay = DurableOverlay(MemoryDurableOverlay())
    await overlay.write("staff:1:salary", {"a": 1})
    await overlay.write("staff:2:salary", {"a": 2})
    await overlay.write("billing:1:payable", {"items": []})
    assert await overlay.keys("staff:") == ["staff:1:salary", "staff:2:salary"]
    assert await overlay.remove("staff:1:salary") is True
    assert await overlay.remove("staff:1:salary") is False
    assert await overlay.read("staff:1:salary") is None


async def test_draft_survives_restart_on_sqlite(make_store, tmp_path):
    dsn = f"sqlite+aiosqlite:///{tmp_path / 'overlay.db'}"

    first = make_store(overlay_port=SqlDurableOverlay(dsn))
    await first.open()
    await StaffUpdateService(first).save("1", 2, 3, {"overview": {"name": "Dr. Michael B. Brown"}})
    await first.close()

    second = make_store(overlay_port=SqlDurableOverlay(dsn))
    await second.open()
    try:
        draft = await StaffUpdateService(second).load(2)
    finally:
        await second.close()
    assert draft["currentStep"] == 3
    assert draft["data"] == {"overview": {"name": "Dr. Michael B. Brown"}}


async def test_restart_keeps_overlay_and_reseeds_memory_tier(make_store, tmp_path):
    dsn = f"sqlite+aiosqlite:///{tmp_path / 'overlay.db'}"
    salary = SalaryStructureIn(baseSalary=10000, taxTypes=[
        {"id": "vat", "name": "VAT", "percentage": 10},
        {"id": "medicare", "name": "Medicare", "percentage": 5},
    ])

    first = make_store(overlay_port=SqlDurableOverlay(dsn))
    await first.open()
    try:
        await SalaryService(first).save(2, salary)
        await PatientService(first).update(1, PatientUpdate(blood_type="AB-"))
        await HospitalService(first).update("1", HospitalUpdate(name="North Valley Medical Centre"))
        await StaffService(first).update(2, StaffUpdate(name="Dr. Emily R. Carter"))
        await BillingService(first).mark_paid(1, 1)
        assert first.clinicians.get(2)["name"] == "Dr. Emily R. Carter"
    finally:
        await first.close()

    second = make_store(overlay_port=SqlDurableOverlay(dsn))
    await second.open()
    try:
        structure = await SalaryService(second).get(2)
        patient = await PatientService(second).get(1)
        hospital = await HospitalService(second).get("1")
        staff = await StaffService(second).get(2)
        billing = await BillingService(second).patient_billing(1)
    finally:
        await second.close()

    assert structure["netSalary"] == 8500
    assert structure["updatedAt"] == "2024-03-15T10:30:00+00:00"
    assert patient["blood_type"] == "AB-"
    assert patient["first_name"] == "John"
    assert hospital["name"] == "North Valley Medical Centre"
    # core records and billing live in memory and come back from the seed
    assert staff["name"] == "Dr. Emily Carter"
    assert "INV-00123" in [b["invoice_number"] for b in billing["outstandingBills"]]
