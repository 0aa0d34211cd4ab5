import pytest

from hospital_admin.core.errors import NotFound
from hospital_admin.modules.patients.schemas import PatientCreate, PatientUpdate
from hospital_admin.modules.patients.service import PatientService, extended_key


async def test_mrn_counts_prior_patients(make_store):
    svc = PatientService(make_store(seed=False))
    first = await svc.create(PatientCreate(first_name="John", last_name="Doe"))
    second = await svc.create(PatientCreate(first_name="Jane", last_name="Roe"))
    assert first == {"id": 1, "mrn": "MRN001"}
    assert second == {"id": 2, "mrn": "MRN002"}


async def test_mrn_continues_after_seeded_patients(store):
    created = await PatientService(store).create(PatientCreate(first_name="Ola", last_name="Bello"))
    assert created["mrn"] == "MRN006"
    assert created["id"] == 6


async def test_get_merges_extended_defaults_and_clinician_name(store):
    patient = await PatientService(store).get(1)
    assert patient["mrn"] == "MRN001"
    assert patient["blood_type"] == "O+"
    assert patient["assigned_clinician_name"] == "Dr. Amelia Harper"


async def test_update_splits_core_and_extended_fields(store, overlay_port):
    svc = PatientService(store)
    await svc.update(2, PatientUpdate(last_name="Smith-Jones", blood_type="AB-", assigned_clinician_id=3))

    assert store.patients.get(2)["last_name"] == "Smith-Jones"
    assert "blood_type" not in store.patients.get(2)
    assert overlay_port.data[extended_key(2)] == {"blood_type": "AB-", "assigned_clinician_id": 3}

    patient = await svc.get(2)
    assert patient["blood_type"] == "AB-"
    assert patient["assigned_clinician_name"] == "Dr. Michael Brown"
    assert patient["city"] == "Healthville"


async def test_list_search_and_paging(store):
    svc = PatientService(store)
    assert [p["id"] for p in await svc.list(page=2, page_size=2)] == [3, 4]
    assert [p["first_name"] for p in await svc.list(search="MRN005")] == ["David"]
    assert [p["first_name"] for p in await svc.list(sort="-first_name")][0] == "Sarah"


async def test_unknown_patient(store):
    with pytest.raises(NotFound):
        await PatientService(store).get(404)
    with pytest.raises(NotFound):
        await PatientService(store).update(404, PatientUpdate(notes="x"))
