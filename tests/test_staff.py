import pytest

from hospital_admin.core.errors import InvalidInput, NotFound
from hospital_admin.core.uploads import UploadedFile
from hospital_admin.modules.staff.schemas import StaffCreate, StaffUpdate
from hospital_admin.modules.staff.service import StaffService
from hospital_admin.modules.staff_documents.service import StaffDocumentService
from hospital_admin.modules.staff_roles.schemas import StaffRoleCreate
from hospital_admin.modules.staff_roles.service import StaffRoleService


def counts(roles):
    return {r["name"]: r["staffCount"] for r in roles}


async def test_role_counts_track_the_roster(store):
    roles = StaffRoleService(store)
    staff = StaffService(store)
    assert counts(await roles.list())["Clinician"] == 5

    created = await staff.create(StaffCreate(name="Nina Okafor", role="Nurse"))
    assert counts(await roles.list())["Nurse"] == 1

    await staff.update(created["id"], StaffUpdate(role="Security"))
    after = counts(await roles.list())
    assert after["Nurse"] == 0
    assert after["Security"] == 1


async def test_role_with_staff_cannot_be_deleted(store):
    roles = StaffRoleService(store)
    staff = StaffService(store)
    created = await staff.create(StaffCreate(name="Tunde Ade", role="Receptionist"))
    with pytest.raises(InvalidInput):
        await roles.delete("5")
    await staff.update(created["id"], StaffUpdate(role="Support Staff"))
    await roles.delete("5")
    assert "Receptionist" not in counts(await roles.list())


async def test_new_role_starts_empty(store):
    roles = StaffRoleService(store)
    out = await roles.create(StaffRoleCreate(name="Pharmacist", permissions=["Inventory"]))
    assert out["id"] == "6"
    assert counts(await roles.list())["Pharmacist"] == 0


async def test_profile_picture_must_be_an_image(store):
    staff = StaffService(store)
    pdf = UploadedFile.model_validate({"filename": "cv.pdf", "content_type": "application/pdf", "content": b"%PDF"})
    with pytest.raises(InvalidInput):
        await staff.upload_profile_picture(1, pdf)

    png = UploadedFile.model_validate({"filename": "me.png", "type": "image/png", "content": b"\x89PNG"})
    out = await staff.upload_profile_picture(1, png)
    assert out["profile_picture"].startswith("data:image/png;base64,")
    assert store.clinicians.get(1)["profile_picture"] == out["profile_picture"]


async def test_profile_picture_size_limit(store, settings):
    store.settings = settings.model_copy(update={"PROFILE_PICTURE_MAX_BYTES": 2})
    big = UploadedFile.model_validate({"filename": "me.png", "content_type": "image/png", "content": b"1234"})
    with pytest.raises(InvalidInput):
        await StaffService(store).upload_profile_picture(1, big)


async def test_documents_upload_list_download_delete(store):
    docs = StaffDocumentService(store)
    listed = await docs.list(1)
    assert len(listed["documents"]) == 4

    upload = UploadedFile.model_validate({"name": "cert.pdf", "type": "application/pdf", "data": "JVBERi0xLjQ="})
    out = await docs.upload(1, upload, document_type="certification", description="BLS")
    assert out["document"]["fileSize"] == 8

    listed = await docs.list(1)
    assert listed["documents"][0]["fileName"] == "cert.pdf"
    assert listed["totalSize"] == 245760 + 512000 + 512000 + 1024000 + 8

    payload = await docs.download(1, out["document"]["id"])
    assert payload.media_type == "text/plain"
    assert b"Description: BLS" in payload.content

    await docs.delete(1, out["document"]["id"])
    with pytest.raises(NotFound):
        await docs.get(1, out["document"]["id"])


async def test_documents_for_unknown_staff(store):
    with pytest.raises(NotFound):
        await StaffDocumentService(store).list(404)


async def test_medical_info_and_password(store):
    staff = StaffService(store)
    info = await staff.medical_info(1)
    assert info["emergencyContact"]["name"] == "Sarah Jenkins"
    assert (await staff.verify_medical_password("anything"))["token"].startswith("medical_")


async def test_activity_views(store):
    staff = StaffService(store)
    mine = [a for a in store.appointments.all() if a["clinician_id"] == 1]

    listing = await staff.all_patients(1)
    assert listing["totalCount"] == 1
    assert listing["patients"][0]["name"] == "John Doe"
    assert listing["patients"][0]["totalAppointments"] == len(mine) == 5
    assert listing["patients"][0]["firstAppointment"] == "2024-03-10"

    weekly = await staff.patients_reports(1)
    assert weekly["totalPatientsAttended"] == 0
    assert weekly["activityReport"]["consultations"] == "0 consultations this week."
    assert weekly["activityReport"]["proceduresPerformed"] == "1 appointments booked this week."
    assert weekly["activityReport"]["keyObservations"] == "1 missed or cancelled appointments this week."
    assert [p["id"] for p in weekly["assignedPatients"]] == [1]

    # staff 2 saw Jane Smith yesterday
    other = await staff.patients_reports(2, "monthly")
    assert other["totalPatientsAttended"] == 1
    assert other["activityReport"]["consultations"] == "1 consultations this month."
    assert other["activityReport"]["proceduresPerformed"] == "1 appointments booked this month."

    report = await staff.reports(1)
    assert len(report["reports"]) == 2
    assert report["weeklySummary"]["tasksCompleted"] == 120
    assert report["reports"][0]["date"] == "2024-03-15"
    with pytest.raises(InvalidInput):
        await staff.patients_reports(1, "hourly")
