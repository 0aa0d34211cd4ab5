import pytest

from hospital_admin.core.errors import InvalidInput, NotFound
from hospital_admin.modules.aggregation import metrics
from hospital_admin.modules.appointments.schemas import AppointmentCreate, AppointmentUpdate
from hospital_admin.modules.appointments.service import AppointmentService
from hospital_admin.modules.hospitals.schemas import HospitalUpdate
from hospital_admin.modules.hospitals.service import HospitalService, profile_key
from hospital_admin.modules.notifications.service import NotificationService
from hospital_admin.modules.patients.schemas import PatientUpdate
from hospital_admin.modules.patients.service import PatientService
from hospital_admin.modules.templates.schemas import TemplateUpdate
from hospital_admin.modules.templates.service import TemplateService


async def test_create_appointment_drops_unknown_clinicians(store):
    svc = AppointmentService(store)
    out = await svc.create(AppointmentCreate(
        patient_id=2, clinician_ids=[2, 99], appointment_date="2024-03-20", appointment_time="09:30",
    ))
    appt = await svc.get(out["id"])
    assert appt["status"] == "scheduled"
    assert appt["patient_name"] == "Jane Smith"
    assert appt["clinician_id"] == 2
    assert appt["clinician_names"] == ["Dr. Emily Carter"]
    assert appt["appointment_number"].startswith("#")


async def test_appointment_for_unknown_patient_is_rejected(store):
    svc = AppointmentService(store)
    before = len(store.appointments)
    with pytest.raises(NotFound):
        await svc.create(AppointmentCreate(
            patient_id=999, clinician_id=2, appointment_date="2024-03-20", appointment_time="09:30",
        ))
    assert len(store.appointments) == before
    appt = store.appointments.all()[0]
    with pytest.raises(NotFound):
        await svc.update(appt["id"], AppointmentUpdate(patient_id=999))
    assert (await svc.get(appt["id"]))["patient_name"] == appt["patient_name"]


async def test_list_appointments_by_clinician_and_date(store):
    svc = AppointmentService(store)
    out = await svc.create(AppointmentCreate(
        patient_id=1, clinician_id=5, appointment_date="2030-01-02", appointment_time="08:00",
    ))
    rows = await svc.list(clinician_id=5, start="2030-01-01", end="2030-01-31")
    assert [r["id"] for r in rows] == [out["id"]]


async def test_notifications_follow_live_appointment(store):
    first = store.notifications.all()[0]
    await AppointmentService(store).update(first["appointment_id"], AppointmentUpdate(patient_id=5))
    rows = await NotificationService(store).notifications()
    assert rows[0]["patient_name"] == "David Brown"


async def test_notification_filters(store):
    svc = NotificationService(store)
    assert len(await svc.notifications()) == 42
    failed = await svc.notifications(status="failed")
    assert len(failed) == 8
    assert all(n["status"] == "failed" for n in failed)
    today = await svc.notifications(start="2024-03-15", end="2024-03-15")
    assert len(today) == 6
    assert len(await svc.outbound_queue()) == 10


async def test_template_update_refreshes_timestamp(store, clock):
    svc = TemplateService(store)
    before = (await svc.list())[0]["updated_at"]
    clock.advance(minutes=5)
    out = await svc.update(1, TemplateUpdate(is_active=False))
    assert out["updated_at"] == "2024-03-15T10:35:00+00:00"
    assert out["updated_at"] != before
    assert store.templates.get(1)["is_active"] is False
    with pytest.raises(NotFound):
        await svc.update(99, TemplateUpdate(name="x"))


async def test_template_channel_filter(store):
    rows = await TemplateService(store).list(channel="email")
    assert [r["id"] for r in rows] == [1, 3]


async def test_hospital_profile(store, overlay_port):
    svc = HospitalService(store)
    assert (await svc.me())["name"] == "North Valley General Hospital"
    await svc.update("1", HospitalUpdate(name="North Valley Medical Centre"))
    assert (await svc.get("1"))["name"] == "North Valley Medical Centre"
    assert overlay_port.data[profile_key("1")] == {"name": "North Valley Medical Centre"}

    fallback = await svc.me("77")
    assert fallback["id"] == "77"
    with pytest.raises(NotFound):
        await svc.get("77")


async def test_dashboard_metrics(store):
    await PatientService(store).update(1, PatientUpdate(contact_preferences={"email": False, "sms": False, "voice": False}))
    out = await metrics.dashboard(store, "1")
    assert len(out["sevenDayTrend"]) == 7
    assert out["optOutRate"] == 20.0
    assert out["templateCoverage"] == {"email": 100, "sms": 100, "voice": 0, "overall": 67}
    assert sum(s["count"] for s in out["byStatus"]) == out["totalAppointments"]
    assert len(out["upcomingAppointments"]) <= 5
    with pytest.raises(InvalidInput):
        await metrics.dashboard(store, "1", start="not-a-date")
