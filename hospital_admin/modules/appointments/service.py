from hospital_admin.store import seed
from hospital_admin.store.collection import exact, matches, in_range
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.aggregation.metrics import involves
from hospital_admin.modules.appointments.schemas import AppointmentCreate, AppointmentUpdate

class AppointmentService:
    def __init__(self, store: ResourceStore):
        self.store = store

    def _patient_fields(self, patient_id: int) -> dict:
        patient = self.store.patients.get(patient_id)
        return {
            "patient_id": patient["id"],
            "patient_name": f"{patient['first_name']} {patient['last_name']}",
            "patient_mrn": patient["mrn"],
        }

    def _clinician_fields(self, clinician_ids: list[int]) -> dict:
        # unknown ids are dropped; the names follow whatever is left
        found = [c for c in (self.store.clinicians.find(i) for i in clinician_ids) if c]
        primary = found[0] if found else None
        return {
            "clinician_id": primary["id"] if primary else 0,
            "clinician_name": primary["name"] if primary else "Unknown",
            "clinician_ids": clinician_ids or None,
            "clinician_names": [c["name"] for c in found] or None,
        }

    async def list(self, status: str | None = None, clinician_id: int | None = None,
                   start: str | None = None, end: str | None = None, sort: str | None = None) -> list[dict]:
        await self.store.delay(500)
        filters = []
        if status:
            filters.append(exact("status", status))
        if clinician_id is not None:
            filters.append(matches(f"clinician={clinician_id}", lambda a: involves(a, clinician_id)))
        if start or end:
            filters.append(in_range("appointment_date", start, end))
        return self.store.appointments.list(filters, sort=sort)

    async def get(self, appointment_id) -> dict:
        await self.store.delay(400)
        return self.store.appointments.get(appointment_id)

    async def create(self, payload: AppointmentCreate) -> dict:
        await self.store.delay(600)
        ids = payload.clinician_ids or ([payload.clinician_id] if payload.clinician_id else [])
        record = {
            "appointment_number": seed.appointment_number(self.store.rng),
            **self._patient_fields(payload.patient_id),
            **self._clinician_fields(ids),
            "appointment_date": payload.appointment_date,
            "appointment_time": payload.appointment_time,
            "status": "scheduled",
            "reason": payload.reason,
            "created_at": self.store.now_iso(),
        }
        obj = self.store.appointments.create(record)
        return {"id": obj["id"]}

    async def update(self, appointment_id, payload: AppointmentUpdate) -> dict:
        await self.store.delay(500)
        changes = payload.model_dump(exclude_unset=True)
        if "patient_id" in changes and changes["patient_id"] is not None:
            changes.update(self._patient_fields(changes["patient_id"]))
        if changes.get("clinician_ids") is not None:
            changes.update(self._clinician_fields(changes["clinician_ids"]))
        elif changes.get("clinician_id") is not None:
            changes.update(self._clinician_fields([changes["clinician_id"]]))
        async with self.store.locks.hold("appointment", self.store.appointments.key(appointment_id)):
            self.store.appointments.update(appointment_id, changes)
        return {"ok": True}
