import logging
from hospital_admin.store import seed
from hospital_admin.store.collection import search as search_filter
from hospital_admin.store.overlay import overlay_key
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.patients.schemas import PatientCreate, PatientUpdate, CORE_FIELDS

log = logging.getLogger(__name__)

SEARCH_FIELDS = ("first_name", "last_name", "email", "mrn", "phone")

def extended_key(patient_id) -> str:
    return overlay_key("patient", patient_id, "extended")

class PatientService:
    def __init__(self, store: ResourceStore):
        self.store = store

    async def list(self, search: str | None = None, page: int | None = None,
                   page_size: int | None = None, sort: str | None = None) -> list[dict]:
        await self.store.delay(500)
        filters = [search_filter(SEARCH_FIELDS, search)] if search else []
        rows = self.store.patients.list(filters, sort=sort)
        if page is not None and page_size:
            start = max(page - 1, 0) * page_size
            rows = rows[start:start + page_size]
        return rows

    async def get(self, patient_id) -> dict:
        await self.store.delay(400)
        patient = self.store.patients.get(patient_id)
        extended = await self.store.overlay.read(extended_key(patient["id"]), {})
        out = {**patient, **seed.patient_extended(patient["id"]), **extended}
        clinician = self.store.clinicians.find(out.get("assigned_clinician_id"))
        out["assigned_clinician_name"] = clinician["name"] if clinician else None
        return out

    async def create(self, payload: PatientCreate) -> dict:
        await self.store.delay(600)
        data = payload.model_dump()
        now = self.store.now_iso()
        # the mrn counts prior patients, so it is computed inside the same synchronous create
        obj = self.store.patients.create(
            lambda new_id, prior: {**data, "mrn": f"MRN{prior + 1:03d}", "created_at": now}
        )
        log.info(f"Patient created id={obj['id']} mrn={obj['mrn']}")
        return {"id": obj["id"], "mrn": obj["mrn"]}

    async def update(self, patient_id, payload: PatientUpdate) -> dict:
        await self.store.delay(500)
        changes = payload.model_dump(exclude_unset=True)
        core = {k: v for k, v in changes.items() if k in CORE_FIELDS}
        extended = {k: v for k, v in changes.items() if k not in CORE_FIELDS}
        patient = self.store.patients.get(patient_id)
        async with self.store.locks.hold("patient", patient["id"]):
            if extended:
                await self.store.overlay.merge(extended_key(patient["id"]), extended)
            if core:
                self.store.patients.update(patient["id"], core)
        return {"ok": True}
