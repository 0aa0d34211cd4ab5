import logging
from hospital_admin.core.errors import InvalidInput
from hospital_admin.store import seed
from hospital_admin.store.overlay import overlay_key
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.staff.service import employment_key, medical_key
from hospital_admin.modules.staff_documents.service import documents_for, new_document_id
from hospital_admin.modules.staff_updates.schemas import StaffUpdateData, FIRST_STEP, LAST_STEP

log = logging.getLogger(__name__)

def draft_key(staff_id) -> str:
    return overlay_key("staff", staff_id, "update-draft")

def _overview_changes(section) -> dict:
    changes = section.model_dump(exclude_unset=True)
    kin_fields = {k: changes.pop(f"next_of_kin_{k}") for k in ("name", "relationship") if f"next_of_kin_{k}" in changes}
    if kin_fields:
        changes["next_of_kin"] = kin_fields
    return changes

class StaffUpdateService:
    """
    Resumable staff-information wizard.

    NoDraft -> InProgress(step) on save; InProgress -> Completed on finalize;
    InProgress -> Abandoned on clear. One draft per staff member, kept in the
    durable overlay so a half-filled wizard survives a restart.
    """

    def __init__(self, store: ResourceStore):
        self.store = store

    async def save(self, hospital_id, staff_id, step: int, data: dict) -> dict:
        await self.store.delay(300)
        if not FIRST_STEP <= step <= LAST_STEP:
            raise InvalidInput(f"currentStep must be between {FIRST_STEP} and {LAST_STEP}")
        sid = self.store.clinicians.key(staff_id)
        key = draft_key(sid)
        async with self.store.locks.hold("staff", sid, "draft"):
            current = await self.store.overlay.read(key) or {}
            draft = {
                "staffId": str(sid),
                "hospitalId": str(hospital_id),
                "currentStep": step,
                "data": {**current.get("data", {}), **data},
                "lastSaved": self.store.now_iso(),
            }
            await self.store.overlay.write(key, draft)
        return {"ok": True, "draft": draft}

    async def load(self, staff_id) -> dict | None:
        await self.store.delay(200)
        return await self.store.overlay.read(draft_key(self.store.clinicians.key(staff_id)))

    async def clear(self, staff_id) -> dict:
        await self.store.delay(200)
        sid = self.store.clinicians.key(staff_id)
        async with self.store.locks.hold("staff", sid, "draft"):
            await self.store.overlay.remove(draft_key(sid))
        return {"ok": True}

    async def finalize(self, hospital_id, staff_id, payload: StaffUpdateData) -> dict:
        await self.store.delay(800)
        async with self.store.locks.hold("staff", self.store.clinicians.key(staff_id)):
            # NotFound here leaves the draft in place
            staff = self.store.clinicians.get(staff_id)
            sid = staff["id"]
            if payload.overview:
                self.store.clinicians.update(sid, _overview_changes(payload.overview))
            if payload.employment:
                await self.store.overlay.merge(
                    employment_key(sid), payload.employment.model_dump(exclude_unset=True), seed.employment(sid)
                )
            if payload.medical:
                await self.store.overlay.merge(
                    medical_key(sid), payload.medical.model_dump(exclude_unset=True), seed.medical(sid)
                )
            if payload.documents:
                now = self.store.now_iso()
                documents_for(self.store, sid).extend(
                    {**d.model_dump(), "id": new_document_id(), "uploadedAt": now, "uploadedBy": "Current User"}
                    for d in payload.documents
                )
            async with self.store.locks.hold("staff", sid, "draft"):
                await self.store.overlay.remove(draft_key(sid))
        log.info(f"Staff update completed for staff {sid}")
        await self.store.publish("STAFF_UPDATE_COMPLETED", sid, {"hospital_id": str(hospital_id)})
        return {"ok": True}
