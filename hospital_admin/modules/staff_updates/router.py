from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.errors import parse_payload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.staff_updates.schemas import DraftSave, StaffUpdateData
from hospital_admin.modules.staff_updates.service import StaffUpdateService

router = RouteGroup("/hospitals/{hospital_id}/staff/{staff_id}")

def svc(store: ResourceStore) -> StaffUpdateService:
    return StaffUpdateService(store)

@router.get("/update-draft")
async def load_draft(req: Request, store: ResourceStore):
    return await svc(store).load(req.params["staff_id"])

@router.post("/update-draft")
async def save_draft(req: Request, store: ResourceStore):
    payload = parse_payload(DraftSave, req.body)
    return await svc(store).save(req.params["hospital_id"], req.params["staff_id"], payload.currentStep, payload.draft)

@router.delete("/update-draft")
async def clear_draft(req: Request, store: ResourceStore):
    return await svc(store).clear(req.params["staff_id"])

@router.post("/update-complete")
async def complete_update(req: Request, store: ResourceStore):
    return await svc(store).finalize(
        req.params["hospital_id"], req.params["staff_id"], parse_payload(StaffUpdateData, req.body)
    )
