from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.errors import parse_payload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.hospitals.schemas import HospitalUpdate
from hospital_admin.modules.hospitals.service import HospitalService

router = RouteGroup("/hospitals")

def svc(store: ResourceStore) -> HospitalService:
    return HospitalService(store)

@router.get("/me")
async def current_hospital(req: Request, store: ResourceStore):
    return await svc(store).me(req.arg("id"))

@router.get("/{hospital_id}")
async def get_hospital(req: Request, store: ResourceStore):
    return await svc(store).get(req.params["hospital_id"])

@router.update("/{hospital_id}")
async def update_hospital(req: Request, store: ResourceStore):
    return await svc(store).update(req.params["hospital_id"], parse_payload(HospitalUpdate, req.body))
