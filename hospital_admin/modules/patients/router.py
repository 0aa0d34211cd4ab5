from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.errors import parse_payload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.patients.schemas import PatientCreate, PatientUpdate
from hospital_admin.modules.patients.service import PatientService

router = RouteGroup("/hospitals/{hospital_id}/patients")

def svc(store: ResourceStore) -> PatientService:
    return PatientService(store)

@router.get("")
async def list_patients(req: Request, store: ResourceStore):
    return await svc(store).list(
        search=req.arg("search"),
        page=req.int_arg("page"),
        page_size=req.int_arg("pageSize"),
        sort=req.arg("sort"),
    )

@router.post("")
async def create_patient(req: Request, store: ResourceStore):
    return await svc(store).create(parse_payload(PatientCreate, req.body))

@router.get("/{patient_id}")
async def get_patient(req: Request, store: ResourceStore):
    return await svc(store).get(req.params["patient_id"])

@router.update("/{patient_id}")
async def update_patient(req: Request, store: ResourceStore):
    return await svc(store).update(req.params["patient_id"], parse_payload(PatientUpdate, req.body))
