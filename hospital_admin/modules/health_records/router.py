from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.uploads import read_upload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.health_records.service import HealthRecordService

router = RouteGroup("/hospitals/{hospital_id}/patients/{patient_id}/health-records")

def svc(store: ResourceStore) -> HealthRecordService:
    return HealthRecordService(store)

@router.get("")
async def get_health_records(req: Request, store: ResourceStore):
    return await svc(store).get(req.params["patient_id"])

@router.post("/upload")
async def upload_health_document(req: Request, store: ResourceStore):
    body = req.body if isinstance(req.body, dict) else {}
    return await svc(store).upload(req.params["patient_id"], read_upload(body, "document"), body.get("document_type"))

@router.get("/download")
async def download_health_report(req: Request, store: ResourceStore):
    return await svc(store).download_report(req.params["hospital_id"], req.params["patient_id"])
