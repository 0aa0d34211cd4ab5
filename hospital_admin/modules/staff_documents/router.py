from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.uploads import read_upload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.staff_documents.service import StaffDocumentService

router = RouteGroup("/hospitals/{hospital_id}/staff/{staff_id}/documents")

def svc(store: ResourceStore) -> StaffDocumentService:
    return StaffDocumentService(store)

@router.get("")
async def list_documents(req: Request, store: ResourceStore):
    return await svc(store).list(req.params["staff_id"])

@router.post("")
async def upload_document(req: Request, store: ResourceStore):
    body = req.body if isinstance(req.body, dict) else {}
    return await svc(store).upload(
        req.params["staff_id"],
        read_upload(body, "document"),
        document_type=body.get("document_type"),
        description=body.get("description"),
    )

@router.get("/{document_id}")
async def get_document(req: Request, store: ResourceStore):
    return await svc(store).get(req.params["staff_id"], req.params["document_id"])

@router.get("/{document_id}/download")
async def download_document(req: Request, store: ResourceStore):
    return await svc(store).download(req.params["staff_id"], req.params["document_id"])

@router.delete("/{document_id}")
async def delete_document(req: Request, store: ResourceStore):
    return await svc(store).delete(req.params["staff_id"], req.params["document_id"])
