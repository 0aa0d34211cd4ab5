from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.errors import parse_payload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.templates.schemas import TemplateCreate, TemplateUpdate
from hospital_admin.modules.templates.service import TemplateService

router = RouteGroup("/hospitals/{hospital_id}/templates")

def svc(store: ResourceStore) -> TemplateService:
    return TemplateService(store)

@router.get("")
async def list_templates(req: Request, store: ResourceStore):
    return await svc(store).list(channel=req.arg("channel"), sort=req.arg("sort"))

@router.post("")
async def create_template(req: Request, store: ResourceStore):
    return await svc(store).create(parse_payload(TemplateCreate, req.body))

@router.update("/{template_id}")
async def update_template(req: Request, store: ResourceStore):
    return await svc(store).update(req.params["template_id"], parse_payload(TemplateUpdate, req.body))

@router.delete("/{template_id}")
async def delete_template(req: Request, store: ResourceStore):
    return await svc(store).delete(req.params["template_id"])
