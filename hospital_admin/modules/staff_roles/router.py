from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.errors import parse_payload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.staff_roles.schemas import StaffRoleCreate, StaffRoleUpdate
from hospital_admin.modules.staff_roles.service import StaffRoleService

router = RouteGroup("/hospitals/{hospital_id}/staff-roles")

def svc(store: ResourceStore) -> StaffRoleService:
    return StaffRoleService(store)

@router.get("")
async def list_roles(req: Request, store: ResourceStore):
    return await svc(store).list()

@router.post("")
async def create_role(req: Request, store: ResourceStore):
    return await svc(store).create(parse_payload(StaffRoleCreate, req.body))

@router.update("/{role_id}")
async def update_role(req: Request, store: ResourceStore):
    return await svc(store).update(req.params["role_id"], parse_payload(StaffRoleUpdate, req.body))

@router.delete("/{role_id}")
async def delete_role(req: Request, store: ResourceStore):
    return await svc(store).delete(req.params["role_id"])
