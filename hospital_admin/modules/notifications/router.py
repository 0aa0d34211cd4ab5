from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.notifications.service import NotificationService

router = RouteGroup("/hospitals/{hospital_id}")

@router.get("/outbound-queue")
async def outbound_queue(req: Request, store: ResourceStore):
    return await NotificationService(store).outbound_queue(sort=req.arg("sort"))

@router.get("/notifications")
async def list_notifications(req: Request, store: ResourceStore):
    return await NotificationService(store).notifications(
        status=req.arg("status"),
        provider=req.arg("provider"),
        channel=req.arg("channel"),
        start=req.arg("start"),
        end=req.arg("end"),
        sort=req.arg("sort"),
    )
