from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.aggregation import metrics

router = RouteGroup("/hospitals/{hospital_id}")

@router.get("/metrics")
async def dashboard_metrics(req: Request, store: ResourceStore):
    await store.delay(500)
    return await metrics.dashboard(store, req.params["hospital_id"], req.arg("start"), req.arg("end"))
