import logging
from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.errors import parse_payload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.auth.schemas import LoginIn

log = logging.getLogger(__name__)

router = RouteGroup("/auth")

# There is no authentication behind these; every session is the demo hospital admin.

@router.post("/login")
async def login(req: Request, store: ResourceStore):
    payload = parse_payload(LoginIn, req.body)
    await store.delay(300)
    log.info(f"Login for {payload.email}")
    return {"ok": True, "role": "hospital_admin", "hospital_id": store.settings.DEFAULT_HOSPITAL_ID}

@router.post("/logout")
async def logout(req: Request, store: ResourceStore):
    await store.delay(100)
    return {"ok": True}

@router.post("/refresh")
async def refresh(req: Request, store: ResourceStore):
    await store.delay(100)
    return {"ok": True}
