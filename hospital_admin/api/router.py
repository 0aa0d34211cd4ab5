import json
from urllib.parse import quote
from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import UploadFile
from hospital_admin.api.routing import FilePayload, RouteTable, Unrouted
from hospital_admin.core.errors import InvalidInput
from hospital_admin.modules.auth.router import router as auth_router
from hospital_admin.modules.hospitals.router import router as hospitals_router
from hospital_admin.modules.aggregation.router import router as metrics_router
from hospital_admin.modules.patients.router import router as patients_router
from hospital_admin.modules.health_records.router import router as health_records_router
from hospital_admin.modules.billing.router import router as billing_router
from hospital_admin.modules.staff.router import router as staff_router
from hospital_admin.modules.staff_roles.router import router as staff_roles_router
from hospital_admin.modules.staff_documents.router import router as staff_documents_router
from hospital_admin.modules.staff_updates.router import router as staff_updates_router
from hospital_admin.modules.payroll.router import router as payroll_router
from hospital_admin.modules.appointments.router import router as appointments_router
from hospital_admin.modules.templates.router import router as templates_router
from hospital_admin.modules.notifications.router import router as notifications_router

GROUPS = (
    auth_router,
    hospitals_router,
    metrics_router,
    patients_router,
    health_records_router,
    billing_router,
    staff_router,
    staff_roles_router,
    staff_documents_router,
    staff_updates_router,
    payroll_router,
    appointments_router,
    templates_router,
    notifications_router,
)

def build_route_table() -> RouteTable:
    table = RouteTable()
    for group in GROUPS:
        table.include(group)
    return table

# ---- HTTP surface ----
api_router = APIRouter()

@api_router.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}

def content_disposition(filename: str) -> str:
    # headers are latin-1 on the wire; the UTF-8 name travels in filename* (RFC 5987)
    fallback = "".join(c if " " <= c <= "~" and c not in '"\\' else "_" for c in filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"

async def _read_body(request: Request):
    if request.headers.get("content-type", "").startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        body = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                content = await value.read()
                body[key] = {
                    "filename": value.filename,
                    "content_type": value.content_type or "application/octet-stream",
                    "size": len(content),
                    "content": content,
                }
            else:
                body[key] = value
        return body
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise InvalidInput("Request body must be JSON")

@api_router.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def dispatch(path: str, request: Request):
    body = await _read_body(request)
    result = await request.app.state.dispatcher.dispatch(request.method, "/" + path, dict(request.query_params), body)
    if isinstance(result, Unrouted):
        return JSONResponse(status_code=404, content={"error": "no handler"})
    if isinstance(result, FilePayload):
        return Response(
            content=result.content,
            media_type=result.media_type,
            headers={"Content-Disposition": content_disposition(result.filename)},
        )
    return JSONResponse(content=jsonable_encoder(result))
