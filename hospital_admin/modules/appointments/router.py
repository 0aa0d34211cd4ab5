from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.errors import parse_payload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.appointments.schemas import AppointmentCreate, AppointmentUpdate
from hospital_admin.modules.appointments.service import AppointmentService

router = RouteGroup("/hospitals/{hospital_id}/appointments")

def svc(store: ResourceStore) -> AppointmentService:
    return AppointmentService(store)

@router.get("")
async def list_appointments(req: Request, store: ResourceStore):
    return await svc(store).list(
        status=req.arg("status"),
        clinician_id=req.int_arg("clinicianId"),
        start=req.arg("start"),
        end=req.arg("end"),
        sort=req.arg("sort"),
    )

@router.post("")
async def create_appointment(req: Request, store: ResourceStore):
    return await svc(store).create(parse_payload(AppointmentCreate, req.body))

@router.get("/{appointment_id}")
async def get_appointment(req: Request, store: ResourceStore):
    return await svc(store).get(req.params["appointment_id"])

@router.update("/{appointment_id}")
async def update_appointment(req: Request, store: ResourceStore):
    return await svc(store).update(req.params["appointment_id"], parse_payload(AppointmentUpdate, req.body))
