from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.errors import parse_payload
from hospital_admin.core.uploads import read_upload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.staff.schemas import StaffCreate, StaffUpdate, PasswordCheck
from hospital_admin.modules.staff.service import StaffService

router = RouteGroup("/hospitals/{hospital_id}")

def svc(store: ResourceStore) -> StaffService:
    return StaffService(store)

# ---- Clinicians ----
@router.get("/clinicians")
async def list_clinicians(req: Request, store: ResourceStore):
    return await svc(store).list(search=req.arg("search"), role=req.arg("role"), sort=req.arg("sort"))

@router.post("/clinicians")
async def create_clinician(req: Request, store: ResourceStore):
    return await svc(store).create(parse_payload(StaffCreate, req.body))

@router.get("/clinicians/{staff_id}")
async def get_clinician(req: Request, store: ResourceStore):
    return await svc(store).get(req.params["staff_id"])

@router.update("/clinicians/{staff_id}")
async def update_clinician(req: Request, store: ResourceStore):
    return await svc(store).update(req.params["staff_id"], parse_payload(StaffUpdate, req.body))

@router.post("/clinicians/{staff_id}/profile-picture")
async def upload_profile_picture(req: Request, store: ResourceStore):
    return await svc(store).upload_profile_picture(req.params["staff_id"], read_upload(req.body, "profile_picture"))

# ---- Staff profile tabs ----
@router.post("/staff/medical-info/verify-password")
async def verify_medical_password(req: Request, store: ResourceStore):
    return await svc(store).verify_medical_password(parse_payload(PasswordCheck, req.body).password)

@router.get("/staff/{staff_id}/employment-financial")
async def employment_financial(req: Request, store: ResourceStore):
    return await svc(store).employment_financial(req.params["staff_id"])

@router.get("/staff/{staff_id}/medical-info")
async def medical_info(req: Request, store: ResourceStore):
    return await svc(store).medical_info(req.params["staff_id"])

@router.get("/staff/{staff_id}/patients-reports")
async def patients_reports(req: Request, store: ResourceStore):
    return await svc(store).patients_reports(req.params["staff_id"], req.arg("timeframe"))

@router.get("/staff/{staff_id}/reports")
async def reports(req: Request, store: ResourceStore):
    return await svc(store).reports(req.params["staff_id"])

@router.get("/staff/{staff_id}/all-patients")
async def all_patients(req: Request, store: ResourceStore):
    return await svc(store).all_patients(req.params["staff_id"])
