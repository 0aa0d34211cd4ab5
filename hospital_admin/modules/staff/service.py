import logging
import uuid
from hospital_admin.core.errors import InvalidInput
from hospital_admin.core.uploads import UploadedFile
from hospital_admin.store import seed
from hospital_admin.store.collection import search as search_filter, exact
from hospital_admin.store.overlay import overlay_key
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.aggregation import staff_activity
from hospital_admin.modules.aggregation.payroll import salary_display, salary_key
from hospital_admin.modules.staff.schemas import StaffCreate, StaffUpdate

log = logging.getLogger(__name__)

def employment_key(staff_id) -> str:
    return overlay_key("staff", staff_id, "employment")

def medical_key(staff_id) -> str:
    return overlay_key("staff", staff_id, "medical")

class StaffService:
    def __init__(self, store: ResourceStore):
        self.store = store

    # ---- Core record ----
    async def list(self, search: str | None = None, role: str | None = None, sort: str | None = None) -> list[dict]:
        await self.store.delay(400)
        filters = []
        if role:
            filters.append(exact("role", role))
        if search:
            filters.append(search_filter(("name", "email", "phone", "specialty"), search))
        return self.store.clinicians.list(filters, sort=sort)

    async def get(self, staff_id) -> dict:
        await self.store.delay(300)
        return self.store.clinicians.get(staff_id)

    async def create(self, payload: StaffCreate) -> dict:
        await self.store.delay(600)
        obj = self.store.clinicians.create({**payload.model_dump(), "created_at": self.store.now_iso()})
        log.info(f"Staff created id={obj['id']} role={obj['role']}")
        return {"id": obj["id"]}

    async def update(self, staff_id, payload: StaffUpdate) -> dict:
        await self.store.delay(500)
        async with self.store.locks.hold("staff", self.store.clinicians.key(staff_id)):
            self.store.clinicians.update(staff_id, payload.model_dump(exclude_unset=True))
        return {"ok": True}

    async def upload_profile_picture(self, staff_id, file: UploadedFile) -> dict:
        await self.store.delay(600)
        self.store.clinicians.get(staff_id)
        if not file.content_type.startswith("image/"):
            raise InvalidInput("File must be an image")
        limit = self.store.settings.PROFILE_PICTURE_MAX_BYTES
        if file.size > limit:
            raise InvalidInput(f"File size must be less than {limit // (1024 * 1024)}MB")
        picture = file.data_url()
        async with self.store.locks.hold("staff", self.store.clinicians.key(staff_id)):
            self.store.clinicians.update(staff_id, {"profile_picture": picture})
        return {"ok": True, "profile_picture": picture}

    # ---- Owned sub-records ----
    async def employment_financial(self, staff_id) -> dict:
        await self.store.delay(300)
        staff = self.store.clinicians.get(staff_id)
        data = await self.store.overlay.read(employment_key(staff["id"]), seed.employment(staff["id"]))
        structure = await self.store.overlay.read(salary_key(staff["id"]))
        if structure:
            data["salaryAndBenefits"] = {**data.get("salaryAndBenefits", {}), **salary_display(structure)}
        return data

    async def medical_info(self, staff_id) -> dict:
        await self.store.delay(300)
        staff = self.store.clinicians.get(staff_id)
        return await self.store.overlay.read(medical_key(staff["id"]), seed.medical(staff["id"]))

    async def verify_medical_password(self, password: str) -> dict:
        await self.store.delay(500)
        # no authentication behind this; any non-empty password unlocks the view
        return {"ok": True, "token": f"medical_{uuid.uuid4().hex}"}

    # ---- Derived views ----
    async def patients_reports(self, staff_id, timeframe: str | None = None) -> dict:
        await self.store.delay(300)
        if timeframe not in (None, "weekly", "monthly"):
            raise InvalidInput("timeframe must be weekly or monthly")
        staff = self.store.clinicians.get(staff_id)
        return staff_activity.patients_reports(self.store, staff, timeframe or "weekly")

    async def reports(self, staff_id) -> dict:
        await self.store.delay(300)
        return staff_activity.reports(self.store, self.store.clinicians.get(staff_id))

    async def all_patients(self, staff_id) -> dict:
        await self.store.delay(300)
        return staff_activity.all_patients(self.store, self.store.clinicians.get(staff_id))
