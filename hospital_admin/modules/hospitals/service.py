import logging
from hospital_admin.core.errors import NotFound
from hospital_admin.store import seed
from hospital_admin.store.overlay import overlay_key
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.hospitals.schemas import HospitalUpdate

log = logging.getLogger(__name__)

def profile_key(hospital_id) -> str:
    return overlay_key("hospital", hospital_id, "profile")

class HospitalService:
    def __init__(self, store: ResourceStore):
        self.store = store

    async def _read(self, hospital_id) -> dict | None:
        record = self.store.hospitals.find(hospital_id)
        profile = await self.store.overlay.read(profile_key(hospital_id))
        if record is None and profile is None:
            return None
        return {**(record or {"id": str(hospital_id)}), **(profile or {})}

    async def me(self, hospital_id: str | None = None) -> dict:
        await self.store.delay(400)
        hid = hospital_id or self.store.settings.DEFAULT_HOSPITAL_ID
        found = await self._read(hid)
        if found is None:
            # an unknown hospital still gets a profile to render
            return {**seed.hospitals(self.store.clock())[0], "id": hid}
        return found

    async def get(self, hospital_id) -> dict:
        await self.store.delay(400)
        found = await self._read(hospital_id)
        if found is None:
            raise NotFound(f"hospital {hospital_id!r} not found")
        return found

    async def update(self, hospital_id, payload: HospitalUpdate) -> dict:
        await self.store.delay(600)
        changes = payload.model_dump(exclude_unset=True)
        if await self._read(hospital_id) is None:
            raise NotFound(f"hospital {hospital_id!r} not found")
        async with self.store.locks.hold("hospital", hospital_id):
            await self.store.overlay.merge(profile_key(hospital_id), changes)
            if hospital_id in self.store.hospitals:
                self.store.hospitals.update(hospital_id, changes)
        log.info(f"Hospital {hospital_id} updated fields={sorted(changes)}")
        return {"ok": True}
