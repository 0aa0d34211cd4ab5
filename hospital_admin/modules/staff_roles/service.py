from hospital_admin.core.errors import InvalidInput
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.aggregation.roles import with_staff_counts, staff_count
from hospital_admin.modules.staff_roles.schemas import StaffRoleCreate, StaffRoleUpdate

class StaffRoleService:
    def __init__(self, store: ResourceStore):
        self.store = store

    async def list(self) -> list[dict]:
        await self.store.delay(400)
        return with_staff_counts(self.store.staff_roles.all(), self.store.clinicians.all())

    async def create(self, payload: StaffRoleCreate) -> dict:
        await self.store.delay(600)
        obj = self.store.staff_roles.create({**payload.model_dump(), "created_at": self.store.now_iso()})
        return {"id": obj["id"]}

    async def update(self, role_id, payload: StaffRoleUpdate) -> dict:
        await self.store.delay(500)
        async with self.store.locks.hold("staff-role", role_id):
            self.store.staff_roles.update(role_id, payload.model_dump(exclude_unset=True))
        return {"ok": True}

    async def delete(self, role_id) -> dict:
        await self.store.delay(500)
        async with self.store.locks.hold("staff-role", role_id):
            role = self.store.staff_roles.get(role_id)
            assigned = staff_count(role["name"], self.store.clinicians.all())
            if assigned:
                raise InvalidInput(f"Cannot delete role. {assigned} staff member(s) are assigned to this role.")
            self.store.staff_roles.delete(role_id)
        return {"ok": True}
