from hospital_admin.store.collection import exact
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.templates.schemas import TemplateCreate, TemplateUpdate

class TemplateService:
    def __init__(self, store: ResourceStore):
        self.store = store

    async def list(self, channel: str | None = None, sort: str | None = None) -> list[dict]:
        await self.store.delay(400)
        return self.store.templates.list([exact("channel", channel)] if channel else [], sort=sort)

    async def create(self, payload: TemplateCreate) -> dict:
        await self.store.delay(600)
        now = self.store.now_iso()
        obj = self.store.templates.create({**payload.model_dump(), "created_at": now, "updated_at": now})
        return {"id": obj["id"]}

    async def update(self, template_id, payload: TemplateUpdate) -> dict:
        await self.store.delay(500)
        changes = {**payload.model_dump(exclude_unset=True), "updated_at": self.store.now_iso()}
        async with self.store.locks.hold("template", self.store.templates.key(template_id)):
            obj = self.store.templates.update(template_id, changes)
        return {"ok": True, "updated_at": obj["updated_at"]}

    async def delete(self, template_id) -> dict:
        await self.store.delay(500)
        async with self.store.locks.hold("template", self.store.templates.key(template_id)):
            self.store.templates.delete(template_id)
        return {"ok": True}
