from hospital_admin.store.collection import Collection, exact, in_range
from hospital_admin.store.store import ResourceStore

def _day(value) -> str:
    return str(value)[:10]

class NotificationService:
    def __init__(self, store: ResourceStore):
        self.store = store

    def _enrich(self, item: dict) -> dict:
        # appointment-derived fields always reflect the live appointment
        appt = self.store.appointments.find(item.get("appointment_id"))
        if not appt:
            return item
        return {
            **item,
            "appointment_number": appt.get("appointment_number") or item.get("appointment_number"),
            "patient_name": appt.get("patient_name") or item.get("patient_name"),
            "clinician_name": appt.get("clinician_name") or item.get("clinician_name"),
        }

    def _listing(self, collection: Collection, filters=(), sort: str | None = None) -> list[dict]:
        return [self._enrich(i) for i in collection.list(filters, sort=sort)]

    async def outbound_queue(self, sort: str | None = None) -> list[dict]:
        await self.store.delay(400)
        return self._listing(self.store.outbound_queue, sort=sort)

    async def notifications(self, status: str | None = None, provider: str | None = None,
                            channel: str | None = None, start: str | None = None,
                            end: str | None = None, sort: str | None = None) -> list[dict]:
        await self.store.delay(400)
        filters = [exact(field, value) for field, value in
                   (("status", status), ("provider", provider), ("channel", channel)) if value]
        if start or end:
            # day granularity; an end date includes the whole day
            filters.append(in_range("created_at", start, end, key=_day))
        return self._listing(self.store.notifications, filters, sort)
