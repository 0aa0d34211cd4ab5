from hospital_admin.core.errors import NotFound
from hospital_admin.store import seed
from hospital_admin.store.overlay import overlay_key
from hospital_admin.store.store import ResourceStore

def payable_key(hospital_id) -> str:
    return overlay_key("billing", hospital_id, "payable")

def receivable_key(hospital_id) -> str:
    return overlay_key("billing", hospital_id, "receivable")

def patient_billing(store: ResourceStore, patient_id) -> dict:
    """
    Live (not copied) billing record of one patient, created with the default
    bills on first access. Callers mutating it must hold ("billing", id).
    """
    patient = store.patients.find(patient_id)
    if patient is None:
        raise NotFound(f"patient {patient_id!r} not found")
    pid = patient["id"]
    if pid not in store.patient_billing:
        store.patient_billing[pid] = seed.patient_billing()
    return store.patient_billing[pid]

async def payables(store: ResourceStore, hospital_id) -> list[dict]:
    stored = await store.overlay.read(payable_key(hospital_id))
    if stored is None:
        return seed.accounts_payable(store.clock())
    return stored.get("items", [])

async def manual_receivables(store: ResourceStore, hospital_id) -> list[dict]:
    stored = await store.overlay.read(receivable_key(hospital_id))
    return stored.get("items", []) if stored else []

def next_row_id(rows: list[dict]) -> int:
    return max((int(r.get("id") or 0) for r in rows), default=0) + 1
