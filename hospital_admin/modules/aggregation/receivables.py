import logging
from datetime import date
from hospital_admin.modules.billing import ledger
from hospital_admin.store.store import ResourceStore

log = logging.getLogger(__name__)

def _due(value) -> date:
    return date.fromisoformat(str(value)[:10])

def receivable_status(bill: dict, today: date, collection_days: int = 90) -> str:
    if bill.get("status") == "paid":
        return "paid"
    days_overdue = (today - _due(bill["due_date"])).days
    if days_overdue > collection_days:
        return "collection"
    if days_overdue > 0:
        return "overdue"
    return "pending"

async def accounts_receivable(store: ResourceStore, hospital_id) -> list[dict]:
    """
    Live outstanding bills of every patient, then the manual ledger, one row
    per invoice number. Recomputed on every call.
    """
    today = store.today()
    limit = store.settings.RECEIVABLE_COLLECTION_DAYS
    candidates: list[dict] = []

    for patient in store.patients.all():
        try:
            billing = ledger.patient_billing(store, patient["id"])
            rows = [
                {
                    "patient_id": patient["id"],
                    "patient_name": f"{patient['first_name']} {patient['last_name']}",
                    "invoice_number": bill["invoice_number"],
                    "service_rendered": bill.get("service") or "Unknown Service",
                    "amount_due": bill["amount"],
                    "due_date": bill["due_date"],
                    "status": receivable_status(bill, today, limit),
                    "source": "patient",
                }
                for bill in billing.get("outstandingBills", [])
            ]
        except Exception:
            log.warning(f"Skipping receivables for patient {patient['id']}", exc_info=True)
            continue
        candidates.extend(rows)

    for entry in await ledger.manual_receivables(store, hospital_id):
        try:
            status = receivable_status(entry, today, limit)
        except (KeyError, ValueError):
            log.warning(f"Manual receivable {entry.get('invoice_number')} has no usable due date")
            status = entry.get("status", "pending")
        candidates.append({**entry, "status": status, "source": "ledger"})

    out, seen = [], set()
    for row in candidates:
        if row["invoice_number"] in seen:
            continue
        seen.add(row["invoice_number"])
        out.append({**row, "id": len(out) + 1})
    return out
