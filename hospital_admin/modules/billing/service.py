import copy
import logging
from hospital_admin.core.errors import InvalidInput, NotFound
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.aggregation import finance, payroll, receivables
from hospital_admin.modules.billing import ledger
from hospital_admin.modules.billing.schemas import TransactionCreate, PayableCreate, ReceivableCreate

log = logging.getLogger(__name__)

TABS = ("overview", "accounts-payable", "accounts-receivable", "payroll", "financial-reports", "taxes")

def _bill_id(bill_id) -> int:
    try:
        return int(bill_id)
    except (TypeError, ValueError):
        raise NotFound(f"bill {bill_id!r} not found")

def _find_bill(billing: dict, bill_id) -> dict:
    wanted = _bill_id(bill_id)
    for bill in billing["outstandingBills"]:
        if bill["id"] == wanted:
            return bill
    raise NotFound(f"bill {bill_id!r} not found")

class BillingService:
    def __init__(self, store: ResourceStore):
        self.store = store

    # ---- Per-patient billing ----
    async def patient_billing(self, patient_id) -> dict:
        await self.store.delay(300)
        return copy.deepcopy(ledger.patient_billing(self.store, patient_id))

    async def mark_paid(self, patient_id, bill_id) -> dict:
        await self.store.delay(400)
        billing = ledger.patient_billing(self.store, patient_id)
        async with self.store.locks.hold("billing", self.store.patients.key(patient_id)):
            bill = _find_bill(billing, bill_id)
            payment = {
                "id": ledger.next_row_id(billing["paymentHistory"]),
                "date": self.store.today().isoformat(),
                "service": bill.get("service") or "Medical Services",
                "amount": bill["amount"],
                "status": "paid",
                "invoice_number": bill["invoice_number"],
            }
            billing["paymentHistory"].insert(0, payment)
            billing["outstandingBills"] = [b for b in billing["outstandingBills"] if b["id"] != bill["id"]]
        log.info(f"Bill {bill['invoice_number']} paid for patient {patient_id}")
        await self.store.publish("BILL_PAID", patient_id, {"invoice_number": bill["invoice_number"], "amount": bill["amount"]})
        return {"ok": True}

    async def send_reminder(self, patient_id, bill_id) -> dict:
        await self.store.delay(400)
        bill = _find_bill(ledger.patient_billing(self.store, patient_id), bill_id)
        await self.store.publish(
            "BILL_REMINDER_REQUESTED", patient_id,
            {"invoice_number": bill["invoice_number"], "amount": bill["amount"], "due_date": bill["due_date"]},
        )
        return {"ok": True}

    async def create_transaction(self, patient_id, payload: TransactionCreate) -> dict:
        await self.store.delay(500)
        billing = ledger.patient_billing(self.store, patient_id)
        async with self.store.locks.hold("billing", self.store.patients.key(patient_id)):
            payment = {"id": ledger.next_row_id(billing["paymentHistory"]), **payload.model_dump()}
            billing["paymentHistory"].insert(0, payment)
        return {"ok": True, "payment": copy.deepcopy(payment)}

    # ---- Hospital ledgers ----
    async def add_payable(self, hospital_id, payload: PayableCreate) -> dict:
        await self.store.delay(500)
        async with self.store.locks.hold("ledger", hospital_id, "payable"):
            items = await ledger.payables(self.store, hospital_id)
            item = {"id": ledger.next_row_id(items), **payload.model_dump()}
            await self.store.overlay.write(ledger.payable_key(hospital_id), {"items": [*items, item]})
        return {"ok": True, "item": item}

    async def mark_payable_paid(self, hospital_id, item_id) -> dict:
        await self.store.delay(400)
        wanted = _bill_id(item_id)
        async with self.store.locks.hold("ledger", hospital_id, "payable"):
            items = await ledger.payables(self.store, hospital_id)
            if not any(i["id"] == wanted for i in items):
                raise NotFound(f"payable {item_id!r} not found")
            items = [{**i, "status": "paid"} if i["id"] == wanted else i for i in items]
            await self.store.overlay.write(ledger.payable_key(hospital_id), {"items": items})
        return {"ok": True}

    async def add_receivable(self, hospital_id, payload: ReceivableCreate) -> dict:
        await self.store.delay(500)
        async with self.store.locks.hold("ledger", hospital_id, "receivable"):
            items = await ledger.manual_receivables(self.store, hospital_id)
            item = {"id": ledger.next_row_id(items), **payload.model_dump()}
            await self.store.overlay.write(ledger.receivable_key(hospital_id), {"items": [*items, item]})
        return {"ok": True, "item": item}

    # ---- Dashboard tabs ----
    async def billings(self, hospital_id, tab: str = "overview", period: str = "monthly") -> dict:
        await self.store.delay(500)
        if tab == "overview":
            return {"overview": await finance.overview(self.store, hospital_id, period)}
        if tab == "accounts-payable":
            return {"accountsPayable": await ledger.payables(self.store, hospital_id)}
        if tab == "accounts-receivable":
            return {"accountsReceivable": await receivables.accounts_receivable(self.store, hospital_id)}
        if tab == "payroll":
            return {"payroll": await payroll.payroll(self.store)}
        if tab == "financial-reports":
            return {"financialReports": finance.financial_reports(self.store.today())}
        if tab == "taxes":
            return {"taxes": await finance.taxes(self.store)}
        raise InvalidInput(f"tab must be one of {', '.join(TABS)}")
