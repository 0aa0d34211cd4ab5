from hospital_admin.api.routing import Request, RouteGroup
from hospital_admin.core.errors import parse_payload
from hospital_admin.store.store import ResourceStore
from hospital_admin.modules.billing.schemas import TransactionCreate, PayableCreate, ReceivableCreate
from hospital_admin.modules.billing.service import BillingService

router = RouteGroup("/hospitals/{hospital_id}")

def svc(store: ResourceStore) -> BillingService:
    return BillingService(store)

@router.get("/billings")
async def billings(req: Request, store: ResourceStore):
    return await svc(store).billings(req.params["hospital_id"], req.arg("tab", "overview"), req.arg("period", "monthly"))

@router.post("/billings/accounts-payable")
async def add_payable(req: Request, store: ResourceStore):
    return await svc(store).add_payable(req.params["hospital_id"], parse_payload(PayableCreate, req.body))

@router.post("/billings/accounts-payable/{item_id}/mark-paid")
async def mark_payable_paid(req: Request, store: ResourceStore):
    return await svc(store).mark_payable_paid(req.params["hospital_id"], req.params["item_id"])

@router.post("/billings/accounts-receivable")
async def add_receivable(req: Request, store: ResourceStore):
    return await svc(store).add_receivable(req.params["hospital_id"], parse_payload(ReceivableCreate, req.body))

@router.get("/patients/{patient_id}/billing")
async def patient_billing(req: Request, store: ResourceStore):
    return await svc(store).patient_billing(req.params["patient_id"])

@router.post("/patients/{patient_id}/billing/transactions")
async def create_transaction(req: Request, store: ResourceStore):
    return await svc(store).create_transaction(req.params["patient_id"], parse_payload(TransactionCreate, req.body))

@router.post("/patients/{patient_id}/billing/{bill_id}/mark-paid")
async def mark_paid(req: Request, store: ResourceStore):
    return await svc(store).mark_paid(req.params["patient_id"], req.params["bill_id"])

@router.post("/patients/{patient_id}/billing/{bill_id}/send-reminder")
async def send_reminder(req: Request, store: ResourceStore):
    return await svc(store).send_reminder(req.params["patient_id"], req.params["bill_id"])
