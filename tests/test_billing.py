from datetime import date

import pytest

from hospital_admin.core.errors import InvalidInput, NotFound
from hospital_admin.modules.aggregation import receivables
from hospital_admin.modules.aggregation.receivables import receivable_status
from hospital_admin.modules.billing import ledger
from hospital_admin.modules.billing.schemas import PayableCreate, ReceivableCreate, TransactionCreate
from hospital_admin.modules.billing.service import BillingService


async def test_mark_paid_moves_bill_to_head_of_history(store, bus):
    svc = BillingService(store)
    await svc.mark_paid(1, 1)

    billing = await svc.patient_billing(1)
    assert "INV-00123" not in [b["invoice_number"] for b in billing["outstandingBills"]]
    head = billing["paymentHistory"][0]
    assert head["invoice_number"] == "INV-00123"
    assert head["amount"] == 150.00
    assert head["status"] == "paid"
    assert head["date"] == "2024-03-15"
    assert bus.published[-1]["topic"] == "BILL_PAID"


async def test_mark_paid_unknown_bill_or_patient(store):
    svc = BillingService(store)
    with pytest.raises(NotFound):
        await svc.mark_paid(1, 99)
    with pytest.raises(NotFound):
        await svc.mark_paid(404, 1)


async def test_patient_billing_is_per_patient(store):
    svc = BillingService(store)
    await svc.mark_paid(1, 1)
    other = await svc.patient_billing(2)
    assert [b["invoice_number"] for b in other["outstandingBills"]] == ["INV-00123", "INV-00119"]


async def test_send_reminder_publishes(store, bus):
    await BillingService(store).send_reminder(3, 2)
    event = bus.published[-1]
    assert event["topic"] == "BILL_REMINDER_REQUESTED"
    assert event["key"] == "3"
    assert event["value"]["invoice_number"] == "INV-00119"


async def test_create_transaction_prepends_payment(store):
    svc = BillingService(store)
    out = await svc.create_transaction(
        1, TransactionCreate(service="MRI", amount=900, date="2024-03-14", invoice_number="INV-00200")
    )
    assert out["payment"]["id"] == 5
    billing = await svc.patient_billing(1)
    assert billing["paymentHistory"][0]["invoice_number"] == "INV-00200"


def test_receivable_status():
    today = date(2024, 3, 15)
    assert receivable_status({"due_date": "2024-03-20"}, today) == "pending"
    assert receivable_status({"due_date": "2024-03-01"}, today) == "overdue"
    assert receivable_status({"due_date": "2023-10-01"}, today) == "collection"
    assert receivable_status({"due_date": "2023-10-01", "status": "paid"}, today) == "paid"
    assert receivable_status({"due_date": "2024-03-01"}, today, collection_days=10) == "collection"


async def test_receivables_never_repeat_an_invoice_number(store):
    svc = BillingService(store)
    await svc.add_receivable("1", ReceivableCreate(
        patient_name="Walk-in", invoice_number="INV-00123", amount_due=10, due_date="2024-04-01",
    ))
    await svc.add_receivable("1", ReceivableCreate(
        patient_name="Walk-in", invoice_number="INV-09000", amount_due=40, due_date="2024-04-01",
    ))
    rows = await receivables.accounts_receivable(store, "1")
    numbers = [r["invoice_number"] for r in rows]
    assert len(numbers) == len(set(numbers))
    assert numbers == ["INV-00123", "INV-00119", "INV-09000"]
    assert rows[0]["source"] == "patient"
    assert rows[2] == {**rows[2], "source": "ledger", "status": "pending", "id": 3}


async def test_receivables_skip_patient_whose_billing_fails(store, monkeypatch):
    real = ledger.patient_billing

    def flaky(s, patient_id):
        if patient_id == 1:
            raise RuntimeError("corrupt record")
        return real(s, patient_id)

    monkeypatch.setattr(ledger, "patient_billing", flaky)
    rows = await receivables.accounts_receivable(store, "1")
    assert [r["patient_id"] for r in rows] == [2, 2]


async def test_receivables_follow_paid_bills(store):
    await BillingService(store).mark_paid(1, 1)
    rows = await receivables.accounts_receivable(store, "1")
    first = rows[0]
    # patient 1 no longer owes INV-00123; patient 1's other bill comes first
    assert first["invoice_number"] == "INV-00119"
    assert first["patient_id"] == 1


async def test_payables_ledger(store):
    svc = BillingService(store)
    seeded = (await svc.billings("1", "accounts-payable"))["accountsPayable"]
    out = await svc.add_payable("1", PayableCreate(vendor="MedSupply", amount=1200, due_date="2024-04-01"))
    assert out["item"]["id"] == len(seeded) + 1
    await svc.mark_payable_paid("1", out["item"]["id"])
    items = (await svc.billings("1", "accounts-payable"))["accountsPayable"]
    assert items[-1]["status"] == "paid"
    with pytest.raises(NotFound):
        await svc.mark_payable_paid("1", 999)


async def test_billing_tabs(store):
    svc = BillingService(store)
    overview = (await svc.billings("1", "overview", "weekly"))["overview"]
    assert len(overview["revenueChart"]) == 8
    assert overview["totalRevenue"] == overview["totalEarnings"] + overview["accountsReceivable"]
    reports = (await svc.billings("1", "financial-reports"))["financialReports"]
    assert reports["availableReports"][0]["period"] == "March 2024"
    assert (await svc.billings("1", "taxes"))["taxes"] == {"byType": {}, "total": 0}
    with pytest.raises(InvalidInput):
        await svc.billings("1", "nonsense")
    with pytest.raises(InvalidInput):
        await svc.billings("1", "overview", "hourly")
