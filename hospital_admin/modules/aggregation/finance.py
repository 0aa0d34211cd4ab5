"""Billing dashboard tabs computed from payment histories, receivables and salary structures."""
import logging
from collections import defaultdict
from datetime import date, timedelta
from hospital_admin.core.errors import InvalidInput
from hospital_admin.modules.aggregation.payroll import active_taxes, primary_specialty, salary_key, DEPARTMENTS, DEFAULT_DEPARTMENT
from hospital_admin.modules.aggregation.receivables import accounts_receivable
from hospital_admin.modules.billing import ledger
from hospital_admin.modules.patients.service import extended_key
from hospital_admin.store import seed
from hospital_admin.store.store import ResourceStore

log = logging.getLogger(__name__)

PERIODS = ("daily", "weekly", "monthly", "yearly")

def _short(d: date) -> str:
    return f"{d:%b} {d.day}, {d.year}"

def _month_back(d: date, n: int) -> date:
    months = d.year * 12 + d.month - 1 - n
    return date(months // 12, months % 12 + 1, 1)

def revenue_buckets(today: date, period: str) -> list[tuple[str, date, date]]:
    """(label, first day, last day) for each bucket, oldest first."""
    if period == "daily":
        return [(f"{d:%b} {d.day}", d, d) for d in (today - timedelta(days=i) for i in range(6, -1, -1))]
    if period == "weekly":
        out = []
        for i in range(7, -1, -1):
            end = today - timedelta(days=7 * i)
            out.append((f"Week {8 - i}", end - timedelta(days=6), end))
        return out
    if period == "monthly":
        out = []
        for i in range(11, -1, -1):
            start = _month_back(today, i)
            end = _month_back(today, i - 1) - timedelta(days=1)
            out.append((f"{start:%b %Y}", start, end))
        return out
    if period == "yearly":
        return [(str(y), date(y, 1, 1), date(y, 12, 31)) for y in range(today.year - 4, today.year + 1)]
    raise InvalidInput(f"period must be one of {', '.join(PERIODS)}")

def _payment_day(p: dict) -> date | None:
    try:
        return date.fromisoformat(str(p.get("date"))[:10])
    except ValueError:
        return None

def _within(d: date | None, start: date, end: date) -> bool:
    return d is not None and start <= d <= end

async def overview(store: ResourceStore, hospital_id, period: str = "monthly") -> dict:
    buckets = revenue_buckets(store.today(), period)
    payments: list[tuple[dict, dict]] = []
    for patient in store.patients.all():
        try:
            billing = ledger.patient_billing(store, patient["id"])
        except Exception:
            log.warning(f"Skipping payments for patient {patient['id']}", exc_info=True)
            continue
        payments.extend((patient, p) for p in billing.get("paymentHistory", []) if p.get("status") == "paid")

    earnings = sum(p["amount"] for _, p in payments)
    receivable = sum(r["amount_due"] for r in await accounts_receivable(store, hospital_id) if r["status"] != "paid")

    chart = []
    for label, start, end in buckets:
        amount = sum(p["amount"] for _, p in payments if _within(_payment_day(p), start, end))
        chart.append({"date": label, "amount": round(amount, 2)})

    # attribute each patient's payments to the department of their assigned clinician
    by_department: dict[str, float] = defaultdict(float)
    for patient, p in payments:
        extended = await store.overlay.read(extended_key(patient["id"]), {})
        clinician_id = extended.get("assigned_clinician_id", seed.patient_extended(patient["id"])["assigned_clinician_id"])
        clinician = store.clinicians.find(clinician_id)
        specialty = primary_specialty(clinician.get("specialty")) if clinician else None
        by_department[DEPARTMENTS.get(specialty) or specialty or DEFAULT_DEPARTMENT] += p["amount"]
    top = sorted(by_department.items(), key=lambda kv: kv[1], reverse=True)[:3]

    return {
        "totalEarnings": round(earnings, 2),
        "totalRevenue": round(earnings + receivable, 2),
        "accountsReceivable": round(receivable, 2),
        "revenueChart": chart,
        "topContributors": [{"name": name, "amount": round(amount, 2)} for name, amount in top],
    }

async def taxes(store: ResourceStore) -> dict:
    totals: dict[str, float] = defaultdict(float)
    for staff in store.clinicians.all():
        structure = await store.overlay.read(salary_key(staff["id"]))
        if not structure:
            continue
        base = structure["baseSalary"]
        for t in active_taxes(structure.get("taxTypes", [])):
            totals[t["name"]] += base * t["percentage"] / 100
    return {
        "byType": {name: round(amount, 2) for name, amount in totals.items()},
        "total": round(sum(totals.values()), 2),
    }

def financial_reports(today: date) -> dict:
    quarter = (today.month - 1) // 3 + 1
    last_q, last_q_year = (quarter - 1, today.year) if quarter > 1 else (4, today.year - 1)
    last_month = _month_back(today, 1)
    return {
        "availableReports": [
            {"id": "monthly-current", "name": "Monthly Financial Report", "period": f"{today:%B %Y}",
             "generatedDate": _short(today), "size": "2.4 MB"},
            {"id": "monthly-last", "name": "Monthly Financial Report", "period": f"{last_month:%B %Y}",
             "generatedDate": _short(last_month.replace(day=15)), "size": "2.1 MB"},
            {"id": "quarterly-current", "name": "Quarterly Financial Report", "period": f"Q{quarter} {today.year}",
             "generatedDate": _short(today.replace(day=1)), "size": "5.8 MB"},
            {"id": "quarterly-last", "name": "Quarterly Financial Report", "period": f"Q{last_q} {last_q_year}",
             "generatedDate": _short(_month_back(today, 3)), "size": "5.5 MB"},
            {"id": "annual-current", "name": "Annual Financial Report", "period": str(today.year),
             "generatedDate": _short(date(today.year, 1, 1)), "size": "18.2 MB"},
        ],
    }
