from datetime import timedelta
from hospital_admin.store.overlay import overlay_key
from hospital_admin.store.store import ResourceStore

# ---- Lookup tables ----
DEPARTMENTS = {
    "Cardiology": "Cardiology",
    "Pediatrics": "Pediatrics",
    "Orthopedics": "Orthopedics",
    "Neurology": "Neurology",
    "General Practice": "General Medicine",
    "Emergency Medicine": "Emergency",
    "Surgery": "Surgery",
    "Radiology": "Radiology",
}
BASE_SALARIES = {
    "Cardiology": 180000,
    "Pediatrics": 160000,
    "Orthopedics": 190000,
    "Neurology": 175000,
    "General Practice": 140000,
    "Emergency Medicine": 165000,
    "Surgery": 200000,
    "Radiology": 170000,
}
DEFAULT_BASE_SALARY = 150000
DEFAULT_DEPARTMENT = "General Medicine"
BENEFITS = [["Health", "Dental", "Vision"], ["Health", "Dental"], ["Health", "Vision"]]
PAY_FREQUENCY = "Bi-weekly"

def salary_key(staff_id) -> str:
    return overlay_key("staff", staff_id, "salary")

def primary_specialty(specialty) -> str | None:
    if isinstance(specialty, list):
        return specialty[0] if specialty else None
    return specialty

def active_taxes(taxes: list[dict]) -> list[dict]:
    return [t for t in taxes if (t.get("percentage") or 0) > 0]

def net_salary(base: float, taxes: list[dict]) -> float:
    deductions = sum(base * t["percentage"] / 100 for t in active_taxes(taxes))
    return max(0.0, base - deductions)

def format_money(amount: float) -> str:
    return f"${amount:,.0f}"

def tax_deductions_label(taxes: list[dict]) -> str:
    parts = [f"{t['name']}: {t['percentage']:g}%" for t in active_taxes(taxes)]
    return ", ".join(parts) or "None"

def salary_display(structure: dict) -> dict:
    """Display fields a saved salary structure lays over employment data."""
    taxes = structure.get("taxTypes", [])
    return {
        "baseSalary": f"{format_money(structure['baseSalary'])} / Month",
        "netSalary": f"{format_money(structure['netSalary'])} / Month",
        "taxDeductions": tax_deductions_label(taxes),
    }

def payroll_row(staff: dict, index: int, today, structure: dict | None = None) -> dict:
    specialty = primary_specialty(staff.get("specialty"))
    department = DEPARTMENTS.get(specialty) or specialty or DEFAULT_DEPARTMENT
    salary = BASE_SALARIES.get(specialty, DEFAULT_BASE_SALARY) + (index % 3) * 5000
    last_paid = today - timedelta(days=index % 14)
    row = {
        "id": staff["id"],
        "name": staff["name"],
        "role": specialty or staff.get("role") or "Clinician",
        "department": department,
        "salary": salary,
        "benefits": BENEFITS[index % len(BENEFITS)],
        "pay_frequency": PAY_FREQUENCY,
        "last_paid_date": last_paid.strftime("%m/%d/%Y"),
    }
    if structure:
        row["salary"] = structure["baseSalary"]
        row["netSalary"] = structure["netSalary"]
        row["taxDeductions"] = tax_deductions_label(structure.get("taxTypes", []))
    return row

async def payroll(store: ResourceStore) -> list[dict]:
    today = store.today()
    rows = []
    for index, staff in enumerate(store.clinicians.all()):
        structure = await store.overlay.read(salary_key(staff["id"]))
        rows.append(payroll_row(staff, index, today, structure))
    return rows
