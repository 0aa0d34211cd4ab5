from datetime import timedelta
from hospital_admin.modules.aggregation.metrics import involves
from hospital_admin.modules.aggregation.payroll import primary_specialty
from hospital_admin.store.store import ResourceStore

REPORT_CATALOGUES = {
    "receptionist": (
        [
            ("Daily Appointment Summary", "Daily Report", "Summary of appointments scheduled and completed today."),
            ("Patient Check-in Report", "Weekly Report", "Weekly summary of patient check-ins and wait times."),
            ("Phone Call Log", "Weekly Report", "Log of incoming and outgoing phone calls."),
        ],
        {"tasksCompleted": 450, "tasksCompletedLabel": "450 appointments scheduled this week",
         "keyMetrics": "Average wait time: 8 minutes", "highlights": "Maintained 98% appointment accuracy rate"},
    ),
    "security": (
        [
            ("Security Incident Report", "Incident Report", "Report of security incidents and responses."),
            ("Patrol Log", "Daily Report", "Daily patrol rounds and observations."),
            ("Access Control Log", "Weekly Report", "Weekly access control and visitor management summary."),
        ],
        {"tasksCompleted": 168, "tasksCompletedLabel": "168 patrol rounds completed this week",
         "keyMetrics": "Zero security incidents reported", "highlights": "100% facility coverage maintained"},
    ),
    "support": (
        [
            ("Maintenance Report", "Weekly Report", "Weekly maintenance and facility management summary."),
            ("Equipment Status", "Daily Report", "Status of hospital equipment and systems."),
            ("Resource Utilization", "Monthly Report", "Monthly resource utilization and efficiency report."),
        ],
        {"tasksCompleted": 85, "tasksCompletedLabel": "85 maintenance tasks completed this week",
         "keyMetrics": "Equipment uptime: 99.2%", "highlights": "Reduced maintenance response time by 20%"},
    ),
    "default": (
        [
            ("Activity Report", "Weekly Report", "Weekly activity and task completion summary."),
            ("Performance Summary", "Monthly Report", "Monthly performance and productivity summary."),
        ],
        {"tasksCompleted": 120, "tasksCompletedLabel": "120 tasks completed this week",
         "keyMetrics": "Average task completion time: 2.5 hours", "highlights": "Improved productivity by 12%"},
    ),
}

def _catalogue_for(role: str) -> str:
    role = role.lower()
    if "reception" in role:
        return "receptionist"
    for name in ("security", "support"):
        if name in role:
            return name
    return "default"

def _visits(store: ResourceStore, staff_id: int) -> dict[int, list[dict]]:
    """Appointments of one clinician grouped by patient, oldest first."""
    out: dict[int, list[dict]] = {}
    for a in store.appointments.all():
        if involves(a, staff_id):
            out.setdefault(a["patient_id"], []).append(a)
    for visits in out.values():
        visits.sort(key=lambda a: (a["appointment_date"], a["appointment_time"]))
    return out

def _patient_row(store: ResourceStore, patient_id: int, visits: list[dict]) -> dict:
    patient = store.patients.find(patient_id)
    name = f"{patient['first_name']} {patient['last_name']}" if patient else visits[-1].get("patient_name", "Unknown")
    return {
        "id": patient_id,
        "name": name,
        "mrn": patient["mrn"] if patient else visits[-1].get("patient_mrn"),
        "lastAppointment": visits[-1]["appointment_date"],
        "totalAppointments": len(visits),
        "firstAppointment": visits[0]["appointment_date"],
    }

def _window_counts(appts: list[dict], start, end) -> dict:
    window = [a for a in appts if start.isoformat() <= a["appointment_date"] <= end.isoformat()]
    return {
        "completed": sum(1 for a in window if a["status"] == "completed"),
        "booked": sum(1 for a in window if a["status"] in ("scheduled", "confirmed")),
        "missed": sum(1 for a in window if a["status"] in ("no-show", "cancelled")),
    }

def _activity_text(counts: dict, unit: str) -> dict:
    return {
        "consultations": f"{counts['completed']} consultations this {unit}.",
        "proceduresPerformed": f"{counts['booked']} appointments booked this {unit}.",
        "keyObservations": f"{counts['missed']} missed or cancelled appointments this {unit}.",
    }

def patients_reports(store: ResourceStore, staff: dict, timeframe: str = "weekly") -> dict:
    today = store.today()
    visits = _visits(store, staff["id"])
    rows = sorted(
        (_patient_row(store, pid, v) for pid, v in visits.items()),
        key=lambda r: r["lastAppointment"], reverse=True,
    )
    mine = [a for v in visits.values() for a in v]
    weekly = _activity_text(_window_counts(mine, today - timedelta(days=6), today), "week")
    monthly = _activity_text(_window_counts(mine, today - timedelta(days=29), today), "month")
    current = monthly if timeframe == "monthly" else weekly
    return {
        "assignedPatients": [
            {k: r[k] for k in ("id", "name", "mrn", "lastAppointment")} for r in rows
        ],
        "activityReport": {**current, "weekly": weekly, "monthly": monthly},
        "totalPatientsAttended": sum(1 for v in visits.values() if any(a["status"] == "completed" for a in v)),
        "dateJoined": staff.get("date_joined") or str(staff.get("created_at", ""))[:10],
        "summary": {
            "name": staff["name"],
            "specialty": primary_specialty(staff.get("specialty")) or "General",
            "description": f"{staff['name']} is a dedicated healthcare professional.",
        },
    }

def reports(store: ResourceStore, staff: dict) -> dict:
    role = staff.get("role") or "Staff"
    entries, weekly = REPORT_CATALOGUES[_catalogue_for(role)]
    today = store.today()
    return {
        "reports": [
            {"id": i, "title": title, "type": kind, "date": (today - timedelta(days=i - 1)).isoformat(), "description": desc}
            for i, (title, kind, desc) in enumerate(entries, start=1)
        ],
        "weeklySummary": dict(weekly),
        "summary": {
            "name": staff["name"],
            "role": role,
            "description": f"{staff['name']} is a dedicated {role} contributing to hospital operations.",
        },
    }

def all_patients(store: ResourceStore, staff: dict) -> dict:
    visits = _visits(store, staff["id"])
    rows = sorted(
        (_patient_row(store, pid, v) for pid, v in visits.items()),
        key=lambda r: r["lastAppointment"], reverse=True,
    )
    return {
        "patients": rows,
        "totalCount": len(rows),
        "staffInfo": {"name": staff["name"], "role": staff.get("role") or "Staff", "specialty": staff.get("specialty")},
    }
