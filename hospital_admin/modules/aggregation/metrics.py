from collections import Counter
from datetime import date, datetime, timedelta
from hospital_admin.core.errors import InvalidInput
from hospital_admin.modules.patients.service import extended_key
from hospital_admin.store.store import ResourceStore

STATUSES = ("scheduled", "confirmed", "completed", "cancelled", "no-show")
CHANNELS = ("email", "sms", "voice")

def _day(value) -> date:
    return date.fromisoformat(str(value)[:10])

def _parse_bound(value, default: datetime) -> datetime:
    if not value:
        return default
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise InvalidInput(f"Invalid date: {value}")

def involves(appt: dict, clinician_id: int) -> bool:
    return appt.get("clinician_id") == clinician_id or clinician_id in (appt.get("clinician_ids") or [])

async def dashboard(store: ResourceStore, hospital_id, start: str | None = None, end: str | None = None) -> dict:
    now = store.clock()
    today = now.date()
    lo = _parse_bound(start, now - timedelta(days=30))
    hi = _parse_bound(end, now)
    appts = store.appointments.all()
    in_range = [a for a in appts if lo.date() <= _day(a["appointment_date"]) <= hi.date()]
    week_start = today - timedelta(days=6)

    by_status = Counter(a["status"] for a in in_range)
    per_day = Counter(_day(a["appointment_date"]) for a in appts)
    notifications = store.notifications.all()

    breakdown = []
    for channel in CHANNELS:
        mine = [n for n in notifications if n["channel"] == channel]
        breakdown.append({
            "channel": channel,
            "sent": sum(1 for n in mine if n["status"] == "sent"),
            "failed": sum(1 for n in mine if n["status"] == "failed"),
        })

    upcoming = sorted(
        (a for a in appts if _day(a["appointment_date"]) >= today and a["status"] in ("scheduled", "confirmed")),
        key=lambda a: (a["appointment_date"], a["appointment_time"]),
    )[:5]

    opted_out = 0
    for p in store.patients.all():
        prefs = (await store.overlay.read(extended_key(p["id"]), {})).get("contact_preferences")
        if prefs and not any(prefs.values()):
            opted_out += 1
    patient_count = len(store.patients)

    active = {t["channel"] for t in store.templates.all() if t.get("is_active")}
    coverage = {c: 100 if c in active else 0 for c in CHANNELS}
    coverage["overall"] = round(100 * len(active & set(CHANNELS)) / len(CHANNELS))

    return {
        "range": {"start": lo.isoformat(), "end": hi.isoformat()},
        "totalAppointments": len(in_range),
        "appointmentsToday": per_day.get(today, 0),
        "noShowsThisWeek": sum(1 for a in appts if a["status"] == "no-show" and week_start <= _day(a["appointment_date"]) <= today),
        "remindersSentToday": sum(1 for n in notifications if n["status"] == "sent" and _day(n["created_at"]) == today),
        "optOutRate": round(100 * opted_out / patient_count, 1) if patient_count else 0.0,
        "byStatus": [{"status": s, "count": by_status.get(s, 0)} for s in STATUSES],
        "sevenDayTrend": [
            {"day": f"{d:%a}", "value": per_day.get(d, 0)}
            for d in (week_start + timedelta(days=i) for i in range(7))
        ],
        "notifBreakdown": breakdown,
        "upcomingAppointments": [
            {
                "id": a["id"],
                "patient_name": a["patient_name"],
                "appointment_date": a["appointment_date"],
                "appointment_time": a["appointment_time"],
                "clinician_name": a["clinician_name"],
            }
            for a in upcoming
        ],
        "templateCoverage": coverage,
    }
