"""Demo records the store starts with when SEED_DEMO_DATA is on."""
import random
from datetime import datetime, timedelta, timezone

DAY = timedelta(days=1)

def _iso(dt: datetime) -> str:
    return dt.isoformat()

def appointment_number(rng: random.Random) -> str:
    return f"#{rng.randint(10000, 99999)}"

def hospitals(now: datetime) -> list[dict]:
    return [{
        "id": "1",
        "name": "North Valley General Hospital",
        "country": "USA",
        "timezone": "America/Los_Angeles",
        "created_at": _iso(now),
    }]

def patients(now: datetime) -> list[dict]:
    rows = [
        ("John", "Doe", "john.doe@example.com", "+2348012345678", "1985-05-15", 0),
        ("Jane", "Smith", "jane.smith@example.com", "+2348023456789", "1990-08-22", 0),
        ("Michael", "Johnson", "michael.j@example.com", "+2348034567890", "1978-12-10", 1),
        ("Sarah", "Williams", "sarah.w@example.com", "+2348045678901", "1992-03-25", 2),
        ("David", "Brown", "david.brown@example.com", "+2348056789012", "1988-07-18", 3),
    ]
    return [
        {
            "id": i,
            "first_name": first,
            "last_name": last,
            "email": email,
            "phone": phone,
            "mrn": f"MRN{i:03d}",
            "date_of_birth": dob,
            "created_at": _iso(now - age * DAY),
        }
        for i, (first, last, email, phone, dob, age) in enumerate(rows, start=1)
    ]

def staff_roles(now: datetime) -> list[dict]:
    rows = [
        ("Clinician", "Medical professionals providing patient care", ["Patient Management", "Appointments", "Medical Records"]),
        ("Nurse", "Nursing staff providing patient care and support", ["Patient Management", "Appointments", "Basic Reports"]),
        ("Support Staff", "Administrative and support personnel", ["Administrative Tasks", "Basic Reports"]),
        ("Security", "Security personnel maintaining hospital safety", ["Basic Reports"]),
        ("Receptionist", "Front desk staff managing appointments and check-ins", ["Appointments", "Patient Check-in", "Basic Reports"]),
    ]
    return [
        {"id": str(i), "name": name, "description": desc, "permissions": perms, "created_at": _iso(now)}
        for i, (name, desc, perms) in enumerate(rows, start=1)
    ]

def clinicians(now: datetime) -> list[dict]:
    harper = {
        "id": 1,
        "name": "Dr. Amelia Harper",
        "specialty": "Cardiology",
        "email": "amelia.harper@hospital.com",
        "phone": "+2348034567890",
        "role": "Clinician",
        "marital_status": "Single",
        "next_of_kin": {"name": "John Harper", "relationship": "Brother"},
        "home_address": "123 Wellness Ave, Meditown",
        "qualifications": "MD, Cardiology Fellowship",
        "date_joined": "2020-08-15",
        "created_at": _iso(now),
    }
    rows = [
        ("Dr. Emily Carter", "Cardiology", "emily.carter@hospital.com", "+2348034567890", 0),
        ("Dr. Michael Brown", "Pediatrics", "michael.brown@hospital.com", "+2348045678901", 0),
        ("Dr. Sarah Williams", "General Medicine", "sarah.williams@hospital.com", "+2348056789012", 1),
        ("Dr. James Wilson", "Orthopedics", "james.wilson@hospital.com", "+2348067890123", 2),
    ]
    others = [
        {
            "id": i,
            "name": name,
            "specialty": specialty,
            "email": email,
            "phone": phone,
            "role": "Clinician",
            "created_at": _iso(now - age * DAY),
        }
        for i, (name, specialty, email, phone, age) in enumerate(rows, start=2)
    ]
    return [harper, *others]

def appointments(now: datetime, pts: list[dict], docs: list[dict], rng: random.Random) -> list[dict]:
    out: list[dict] = []

    def add(patient: dict, clinician: dict, date: str, time: str, status: str, created: datetime):
        out.append({
            "id": len(out) + 1,
            "appointment_number": appointment_number(rng),
            "patient_id": patient["id"],
            "patient_name": f"{patient['first_name']} {patient['last_name']}",
            "patient_mrn": patient["mrn"],
            "clinician_id": clinician["id"],
            "clinician_name": clinician["name"],
            "appointment_date": date,
            "appointment_time": time,
            "status": status,
            "reason": "Regular checkup",
            "created_at": _iso(created),
        })

    add(pts[0], docs[0], "2024-10-18", "10:00", "confirmed", datetime(2024, 9, 15, tzinfo=timezone.utc))
    for i in range(5):
        day, hour = 15 + i, 9 + (i % 4) * 2
        add(pts[i % len(pts)], docs[i % len(docs)], f"2024-10-{day:02d}", f"{hour:02d}:00",
            "confirmed" if i == 0 else "scheduled", datetime(2024, 9, day - 3, tzinfo=timezone.utc))
    for i in range(8):
        day, hour = 1 + i, 9 + (i % 4) * 2
        past = datetime(2024, 11, day, tzinfo=timezone.utc) < now
        status = "completed" if past else ("confirmed" if i == 0 else "scheduled")
        add(pts[i % len(pts)], docs[i % len(docs)], f"2024-11-{day:02d}", f"{hour:02d}:00",
            status, datetime(2024, 10, max(day - 3, 1), tzinfo=timezone.utc))
    today = now.date().isoformat()
    for i in range(3):
        add(pts[i % len(pts)], docs[i % len(docs)], today, f"{9 + i * 2:02d}:00",
            "confirmed" if i == 0 else "scheduled", now - i * DAY)
    for i in range(1, 6):
        past = now - i * DAY
        add(pts[i % len(pts)], docs[i % len(docs)], past.date().isoformat(), "10:00",
            "completed" if i < 4 else "no-show", past)
    return out

def templates(now: datetime) -> list[dict]:
    return [
        {
            "id": 1, "name": "Appointment Reminder - Email", "channel": "email",
            "subject": "Appointment Reminder - {{hospital_name}}",
            "body_text": "Dear {{patient_first}}, your appointment with {{clinician_name}} is scheduled for {{start_time_local}}.",
            "is_active": True, "updated_at": _iso(now), "created_at": _iso(now - 30 * DAY),
        },
        {
            "id": 2, "name": "Appointment Reminder - SMS", "channel": "sms", "subject": None,
            "body_text": "Hi {{patient_first}}, reminder: appointment with {{clinician_name}} on {{start_time_local}} at {{hospital_name}}.",
            "is_active": True, "updated_at": _iso(now), "created_at": _iso(now - 25 * DAY),
        },
        {
            "id": 3, "name": "Appointment Confirmation - Email", "channel": "email",
            "subject": "Appointment Confirmed - {{hospital_name}}",
            "body_text": "Your appointment with {{clinician_name}} has been confirmed for {{start_time_local}}.",
            "is_active": True, "updated_at": _iso(now - 7 * DAY), "created_at": _iso(now - 20 * DAY),
        },
        {
            "id": 4, "name": "Appointment Reminder - Voice", "channel": "voice", "subject": None,
            "body_text": "Hello, this is a reminder from {{hospital_name}}. You have an appointment with {{clinician_name}} on {{start_time_local}}. Please call us if you need to reschedule.",
            "is_active": False, "updated_at": _iso(now - 14 * DAY), "created_at": _iso(now - 15 * DAY),
        },
    ]

PROVIDERS = ["Telus", "Gmail", "Twilio", "SendGrid"]
CHANNELS = ["email", "sms", "voice"]

def _message(i: int, appt: dict, status: str, attempts: int, retry_step: timedelta, created: datetime, now: datetime) -> dict:
    return {
        "id": i + 1,
        "appointment_id": appt["id"],
        "appointment_number": appt["appointment_number"],
        "patient_name": appt["patient_name"],
        "clinician_name": appt["clinician_name"],
        "channel": CHANNELS[i % 3],
        "provider": PROVIDERS[i % len(PROVIDERS)],
        "status": status,
        "attempts": attempts,
        "next_retry": _iso(now + (i + 1) * retry_step) if status in ("queued", "failed") else None,
        "created_at": _iso(created),
    }

def outbound_queue(now: datetime, appts: list[dict]) -> list[dict]:
    out = []
    for i in range(10):
        status = ["queued", "sent", "failed"][i % 3]
        attempts = {"failed": 3, "sent": 1}.get(status, 0)
        out.append(_message(i, appts[i % len(appts)], status, attempts, timedelta(minutes=5),
                            now - i * timedelta(minutes=10), now))
    return out

def notifications(now: datetime, appts: list[dict]) -> list[dict]:
    out = []
    for i in range(42):
        status = ["sent", "sent", "sent", "queued", "failed"][i % 5]
        attempts = {"failed": 2, "sent": 1}.get(status, 0)
        out.append(_message(i, appts[i % len(appts)], status, attempts, timedelta(minutes=30),
                            now - i * timedelta(hours=2), now))
    return out

def accounts_payable(now: datetime) -> list[dict]:
    return [
        {"id": 1, "vendor": "MedSupply Co.", "description": "Medical Supplies", "amount": 50000,
         "status": "pending", "category": "Supplies", "due_date": _iso(now + 7 * DAY)},
        {"id": 2, "vendor": "TechMaintenance Inc.", "description": "Equipment Maintenance", "amount": 25000,
         "status": "paid", "category": "Maintenance", "due_date": _iso(now - 5 * DAY)},
        {"id": 3, "vendor": "PowerGrid Utilities", "description": "Electricity Bill", "amount": 15000,
         "status": "pending", "category": "Utilities", "due_date": _iso(now + 14 * DAY)},
        {"id": 4, "vendor": "HealthGuard Insurance", "description": "Health Insurance Premium", "amount": 35000,
         "status": "paid", "category": "Insurance", "due_date": _iso(now - 10 * DAY)},
    ]

def patient_billing() -> dict:
    return {
        "outstandingBills": [
            {"id": 1, "invoice_number": "INV-00123", "due_date": "2023-10-25", "amount": 150.00,
             "status": "pending", "service": "Routine Check-up"},
            {"id": 2, "invoice_number": "INV-00119", "due_date": "2023-09-15", "amount": 75.00,
             "status": "overdue", "service": "Lab Work - Blood Panel"},
        ],
        "paymentHistory": [
            {"id": 1, "date": "2023-08-20", "service": "Cardiology Consultation", "amount": 250.00,
             "status": "paid", "invoice_number": "INV-00098"},
            {"id": 2, "date": "2023-07-15", "service": "Lab Work - Blood Panel", "amount": 120.00,
             "status": "paid", "invoice_number": "INV-00087"},
            {"id": 3, "date": "2023-06-01", "service": "Routine Check-up", "amount": 75.00,
             "status": "paid", "invoice_number": "INV-00076"},
            {"id": 4, "date": "2023-05-10", "service": "X-Ray", "amount": 180.00,
             "status": "paid", "invoice_number": "INV-00065"},
        ],
    }

def health_records() -> dict[int, dict]:
    return {
        1: {
            "medicalHistory": [
                {"id": "1", "record_type": "diagnosis", "title": "Annual Check-up",
                 "description": "Routine examination with Dr. Emily Carter.", "clinician_name": "Dr. Emily Carter",
                 "record_date": "2023-10-15",
                 "metadata": {"findings": ["Blood Pressure: 120/80 mmHg (Normal)",
                                           "Cholesterol: Total 190 mg/dL (Desirable)",
                                           "Blood Sugar: Fasting 85 mg/dL (Normal)"]},
                 "created_at": "2023-10-15T00:00:00+00:00"},
                {"id": "2", "record_type": "test_result", "title": "X-Ray: Left Ankle",
                 "description": "Following a minor fall. Referred by Dr. Carter.", "clinician_name": "Dr. Emily Carter",
                 "record_date": "2023-07-22",
                 "metadata": {"diagnosis": "Minor sprain, no fracture detected. Recommended rest and ice."},
                 "created_at": "2023-07-22T00:00:00+00:00"},
                {"id": "3", "record_type": "diagnosis", "title": "Diagnosis: Influenza",
                 "description": "Presented with flu-like symptoms. Treated by Dr. Ben Adams.", "clinician_name": "Dr. Ben Adams",
                 "record_date": "2023-03-05",
                 "metadata": {"treatment": "Prescribed antiviral medication and advised rest."},
                 "created_at": "2023-03-05T00:00:00+00:00"},
                {"id": "4", "record_type": "note", "title": "Initial Consultation",
                 "description": "First visit establishing care with the hospital.", "clinician_name": "Dr. Emily Carter",
                 "record_date": "2022-01-10",
                 "metadata": {"assessment": "General health assessment, allergies noted (Penicillin)."},
                 "created_at": "2022-01-10T00:00:00+00:00"},
            ],
            "documents": [
                {"id": "doc1", "file_name": "lab-results-2023-10.pdf", "file_size": 245760,
                 "mime_type": "application/pdf", "document_type": "lab_report", "ai_processed": True,
                 "status": "processed", "created_at": "2023-10-16T00:00:00+00:00"},
                {"id": "doc2", "file_name": "xray-ankle-2023-07.pdf", "file_size": 1024000,
                 "mime_type": "application/pdf", "document_type": "imaging", "ai_processed": True,
                 "status": "processed", "created_at": "2023-07-23T00:00:00+00:00"},
            ],
        },
        2: {
            "medicalHistory": [
                {"id": "5", "record_type": "diagnosis", "title": "Routine Physical Examination",
                 "description": "Annual physical check-up completed.", "clinician_name": "Dr. Michael Brown",
                 "record_date": "2023-09-20", "created_at": "2023-09-20T00:00:00+00:00"},
            ],
            "documents": [],
        },
    }

def staff_documents(staff_id: int, now: datetime) -> list[dict]:
    if staff_id == 1:
        rows = [
            ("doc-1", "Curriculum_Vitae_A_Harper.pdf", 245760, "application/pdf", "cv", "2023-10-26T10:30:00Z", "Dr. Amelia Harper"),
            ("doc-2", "Medical_License_CA.pdf", 512000, "application/pdf", "license", "2023-09-15T14:15:00Z", "Dr. Amelia Harper"),
            ("doc-3", "Cardiology_Board_Certification.pdf", 512000, "application/pdf", "certification", "2023-09-15T14:15:00Z", "Dr. Amelia Harper"),
            ("doc-4", "Employment_Contract.docx", 1024000,
             "application/vnd.openxmlformats-officedocument.wordprocessingml.document", "employment",
             "2020-08-01T09:00:00Z", "HR Department"),
        ]
        return [
            {"id": i, "fileName": n, "fileSize": s, "fileType": t, "documentType": d, "uploadedAt": u, "uploadedBy": b}
            for i, n, s, t, d, u, b in rows
        ]
    return [{
        "id": f"doc-{staff_id}-1",
        "fileName": "Employment_Contract.pdf",
        "fileSize": 1024000,
        "fileType": "application/pdf",
        "documentType": "contract",
        "uploadedAt": _iso(now),
        "uploadedBy": "HR Department",
        "description": "Employment contract",
    }]

def employment(staff_id: int) -> dict:
    if staff_id == 1:
        return {
            "bankAccount": {"bankName": "Global Trust Bank", "accountNumber": "1234567890", "routingNumber": "987654321"},
            "salaryAndBenefits": {
                "baseSalary": "$250,000 / Annum",
                "healthcareBenefits": "Premium Family Plan (Medical, Dental, Vision)",
                "bonusStructure": "Performance-based, up to 15%",
                "retirementPlan": "401(k) with 6% Employer Match",
            },
            "promotions": [
                {"title": "Senior Cardiologist", "date": "June 1, 2023"},
                {"title": "Cardiologist", "date": "August 15, 2020"},
            ],
        }
    return {
        "bankAccount": {"bankName": "", "accountNumber": "", "routingNumber": ""},
        "salaryAndBenefits": {"baseSalary": "", "healthcareBenefits": "", "bonusStructure": "", "retirementPlan": ""},
        "promotions": [],
    }

def medical(staff_id: int) -> dict:
    if staff_id == 1:
        return {
            "conditions": "None Declared",
            "allergies": "Penicillin (Anaphylaxis)",
            "emergencyContact": {"name": "Sarah Jenkins", "relationship": "Partner", "contact": "+1 (555) 987-6543"},
            "immunizations": [
                {"name": "Hepatitis B (Series of 3)", "status": "Completed"},
                {"name": "Influenza (Annual)", "status": "Last dose: Oct 2023"},
                {"name": "COVID-19 (Bivalent Booster)", "status": "Last dose: Sep 2023"},
                {"name": "Tetanus, Diphtheria, Pertussis (Tdap)", "status": "Last dose: 2021"},
            ],
            "assessments": [
                {"title": "Annual Health Screening", "completedDate": "March 15, 2024", "status": "Cleared"},
                {"title": "Respirator Fit Test", "completedDate": "January 20, 2024", "status": "Pass"},
                {"title": "Tuberculosis (TB) Screening", "completedDate": "December 05, 2023", "status": "Negative"},
            ],
        }
    return {
        "conditions": "None Declared",
        "allergies": "None",
        "emergencyContact": {"name": "N/A", "relationship": "N/A", "contact": "N/A"},
        "immunizations": [],
        "assessments": [],
    }

def patient_extended(patient_id: int) -> dict:
    return {
        "contact_preferences": {"email": True, "sms": True, "voice": False},
        "notes": "Patient prefers morning appointments.",
        "gender": "Female" if patient_id in (1, 2) else "Male",
        "street_address": "123 Wellness Ave",
        "city": "Healthville",
        "state": "CA",
        "zip_code": "90210",
        "blood_type": "O+",
        "next_of_kin": {"name": "John Doe", "relationship": "Spouse", "contact_number": "+1 (555) 789-0123"},
        "assigned_clinician_id": 1,
    }

def seed_demo_data(store) -> None:
    now = store.clock()
    store.hospitals.seed(hospitals(now))
    store.patients.seed(patients(now))
    store.staff_roles.seed(staff_roles(now))
    store.clinicians.seed(clinicians(now))
    appts = appointments(now, store.patients.all(), store.clinicians.all(), store.rng)
    store.appointments.seed(appts)
    store.templates.seed(templates(now))
    store.outbound_queue.seed(outbound_queue(now, appts))
    store.notifications.seed(notifications(now, appts))
    store.health_records.update(health_records())
