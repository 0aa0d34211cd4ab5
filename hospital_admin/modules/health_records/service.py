import asyncio
import copy
import logging
import uuid
from hospital_admin.api.routing import FilePayload
from hospital_admin.core.uploads import UploadedFile
from hospital_admin.store.store import ResourceStore

log = logging.getLogger(__name__)

def records_for(store: ResourceStore, patient_id) -> dict:
    patient = store.patients.get(patient_id)
    return store.health_records.setdefault(patient["id"], {"medicalHistory": [], "documents": []})

class HealthRecordService:
    def __init__(self, store: ResourceStore):
        self.store = store

    async def get(self, patient_id) -> dict:
        await self.store.delay(400)
        return copy.deepcopy(records_for(self.store, patient_id))

    async def upload(self, patient_id, file: UploadedFile, document_type: str | None = None) -> dict:
        await self.store.delay(800)
        records = records_for(self.store, patient_id)
        doc = {
            "id": f"doc-{uuid.uuid4().hex[:12]}",
            "file_name": file.filename,
            "file_size": file.size,
            "mime_type": file.content_type,
            "document_type": document_type or "medical_record",
            "ai_processed": False,
            "status": "pending",
            "created_at": self.store.now_iso(),
        }
        records["documents"].insert(0, doc)
        self.store.spawn(self._process(records, doc))
        return {
            "ok": True,
            "document": copy.deepcopy(doc),
            "message": "Document uploaded successfully. AI processing will begin shortly.",
        }

    async def _process(self, records: dict, doc: dict) -> None:
        """pending -> processing -> processed, then a history entry for the extracted record."""
        total = self.store.settings.HEALTH_DOCUMENT_PROCESSING_MS
        try:
            await self.store.delay(total * 0.2)
            doc["status"] = "processing"
            await self.store.delay(total * 0.8)
            doc["status"] = "processed"
            doc["ai_processed"] = True
            records["medicalHistory"].insert(0, {
                "id": f"mh-{uuid.uuid4().hex[:12]}",
                "record_type": "note",
                "title": f"Health Record from {doc['file_name']}",
                "description": f"Information extracted from uploaded document: {doc['file_name']}",
                "record_date": self.store.today().isoformat(),
                "created_at": self.store.now_iso(),
            })
            log.info(f"Health document {doc['id']} processed")
        except asyncio.CancelledError:
            log.info(f"Processing of {doc['id']} cancelled")
            raise

    async def download_report(self, hospital_id, patient_id) -> FilePayload:
        await self.store.delay(500)
        patient = self.store.patients.get(patient_id)
        records = records_for(self.store, patient["id"])
        hospital = self.store.hospitals.find(hospital_id)
        appts = [a for a in self.store.appointments.all() if a["patient_id"] == patient["id"]]

        rule = "=" * 60
        lines = [rule, "COMPREHENSIVE HEALTH REPORT", rule, f"Generated: {self.store.now_iso()}", ""]
        if hospital:
            lines += [f"Hospital: {hospital['name']}", ""]
        lines += [
            "PATIENT INFORMATION",
            f"Name: {patient['first_name']} {patient['last_name']}",
            f"MRN: {patient['mrn']}",
        ]
        for label, field in (("Date of Birth", "date_of_birth"), ("Email", "email"), ("Phone", "phone")):
            if patient.get(field):
                lines.append(f"{label}: {patient[field]}")

        lines += ["", "MEDICAL HISTORY"]
        for i, r in enumerate(records["medicalHistory"], start=1):
            lines.append(f"{i}. {r['title']} ({r.get('record_date', '')})")
            if r.get("clinician_name"):
                lines.append(f"   Clinician: {r['clinician_name']}")
            if r.get("description"):
                lines.append(f"   {r['description']}")
            for finding in (r.get("metadata") or {}).get("findings", []):
                lines.append(f"   - {finding}")
        if not records["medicalHistory"]:
            lines.append("No medical history records.")

        lines += ["", "APPOINTMENTS"]
        for i, a in enumerate(appts[:20], start=1):
            lines.append(f"{i}. {a['appointment_date']} {a['appointment_time']} with {a['clinician_name']} [{a['status']}]")
        if not appts:
            lines.append("No appointments.")

        lines += ["", "DOCUMENTS"]
        for i, d in enumerate(records["documents"], start=1):
            lines.append(f"{i}. {d['file_name']} ({d['document_type']}, {d['status']})")
        if not records["documents"]:
            lines.append("No documents.")
        lines += ["", rule]

        stamp = self.store.clock().strftime("%Y%m%d%H%M%S")
        return FilePayload(
            filename=f"health-report-{patient['mrn']}-{stamp}.txt",
            media_type="text/plain",
            content=("\n".join(lines) + "\n").encode(),
        )
