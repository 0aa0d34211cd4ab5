import copy
import uuid
from hospital_admin.api.routing import FilePayload
from hospital_admin.core.errors import NotFound
from hospital_admin.core.uploads import UploadedFile
from hospital_admin.store import seed
from hospital_admin.store.store import ResourceStore

def documents_for(store: ResourceStore, staff_id) -> list[dict]:
    """Live document list of one staff member, seeded on first access."""
    staff = store.clinicians.get(staff_id)
    sid = staff["id"]
    if sid not in store.staff_documents:
        store.staff_documents[sid] = seed.staff_documents(sid, store.clock())
    return store.staff_documents[sid]

def new_document_id() -> str:
    return f"doc-{uuid.uuid4().hex[:12]}"

def render_document(doc: dict, staff: dict) -> bytes:
    lines = [
        doc["fileName"],
        "=" * len(doc["fileName"]),
        f"Staff member: {staff['name']}",
        f"Document type: {doc.get('documentType', 'other')}",
        f"Original format: {doc.get('fileType', 'unknown')}",
        f"Size: {doc.get('fileSize', 0)} bytes",
        f"Uploaded: {doc.get('uploadedAt', '')} by {doc.get('uploadedBy', 'unknown')}",
    ]
    if doc.get("description"):
        lines.append(f"Description: {doc['description']}")
    return ("\n".join(lines) + "\n").encode()

class StaffDocumentService:
    def __init__(self, store: ResourceStore):
        self.store = store

    def _find(self, staff_id, document_id) -> dict:
        for doc in documents_for(self.store, staff_id):
            if doc["id"] == document_id:
                return doc
        raise NotFound(f"document {document_id!r} not found")

    async def list(self, staff_id) -> dict:
        await self.store.delay(300)
        docs = copy.deepcopy(documents_for(self.store, staff_id))
        return {"documents": docs, "totalSize": sum(d.get("fileSize", 0) for d in docs)}

    async def upload(self, staff_id, file: UploadedFile, document_type: str | None = None,
                     description: str | None = None) -> dict:
        await self.store.delay(600)
        doc = {
            "id": new_document_id(),
            "fileName": file.filename,
            "fileSize": file.size,
            "fileType": file.content_type,
            "documentType": document_type or "other",
            "uploadedAt": self.store.now_iso(),
            "uploadedBy": "Current User",
            "description": description,
        }
        async with self.store.locks.hold("staff-documents", self.store.clinicians.key(staff_id)):
            documents_for(self.store, staff_id).insert(0, doc)
        return {"ok": True, "document": copy.deepcopy(doc)}

    async def get(self, staff_id, document_id) -> dict:
        await self.store.delay(300)
        return copy.deepcopy(self._find(staff_id, document_id))

    async def download(self, staff_id, document_id) -> FilePayload:
        await self.store.delay(300)
        doc = self._find(staff_id, document_id)
        staff = self.store.clinicians.get(staff_id)
        return FilePayload(filename=doc["fileName"], media_type="text/plain", content=render_document(doc, staff))

    async def delete(self, staff_id, document_id) -> dict:
        await self.store.delay(400)
        async with self.store.locks.hold("staff-documents", self.store.clinicians.key(staff_id)):
            docs = documents_for(self.store, staff_id)
            doc = self._find(staff_id, document_id)
            docs.remove(doc)
        return {"ok": True}
