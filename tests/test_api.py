import pytest
from fastapi.testclient import TestClient

from hospital_admin.api.router import content_disposition
from hospital_admin.main import create_app


@pytest.fixture
def client(settings, store):
    app = create_app(settings, store)
    with TestClient(app) as c:
        yield c


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_get_patient(client):
    r = client.get("/api/hospitals/1/patients/1", headers={"x-request-id": "req-42"})
    assert r.status_code == 200
    assert r.json()["mrn"] == "MRN001"
    assert r.headers["x-request-id"] == "req-42"


def test_typed_errors_map_to_status_codes(client):
    r = client.get("/api/hospitals/1/patients/999")
    assert r.status_code == 404
    assert r.json()["error"] == "NotFound"

    r = client.post("/api/hospitals/1/patients", json={"first_name": "Only"})
    assert r.status_code == 400
    assert r.json()["error"] == "InvalidInput"

    r = client.post("/api/hospitals/1/patients", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400


def test_unrouted_request(client):
    r = client.get("/api/hospitals/1/nothing-here")
    assert r.status_code == 404
    assert r.json() == {"error": "no handler"}


def test_create_patient_and_list(client):
    r = client.post("/api/hospitals/1/patients", json={"first_name": "Ola", "last_name": "Bello"})
    assert r.json() == {"id": 6, "mrn": "MRN006"}
    names = [p["first_name"] for p in client.get("/api/hospitals/1/patients", params={"search": "bello"}).json()]
    assert names == ["Ola"]


def test_document_download_is_an_attachment(client):
    r = client.get("/api/hospitals/1/staff/1/documents/doc-2/download")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert 'filename="Medical_License_CA.pdf"' in r.headers["content-disposition"]


def test_multipart_document_upload(client):
    r = client.post(
        "/api/hospitals/1/staff/2/documents",
        files={"document": ("cert.pdf", b"%PDF-1.4", "application/pdf")},
        data={"document_type": "certification", "description": "BLS"},
    )
    assert r.status_code == 200
    doc = r.json()["document"]
    assert doc["fileName"] == "cert.pdf"
    assert doc["fileSize"] == 8
    assert doc["documentType"] == "certification"


def test_non_ascii_document_name_downloads(client):
    r = client.post(
        "/api/hospitals/1/staff/1/documents",
        files={"document": ("报告.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert r.status_code == 200
    doc = r.json()["document"]
    assert doc["fileName"] == "报告.pdf"

    r = client.get(f"/api/hospitals/1/staff/1/documents/{doc['id']}/download")
    assert r.status_code == 200
    disposition = r.headers["content-disposition"]
    assert 'filename="__.pdf"' in disposition
    assert "filename*=UTF-8''%E6%8A%A5%E5%91%8A.pdf" in disposition


def test_content_disposition_escapes_quotes():
    header = content_disposition('say "hi".pdf')
    assert header.startswith('attachment; filename="say _hi_.pdf"; ')
    assert header.endswith("filename*=UTF-8''say%20%22hi%22.pdf")


def test_upload_without_file(client):
    r = client.post("/api/hospitals/1/staff/2/documents", data={"document_type": "cv"})
    assert r.status_code == 400
    assert r.json()["message"] == "No file provided"


def test_draft_workflow_over_http(client):
    base = "/api/hospitals/1/staff/4"
    assert client.get(f"{base}/update-draft").json() is None

    r = client.post(f"{base}/update-draft", json={"currentStep": 2, "draft": {"overview": {"phone": "+234800"}}})
    assert r.json()["ok"] is True
    assert client.get(f"{base}/update-draft").json()["currentStep"] == 2

    r = client.post(f"{base}/update-complete", json={"overview": {"phone": "+234800"}})
    assert r.json() == {"ok": True}
    assert client.get("/api/hospitals/1/clinicians/4").json()["phone"] == "+234800"
    assert client.get(f"{base}/update-draft").json() is None


def test_patch_template(client):
    r = client.patch("/api/hospitals/1/templates/2", json={"body_text": "Hi {{patient_first}}"})
    assert r.status_code == 200
    assert "updated_at" in r.json()


def test_billing_tabs_over_http(client):
    r = client.get("/api/hospitals/1/billings", params={"tab": "accounts-receivable"})
    numbers = [row["invoice_number"] for row in r.json()["accountsReceivable"]]
    assert len(numbers) == len(set(numbers))
    r = client.get("/api/hospitals/1/billings", params={"tab": "bogus"})
    assert r.status_code == 400


def test_login(client):
    r = client.post("/api/auth/login", json={"email": "admin@hospital.com", "password": "pw"})
    assert r.json()["role"] == "hospital_admin"
