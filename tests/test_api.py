from financesaathi.routers import dependencies
from financesaathi.services.providers import MockProvider

from .conftest import PNG_BYTES


def _upload(client, filename="swiggy_order.png", content=PNG_BYTES, content_type="image/png"):
    return client.post("/upload", files={"file": (filename, content, content_type)})


def test_health_and_ready(client):
    assert client.get("/").json()["status"] == "healthy"
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/ready").json() == {"ready": True, "documents": 0, "expenses": 0}


def test_404_handler(client):
    assert client.get("/non-existent-route").status_code == 404


def test_cors_headers(client):
    response = client.options(
        "/expenses",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"}
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_request_id_header(client):
    assert client.get("/expenses", headers={"X-Request-ID": "abc-123"}).headers["X-Request-ID"] == "abc-123"
    assert client.get("/expenses").headers["X-Request-ID"]


def test_upload_creates_document_and_expense(client):
    response = _upload(client)

    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "complete"
    assert body["used_fallback"] is False
    assert body["progress"] == 100
    assert body["expense"]["vendor"] == "Swiggy"
    assert body["expense"]["amount"] == 450.0
    assert body["expense"]["date"] == "2025-03-12"
    assert body["expense"]["source_upload_id"] == body["document"]["id"]

    status = client.get("/upload/status").json()
    assert status["upload_id"] == body["upload_id"]
    assert status["history"][-1] == "complete"

    documents = client.get("/documents").json()
    assert [d["id"] for d in documents] == [body["document"]["id"]]
    assert client.get(f"/documents/{body['document']['id']}").json()["filename"] == "swiggy_order.png"
    assert client.get(f"/expenses/{body['expense']['id']}").json()["vendor"] == "Swiggy"


def test_upload_status_idle_before_first_upload(client):
    assert client.get("/upload/status").json()["state"] == "idle"


def test_upload_rejects_unsupported_type(client):
    response = _upload(client, filename="notes.txt", content=b"hello", content_type="text/plain")

    assert response.status_code == 400
    assert client.get("/upload/status").json()["state"] == "failed"
    assert client.get("/expenses").json() == []


def test_upload_rejects_oversized_file(client):
    response = _upload(client, filename="big.jpg", content=b"\x00" * (6 * 1024 * 1024), content_type="image/jpeg")

    assert response.status_code == 413
    assert "5 MB" in response.json()["detail"]
    assert client.get("/upload/status").json()["history"] == ["idle", "validating", "failed"]
    assert client.get("/documents").json() == []


def test_upload_with_failing_acquisition_still_stores_one_expense(client):
    dependencies.acquisition_service.provider = MockProvider(error=ConnectionError("network down"))

    response = _upload(client, filename="receipt.jpg", content_type="image/jpeg")

    assert response.status_code == 200
    body = response.json()
    assert body["used_fallback"] is True
    assert body["expense"]["confidence"] == 0
    assert "generating" in body["history"]
    expenses = client.get("/expenses").json()
    assert len(expenses) == 1
    assert expenses[0]["confidence"] == 0


def test_dashboard_views(client):
    _upload(client)
    client.post("/expenses", json={"vendor": "Indigo", "amount": 4550, "category": "Travel", "date": "2025-02-01"})

    summary = client.get("/expenses/summary").json()
    assert summary["total"] == 5000
    assert summary["transaction_count"] == 2
    assert summary["average_transaction"] == 2500
    assert summary["top_category"] == "Travel"

    categories = {c["category"]: c["percentage"] for c in client.get("/expenses/categories").json()}
    assert categories == {"Food & Entertainment": 9, "Travel": 91}

    monthly = client.get("/expenses/monthly").json()
    assert monthly == [{"month": "2025-02", "amount": 4550.0}, {"month": "2025-03", "amount": 450.0}]

    recent = client.get("/expenses/recent", params={"limit": 1}).json()
    assert [r["vendor"] for r in recent] == ["Swiggy"]

    assert [e["vendor"] for e in client.get("/expenses", params={"q": "swiggy"}).json()] == ["Swiggy"]
    assert [e["vendor"] for e in client.get("/expenses", params={"category": "Travel"}).json()] == ["Indigo"]
    assert len(client.get("/api/v1/expenses", params={"category": "All"}).json()) == 2


def test_manual_expense_entry(client):
    response = client.post("/expenses", json={"vendor": "Local Stationers", "amount": 320.5, "category": "Office Supplies"})

    assert response.status_code == 201
    body = response.json()
    assert body["source_upload_id"] is None
    assert body["payment_method"] == "Cash"
    assert body["status"] == "processed"
    assert body["invoice_number"].startswith("INV-")
    assert client.get("/documents").json() == []


def test_manual_expense_validation(client):
    assert client.post("/expenses", json={"vendor": "X", "amount": 10, "category": "Groceries"}).status_code == 422
    assert client.post("/expenses", json={"vendor": "X", "amount": -1}).status_code == 422
    assert client.post("/expenses", json={"vendor": " ", "amount": 10}).status_code == 422


def test_unknown_ids_return_404(client):
    assert client.get("/documents/missing").status_code == 404
    assert client.get("/expenses/missing").status_code == 404
