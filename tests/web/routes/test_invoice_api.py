from tests.web.conftest import line_item_json


def _invoice_body(client_uuid: str, **overrides) -> dict:
    body = {
        "client_uuid": client_uuid,
        "line_items": [line_item_json()],
        "issue_date": "2026-10-19",
        "due_date": "2026-11-18",
    }
    body.update(overrides)
    return body


class TestInvoiceApi:
    def test_draft_defaults(self, auth_client, freeze_clock):
        freeze_clock(2026, 10, 19)
        data = auth_client.get("/api/admin/invoices/draft").json()
        assert data["issue_date"] == "2026-10-19"
        assert data["due_date"] == "2026-11-18"

    def test_preview(self, auth_client, client_uuid):
        data = auth_client.post("/api/admin/invoices/preview", json=_invoice_body(client_uuid)).json()
        assert data["totals"]["taxable_amount"] == "144.00"
        assert data["totals"]["tax_amount"] == "11.88"
        assert data["totals"]["grand_total"] == "191.88"

    def test_no_jurisdiction_exemption(self, auth_client, client_uuid):
        body = _invoice_body(
            client_uuid, tax={"tax_enabled": True, "tax_rate_percent": "8.25", "jurisdiction_exemption_enabled": False}
        )
        data = auth_client.post("/api/admin/invoices/preview", json=body).json()
        assert data["totals"]["tax_amount"] == "14.85"
        assert data["totals"]["grand_total"] == "194.85"

    def test_create(self, auth_client, client_uuid):
        response = auth_client.post("/api/admin/invoices", json=_invoice_body(client_uuid))
        assert response.status_code == 201
        data = response.json()
        assert data["invoice_number"] == "INV-001"
        assert data["total"] == "191.88"
        assert data["total_display"] == "$191.88"

    def test_create_rejected(self, auth_client, client_uuid):
        response = auth_client.post("/api/admin/invoices", json=_invoice_body(client_uuid, due_date=""))
        assert response.status_code == 400
        assert response.json()["errors"] == ["Due date is required"]

    def test_update(self, auth_client, client_uuid):
        invoice = auth_client.post("/api/admin/invoices", json=_invoice_body(client_uuid)).json()
        response = auth_client.put(
            f"/api/admin/invoices/{invoice['uuid']}",
            json={"line_items": [line_item_json(quantity=1, discount_percent="0")]},
        )
        data = response.json()
        assert data["invoice_number"] == "INV-001"
        assert data["subtotal"] == "100.00"
        assert data["tax_amount"] == "6.60"
        assert data["total"] == "106.60"

    def test_payment_flow(self, auth_client, client_uuid):
        invoice = auth_client.post("/api/admin/invoices", json=_invoice_body(client_uuid)).json()
        url = f"/api/admin/invoices/{invoice['uuid']}/status"
        assert auth_client.post(url, json={"status": "Paid"}).status_code == 409
        assert auth_client.post(url, json={"status": "Sent"}).json()["status"] == "Sent"
        paid = auth_client.post(url, json={"status": "Paid"}).json()
        assert paid["status"] == "Paid"
        assert paid["paid_at"] is not None
        assert auth_client.post(url, json={"status": "Cancelled"}).status_code == 409

    def test_overdue_cannot_be_set(self, auth_client, client_uuid):
        invoice = auth_client.post("/api/admin/invoices", json=_invoice_body(client_uuid)).json()
        response = auth_client.post(f"/api/admin/invoices/{invoice['uuid']}/status", json={"status": "Overdue"})
        assert response.status_code == 409

    def test_overdue_display(self, auth_client, client_uuid, freeze_clock):
        freeze_clock(2026, 11, 20)
        invoice = auth_client.post("/api/admin/invoices", json=_invoice_body(client_uuid)).json()
        auth_client.post(f"/api/admin/invoices/{invoice['uuid']}/status", json={"status": "Sent"})
        listed = auth_client.get("/api/admin/invoices").json()
        assert listed[0]["status"] == "Sent"
        assert listed[0]["display_status"] == "Overdue"

    def test_delete(self, auth_client, client_uuid):
        invoice = auth_client.post("/api/admin/invoices", json=_invoice_body(client_uuid)).json()
        auth_client.delete(f"/api/admin/invoices/{invoice['uuid']}")
        assert auth_client.get("/api/admin/invoices").json() == []
