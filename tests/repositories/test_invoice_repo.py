from datetime import datetime
from decimal import Decimal

from daflash.constants import AGENCY_TZ
from daflash.models.invoice import InvoiceStatus

STAMP = datetime(2026, 10, 19, 12, tzinfo=AGENCY_TZ)


class TestInvoiceRepository:
    def test_create_and_get(self, invoice_repo, sample_invoice):
        created = invoice_repo.create(sample_invoice(related_quote_uuid="01JQUOTE00000000000000000A"))
        fetched = invoice_repo.get_by_uuid(created.uuid)

        assert fetched.invoice_number == "INV-001"
        assert fetched.related_quote_uuid == "01JQUOTE00000000000000000A"
        assert fetched.subtotal == Decimal("180.00")
        assert fetched.tax_amount == Decimal("11.88")
        assert fetched.total == Decimal("191.88")
        assert fetched.issue_date.isoformat() == "2026-10-19"
        assert fetched.due_date.isoformat() == "2026-11-18"
        assert fetched.notes == "Thanks!"
        assert fetched.line_items[0].total == Decimal("180.00")

    def test_update_keeps_status(self, invoice_repo, sample_invoice):
        created = invoice_repo.create(sample_invoice())
        invoice_repo.update_status(created.uuid, InvoiceStatus.SENT, sent_at=STAMP)
        updated = invoice_repo.update(created.model_copy(update={"notes": "Edited", "status": InvoiceStatus.DRAFT}))
        assert updated.notes == "Edited"
        assert updated.status is InvoiceStatus.SENT

    def test_status_timestamps(self, invoice_repo, sample_invoice):
        created = invoice_repo.create(sample_invoice())
        invoice_repo.update_status(created.uuid, InvoiceStatus.SENT, sent_at=STAMP)
        invoice_repo.update_status(created.uuid, InvoiceStatus.PAID, paid_at=STAMP)
        fetched = invoice_repo.get_by_uuid(created.uuid)
        assert fetched.status is InvoiceStatus.PAID
        assert fetched.sent_at is not None
        assert fetched.paid_at is not None

    def test_list_by_issue_date(self, invoice_repo, sample_invoice):
        invoice_repo.create(sample_invoice(invoice_number="INV-001", issue_date="2026-09-01"))
        invoice_repo.create(sample_invoice(invoice_number="INV-002", issue_date="2026-10-01"))
        assert [i.invoice_number for i in invoice_repo.list_all()] == ["INV-002", "INV-001"]

    def test_latest_number(self, invoice_repo, sample_invoice):
        for number in ("INV-009", "INV-010", "INV-002"):
            invoice_repo.create(sample_invoice(invoice_number=number))
        assert invoice_repo.latest_number() == "INV-010"

    def test_delete(self, invoice_repo, sample_invoice):
        created = invoice_repo.create(sample_invoice())
        invoice_repo.delete(created.uuid)
        assert invoice_repo.get_by_uuid(created.uuid) is None
