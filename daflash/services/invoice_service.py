from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

from daflash import clock
from daflash.constants import DocumentKind
from daflash.errors import DocumentNotFoundError, DocumentValidationError, InvalidTransitionError
from daflash.models.catalog import CatalogItem
from daflash.models.invoice import INVOICE_TRANSITIONS, Invoice, InvoiceDraft, InvoiceStatus
from daflash.models.line_item import LineItem, new_item_key
from daflash.models.quote import QuoteStatus
from daflash.models.tax import TaxConfiguration, TaxResult
from daflash.numbering import NumberAllocator
from daflash.repositories.base import InvoiceRepository, QuoteRepository
from daflash.services.quote_service import items_preview, parse_document_date
from daflash.tax import compute_tax

logger = logging.getLogger(__name__)


class InvoiceComposer:
    """Single-collection counterpart of :class:`~daflash.services.quote_service.QuoteComposer`."""

    def __init__(self, draft: InvoiceDraft | None = None) -> None:
        draft = draft or InvoiceDraft()
        self.client_uuid = draft.client_uuid
        self.line_items: list[LineItem] = list(draft.line_items)
        self.tax = draft.tax
        self.issue_date = draft.issue_date
        self.due_date = draft.due_date
        self.notes = draft.notes

    @classmethod
    def from_invoice(cls, invoice: Invoice) -> InvoiceComposer:
        return cls(
            InvoiceDraft(
                client_uuid=invoice.client_uuid,
                line_items=invoice.line_items,
                tax=invoice.tax,
                issue_date=invoice.issue_date.isoformat(),
                due_date=invoice.due_date.isoformat(),
                notes=invoice.notes,
            )
        )

    def add_item(self, item: LineItem | None = None) -> LineItem:
        if item is None:
            item = LineItem(name="New item", unit_price=0)
        self.line_items.append(item)
        return item

    def add_from_catalog(self, entry: CatalogItem) -> LineItem:
        return self.add_item(entry.to_line_item())

    def _index(self, key: str) -> int:
        for index, item in enumerate(self.line_items):
            if item.key == key:
                return index
        raise KeyError(key)

    def update_item(self, key: str, **changes: Any) -> LineItem:
        index = self._index(key)
        data = self.line_items[index].model_dump(exclude={"total"})
        data.update(changes)
        data["key"] = key
        updated = LineItem.model_validate(data)
        self.line_items[index] = updated
        return updated

    def remove_item(self, key: str) -> None:
        del self.line_items[self._index(key)]

    def set_tax(self, config: TaxConfiguration) -> None:
        self.tax = config

    def compute_totals(self) -> TaxResult:
        return compute_tax(self.line_items, self.tax)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.client_uuid:
            errors.append("Please select a client")
        if not self.line_items:
            errors.append("Add at least one line item")
        parse_document_date(self.issue_date, "Issue date", errors)
        parse_document_date(self.due_date, "Due date", errors)
        return errors

    def preview(self) -> dict[str, Any]:
        return {
            "line_items": items_preview(self.line_items),
            "tax": self.tax.model_dump(mode="json"),
            "totals": self.compute_totals().model_dump(mode="json"),
        }

    def build(self, invoice_number: str, **fields: Any) -> Invoice:
        errors = self.validate()
        if errors:
            raise DocumentValidationError(errors, self.preview())
        totals = self.compute_totals()
        return Invoice(
            invoice_number=invoice_number,
            client_uuid=self.client_uuid,
            line_items=list(self.line_items),
            tax=self.tax,
            subtotal=totals.subtotal,
            tax_amount=totals.tax_amount,
            total=totals.grand_total,
            issue_date=date.fromisoformat(self.issue_date.strip()),
            due_date=date.fromisoformat(self.due_date.strip()),
            notes=self.notes,
            **fields,
        )


class InvoiceService:
    def __init__(
        self,
        repo: InvoiceRepository,
        allocator: NumberAllocator,
        quote_repo: QuoteRepository | None = None,
        default_tax: TaxConfiguration | None = None,
        due_days: int = 30,
    ) -> None:
        self.repo = repo
        self.allocator = allocator
        self.quote_repo = quote_repo
        self.default_tax = default_tax or TaxConfiguration()
        self.due_days = due_days

    def new_draft(self, client_uuid: str = "") -> InvoiceDraft:
        issued = clock.today()
        return InvoiceDraft(
            client_uuid=client_uuid,
            tax=self.default_tax,
            issue_date=issued.isoformat(),
            due_date=(issued + timedelta(days=self.due_days)).isoformat(),
        )

    def preview(self, draft: InvoiceDraft) -> dict[str, Any]:
        composer = InvoiceComposer(draft)
        result = composer.preview()
        result["errors"] = composer.validate()
        return result

    def _create(self, composer: InvoiceComposer, related_quote_uuid: str | None = None) -> Invoice:
        errors = composer.validate()
        if errors:
            logger.warning("Invoice rejected: %s", "; ".join(errors))
            raise DocumentValidationError(errors, composer.preview())
        number = self.allocator.allocate(DocumentKind.INVOICE)
        result = self.repo.create(composer.build(number, related_quote_uuid=related_quote_uuid))
        logger.info(
            "Invoice created: uuid=%s, number=%s, total=%s, quote=%s",
            result.uuid,
            result.invoice_number,
            result.total,
            related_quote_uuid,
        )
        return result

    def create_invoice(self, draft: InvoiceDraft) -> Invoice:
        return self._create(InvoiceComposer(draft))

    def create_from_quote(self, quote_uuid: str) -> Invoice:
        """Invoice the one-time part of an accepted quote.

        Recurring items stay on the quote; they are billed separately.
        """
        if self.quote_repo is None:
            raise RuntimeError("InvoiceService was built without a quote repository")
        quote = self.quote_repo.get_by_uuid(quote_uuid)
        if quote is None:
            raise DocumentNotFoundError("Quote", quote_uuid)
        if quote.status is not QuoteStatus.ACCEPTED:
            logger.warning("Invoice from quote %s refused: status=%s", quote.quote_number, quote.status.value)
            raise InvalidTransitionError("quote", quote.status.value, "Invoiced")

        draft = self.new_draft(client_uuid=quote.client_uuid)
        draft = draft.model_copy(
            update={
                "tax": quote.tax,
                "line_items": [item.model_copy(update={"key": new_item_key()}) for item in quote.one_time_items],
            }
        )
        return self._create(InvoiceComposer(draft), related_quote_uuid=quote.uuid)

    def get_invoice(self, uuid: str) -> Invoice:
        result = self.repo.get_by_uuid(uuid)
        logger.debug("get_invoice uuid=%s found=%s", uuid, result is not None)
        if result is None:
            raise DocumentNotFoundError("Invoice", uuid)
        return result

    def list_invoices(self) -> list[Invoice]:
        result = self.repo.list_all()
        logger.debug("Listed %d invoices", len(result))
        return result

    def update_invoice(self, uuid: str, draft: InvoiceDraft) -> Invoice:
        existing = self.get_invoice(uuid)
        composer = InvoiceComposer(draft)
        errors = composer.validate()
        if errors:
            logger.warning("Invoice %s update rejected: %s", existing.invoice_number, "; ".join(errors))
            raise DocumentValidationError(errors, composer.preview())
        invoice = composer.build(
            existing.invoice_number,
            id=existing.id,
            uuid=existing.uuid,
            related_quote_uuid=existing.related_quote_uuid,
            status=existing.status,
            sent_at=existing.sent_at,
            paid_at=existing.paid_at,
        )
        result = self.repo.update(invoice)
        logger.info("Invoice updated: uuid=%s, number=%s, total=%s", result.uuid, result.invoice_number, result.total)
        return result

    def change_status(self, uuid: str, target: InvoiceStatus) -> Invoice:
        invoice = self.get_invoice(uuid)
        if target not in INVOICE_TRANSITIONS.get(invoice.status, frozenset()):
            logger.warning(
                "Invoice %s: illegal transition %s -> %s", invoice.invoice_number, invoice.status.value, target.value
            )
            raise InvalidTransitionError("invoice", invoice.status.value, target.value)
        stamp = clock.now()
        self.repo.update_status(
            uuid,
            target,
            sent_at=stamp if target is InvoiceStatus.SENT else None,
            paid_at=stamp if target is InvoiceStatus.PAID else None,
        )
        logger.info("Invoice %s status %s -> %s", invoice.invoice_number, invoice.status.value, target.value)
        return self.get_invoice(uuid)

    def mark_sent(self, uuid: str) -> Invoice:
        return self.change_status(uuid, InvoiceStatus.SENT)

    def mark_paid(self, uuid: str) -> Invoice:
        return self.change_status(uuid, InvoiceStatus.PAID)

    def cancel(self, uuid: str) -> Invoice:
        return self.change_status(uuid, InvoiceStatus.CANCELLED)

    def list_overdue(self) -> list[Invoice]:
        today = clock.today()
        return [invoice for invoice in self.repo.list_all() if invoice.is_overdue(today)]

    def delete_invoice(self, uuid: str) -> None:
        invoice = self.get_invoice(uuid)
        self.repo.delete(uuid)
        logger.info("Invoice deleted: uuid=%s, number=%s", uuid, invoice.invoice_number)
