from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

from daflash import clock
from daflash.constants import DocumentKind
from daflash.errors import DocumentNotFoundError, DocumentValidationError, InvalidTransitionError
from daflash.models.catalog import CatalogItem
from daflash.models.line_item import LineItem
from daflash.models.quote import QUOTE_TRANSITIONS, Quote, QuoteDraft, QuoteStatus, QuoteTotals
from daflash.models.tax import TaxConfiguration
from daflash.numbering import NumberAllocator
from daflash.repositories.base import QuoteRepository
from daflash.tax import compute_tax

logger = logging.getLogger(__name__)


def parse_document_date(raw: str, label: str, errors: list[str]) -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` date, appending a message to ``errors`` on failure."""
    value = (raw or "").strip()
    if not value:
        errors.append(f"{label} is required")
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        errors.append(f"{label} is not a valid date")
        return None


def items_preview(items: list[LineItem]) -> list[dict[str, Any]]:
    return [item.model_dump(mode="json") for item in items]


class QuoteComposer:
    """Owns an in-progress quote: both item collections and the tax snapshot."""

    def __init__(self, draft: QuoteDraft | None = None) -> None:
        draft = draft or QuoteDraft()
        self.client_uuid = draft.client_uuid
        self.one_time_items: list[LineItem] = list(draft.one_time_items)
        self.recurring_items: list[LineItem] = list(draft.recurring_items)
        self.tax = draft.tax
        self.contract_terms = draft.contract_terms
        self.expiry_date = draft.expiry_date

    @classmethod
    def from_quote(cls, quote: Quote) -> QuoteComposer:
        return cls(
            QuoteDraft(
                client_uuid=quote.client_uuid,
                one_time_items=quote.one_time_items,
                recurring_items=quote.recurring_items,
                tax=quote.tax,
                contract_terms=quote.contract_terms,
                expiry_date=quote.expiry_date.isoformat(),
            )
        )

    def add_item(self, item: LineItem | None = None, recurring: bool = False) -> LineItem:
        if item is None:
            item = LineItem(name="New item", unit_price=0)
        target = self.recurring_items if recurring else self.one_time_items
        target.append(item)
        return item

    def add_from_catalog(self, entry: CatalogItem) -> LineItem:
        return self.add_item(entry.to_line_item(), recurring=entry.billing_type.is_recurring)

    def _locate(self, key: str) -> tuple[list[LineItem], int]:
        for collection in (self.one_time_items, self.recurring_items):
            for index, item in enumerate(collection):
                if item.key == key:
                    return collection, index
        raise KeyError(key)

    def update_item(self, key: str, **changes: Any) -> LineItem:
        collection, index = self._locate(key)
        data = collection[index].model_dump(exclude={"total"})
        data.update(changes)
        data["key"] = key
        updated = LineItem.model_validate(data)
        collection[index] = updated
        return updated

    def remove_item(self, key: str) -> None:
        collection, index = self._locate(key)
        del collection[index]

    def set_tax(self, config: TaxConfiguration) -> None:
        self.tax = config

    def compute_totals(self) -> QuoteTotals:
        one_time = compute_tax(self.one_time_items, self.tax)
        monthly = compute_tax(self.recurring_items, self.tax)
        return QuoteTotals(
            one_time_subtotal=one_time.subtotal,
            one_time_tax_amount=one_time.tax_amount,
            one_time_grand_total=one_time.grand_total,
            monthly_subtotal=monthly.subtotal,
            monthly_tax_amount=monthly.tax_amount,
            monthly_grand_total=monthly.grand_total,
            combined_tax_amount=one_time.tax_amount + monthly.tax_amount,
            grand_total=one_time.grand_total,
        )

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.client_uuid:
            errors.append("Please select a client")
        if not self.one_time_items and not self.recurring_items:
            errors.append("Add at least one line item")
        parse_document_date(self.expiry_date, "Expiry date", errors)
        return errors

    def preview(self) -> dict[str, Any]:
        return {
            "one_time_items": items_preview(self.one_time_items),
            "recurring_items": items_preview(self.recurring_items),
            "tax": self.tax.model_dump(mode="json"),
            "totals": self.compute_totals().model_dump(mode="json"),
        }

    def build(self, quote_number: str, **fields: Any) -> Quote:
        errors = self.validate()
        if errors:
            raise DocumentValidationError(errors, self.preview())
        totals = self.compute_totals()
        return Quote(
            quote_number=quote_number,
            client_uuid=self.client_uuid,
            one_time_items=list(self.one_time_items),
            recurring_items=list(self.recurring_items),
            tax=self.tax,
            one_time_subtotal=totals.one_time_subtotal,
            monthly_subtotal=totals.monthly_subtotal,
            tax_amount=totals.combined_tax_amount,
            grand_total=totals.grand_total,
            contract_terms=self.contract_terms,
            expiry_date=date.fromisoformat(self.expiry_date.strip()),
            **fields,
        )


class QuoteService:
    def __init__(
        self,
        repo: QuoteRepository,
        allocator: NumberAllocator,
        default_tax: TaxConfiguration | None = None,
        expiry_days: int = 30,
    ) -> None:
        self.repo = repo
        self.allocator = allocator
        self.default_tax = default_tax or TaxConfiguration()
        self.expiry_days = expiry_days

    def new_draft(self, default_contract_terms: str = "", client_uuid: str = "") -> QuoteDraft:
        expiry = clock.today() + timedelta(days=self.expiry_days)
        return QuoteDraft(
            client_uuid=client_uuid,
            tax=self.default_tax,
            contract_terms=default_contract_terms,
            expiry_date=expiry.isoformat(),
        )

    def preview(self, draft: QuoteDraft) -> dict[str, Any]:
        composer = QuoteComposer(draft)
        result = composer.preview()
        result["errors"] = composer.validate()
        return result

    def create_quote(self, draft: QuoteDraft) -> Quote:
        composer = QuoteComposer(draft)
        errors = composer.validate()
        if errors:
            logger.warning("Quote rejected: %s", "; ".join(errors))
            raise DocumentValidationError(errors, composer.preview())
        number = self.allocator.allocate(DocumentKind.QUOTE)
        result = self.repo.create(composer.build(number))
        logger.info(
            "Quote created: uuid=%s, number=%s, one_time=%s, monthly=%s",
            result.uuid,
            result.quote_number,
            result.grand_total,
            result.monthly_subtotal,
        )
        return result

    def get_quote(self, uuid: str) -> Quote:
        result = self.repo.get_by_uuid(uuid)
        logger.debug("get_quote uuid=%s found=%s", uuid, result is not None)
        if result is None:
            raise DocumentNotFoundError("Quote", uuid)
        return result

    def list_quotes(self) -> list[Quote]:
        result = self.repo.list_all()
        logger.debug("Listed %d quotes", len(result))
        return result

    def update_quote(self, uuid: str, draft: QuoteDraft) -> Quote:
        existing = self.get_quote(uuid)
        composer = QuoteComposer(draft)
        errors = composer.validate()
        if errors:
            logger.warning("Quote %s update rejected: %s", existing.quote_number, "; ".join(errors))
            raise DocumentValidationError(errors, composer.preview())
        quote = composer.build(
            existing.quote_number,
            id=existing.id,
            uuid=existing.uuid,
            status=existing.status,
            sent_at=existing.sent_at,
        )
        result = self.repo.update(quote)
        logger.info("Quote updated: uuid=%s, number=%s", result.uuid, result.quote_number)
        return result

    def change_status(self, uuid: str, target: QuoteStatus) -> Quote:
        quote = self.get_quote(uuid)
        if target not in QUOTE_TRANSITIONS.get(quote.status, frozenset()):
            logger.warning(
                "Quote %s: illegal transition %s -> %s", quote.quote_number, quote.status.value, target.value
            )
            raise InvalidTransitionError("quote", quote.status.value, target.value)
        sent_at = clock.now() if target is QuoteStatus.SENT else None
        self.repo.update_status(uuid, target, sent_at=sent_at)
        logger.info("Quote %s status %s -> %s", quote.quote_number, quote.status.value, target.value)
        return self.get_quote(uuid)

    def mark_sent(self, uuid: str) -> Quote:
        return self.change_status(uuid, QuoteStatus.SENT)

    def mark_accepted(self, uuid: str) -> Quote:
        return self.change_status(uuid, QuoteStatus.ACCEPTED)

    def mark_declined(self, uuid: str) -> Quote:
        return self.change_status(uuid, QuoteStatus.DECLINED)

    def delete_quote(self, uuid: str) -> None:
        quote = self.get_quote(uuid)
        self.repo.delete(uuid)
        logger.info("Quote deleted: uuid=%s, number=%s", uuid, quote.quote_number)
