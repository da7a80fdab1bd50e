from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from daflash.models.line_item import LineItem
from daflash.models.tax import TaxConfiguration


class QuoteStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    DECLINED = "Declined"
    EXPIRED = "Expired"  # display only, never stored


QUOTE_TRANSITIONS: dict[QuoteStatus, frozenset[QuoteStatus]] = {
    QuoteStatus.DRAFT: frozenset({QuoteStatus.SENT}),
    QuoteStatus.SENT: frozenset({QuoteStatus.ACCEPTED, QuoteStatus.DECLINED}),
}


class QuoteTotals(BaseModel):
    """Both collections' aggregates.

    ``grand_total`` is the one-time grand total only; monthly figures are
    reported next to it, not added into it.
    """

    model_config = ConfigDict(frozen=True)

    one_time_subtotal: Decimal
    one_time_tax_amount: Decimal
    one_time_grand_total: Decimal
    monthly_subtotal: Decimal
    monthly_tax_amount: Decimal
    monthly_grand_total: Decimal
    combined_tax_amount: Decimal
    grand_total: Decimal


class QuoteDraft(BaseModel):
    """What the quote editor submits. Dates stay raw so the composer can report them."""

    client_uuid: str = ""
    one_time_items: list[LineItem] = []
    recurring_items: list[LineItem] = []
    tax: TaxConfiguration = Field(default_factory=TaxConfiguration)
    contract_terms: str = ""
    expiry_date: str = ""


class Quote(BaseModel):
    id: int | None = None
    uuid: str = ""
    quote_number: str = ""
    client_uuid: str
    one_time_items: list[LineItem] = []
    recurring_items: list[LineItem] = []
    tax: TaxConfiguration = Field(default_factory=TaxConfiguration)
    one_time_subtotal: Decimal = Decimal("0.00")
    monthly_subtotal: Decimal = Decimal("0.00")
    tax_amount: Decimal = Decimal("0.00")
    grand_total: Decimal = Decimal("0.00")
    contract_terms: str = ""
    expiry_date: date
    status: QuoteStatus = QuoteStatus.DRAFT
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sent_at: datetime | None = None

    @field_validator("status")
    @classmethod
    def _stored_status(cls, value: QuoteStatus) -> QuoteStatus:
        if value is QuoteStatus.EXPIRED:
            raise ValueError("Expired is derived from expiry_date and cannot be stored")
        return value

    def is_expired(self, today: date) -> bool:
        return self.status is QuoteStatus.SENT and self.expiry_date < today

    def display_status(self, today: date) -> QuoteStatus:
        if self.is_expired(today):
            return QuoteStatus.EXPIRED
        return self.status
