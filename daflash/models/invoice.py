from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from daflash.models.line_item import LineItem
from daflash.models.tax import TaxConfiguration


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    CANCELLED = "Cancelled"
    OVERDUE = "Overdue"  # display only, never stored


INVOICE_TRANSITIONS: dict[InvoiceStatus, frozenset[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: frozenset({InvoiceStatus.SENT, InvoiceStatus.CANCELLED}),
    InvoiceStatus.SENT: frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED}),
}


class InvoiceDraft(BaseModel):
    client_uuid: str = ""
    line_items: list[LineItem] = []
    tax: TaxConfiguration = Field(default_factory=TaxConfiguration)
    issue_date: str = ""
    due_date: str = ""
    notes: str = ""


class Invoice(BaseModel):
    id: int | None = None
    uuid: str = ""
    invoice_number: str = ""
    client_uuid: str
    related_quote_uuid: str | None = None
    line_items: list[LineItem] = []
    tax: TaxConfiguration = Field(default_factory=TaxConfiguration)
    subtotal: Decimal = Decimal("0.00")
    tax_amount: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")
    issue_date: date
    due_date: date
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sent_at: datetime | None = None
    paid_at: datetime | None = None

    @field_validator("status")
    @classmethod
    def _stored_status(cls, value: InvoiceStatus) -> InvoiceStatus:
        if value is InvoiceStatus.OVERDUE:
            raise ValueError("Overdue is derived from due_date and cannot be stored")
        return value

    def is_overdue(self, today: date) -> bool:
        return self.status is InvoiceStatus.SENT and self.due_date < today

    def display_status(self, today: date) -> InvoiceStatus:
        if self.is_overdue(today):
            return InvoiceStatus.OVERDUE
        return self.status
