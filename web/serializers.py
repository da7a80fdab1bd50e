from __future__ import annotations

from datetime import date

from daflash.models.invoice import Invoice
from daflash.models.quote import Quote
from daflash.money import format_usd
from daflash.services.invoice_service import InvoiceComposer
from daflash.services.quote_service import QuoteComposer


def serialize_quote(quote: Quote, today: date) -> dict:
    data = quote.model_dump(mode="json")
    data["display_status"] = quote.display_status(today).value
    data["totals"] = QuoteComposer.from_quote(quote).compute_totals().model_dump(mode="json")
    data["grand_total_display"] = format_usd(quote.grand_total)
    return data


def serialize_invoice(invoice: Invoice, today: date) -> dict:
    data = invoice.model_dump(mode="json")
    data["display_status"] = invoice.display_status(today).value
    data["totals"] = InvoiceComposer.from_invoice(invoice).compute_totals().model_dump(mode="json")
    data["total_display"] = format_usd(invoice.total)
    return data
