from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from daflash import clock
from daflash.errors import InvalidTransitionError
from daflash.models.invoice import Invoice, InvoiceStatus
from daflash.models.quote import Quote, QuoteStatus
from daflash.money import format_usd
from daflash.services.invoice_service import InvoiceService
from daflash.services.quote_service import QuoteService

console = Console()

_STATUS_STYLES = {
    "Draft": "dim",
    "Sent": "blue",
    "Accepted": "green",
    "Paid": "green",
    "Declined": "red",
    "Cancelled": "red",
    "Expired": "yellow",
    "Overdue": "bold red",
}

BACK = "Back"


def _status(value: str) -> str:
    style = _STATUS_STYLES.get(value, "")
    return f"[{style}]{value}[/{style}]" if style else value


def _quote_table(quotes: list[Quote]) -> Table:
    today = clock.today()
    table = Table(title="Quotes")
    table.add_column("Number", style="cyan")
    table.add_column("Status")
    table.add_column("Expires")
    table.add_column("One-time", justify="right")
    table.add_column("Monthly", justify="right")
    table.add_column("Tax", justify="right")
    for q in quotes:
        table.add_row(
            q.quote_number,
            _status(q.display_status(today).value),
            q.expiry_date.isoformat(),
            format_usd(q.grand_total),
            format_usd(q.monthly_subtotal),
            format_usd(q.tax_amount),
        )
    return table


def _invoice_table(invoices: list[Invoice]) -> Table:
    today = clock.today()
    table = Table(title="Invoices")
    table.add_column("Number", style="cyan")
    table.add_column("Status")
    table.add_column("Issued")
    table.add_column("Due")
    table.add_column("Total", justify="right")
    for i in invoices:
        table.add_row(
            i.invoice_number,
            _status(i.display_status(today).value),
            i.issue_date.isoformat(),
            i.due_date.isoformat(),
            format_usd(i.total),
        )
    return table


def list_quotes_menu(quote_service: QuoteService, invoice_service: InvoiceService) -> None:
    quotes = quote_service.list_quotes()
    if not quotes:
        console.print("[yellow]No quotes yet.[/yellow]")
        return

    console.print()
    console.print(_quote_table(quotes))

    choices = [q.quote_number for q in quotes] + [BACK]
    choice = questionary.select("Select a quote:", choices=choices).ask()
    if choice is None or choice == BACK:
        return
    quote = next(q for q in quotes if q.quote_number == choice)
    _quote_actions(quote, quote_service, invoice_service)


def _quote_actions(quote: Quote, quote_service: QuoteService, invoice_service: InvoiceService) -> None:
    actions = {
        QuoteStatus.DRAFT: ["Mark Sent"],
        QuoteStatus.SENT: ["Mark Accepted", "Mark Declined"],
        QuoteStatus.ACCEPTED: ["Create Invoice"],
    }.get(quote.status, [])
    choice = questionary.select(f"{quote.quote_number}:", choices=actions + [BACK]).ask()
    if choice is None or choice == BACK:
        return

    try:
        if choice == "Mark Sent":
            quote = quote_service.mark_sent(quote.uuid)
        elif choice == "Mark Accepted":
            quote = quote_service.mark_accepted(quote.uuid)
        elif choice == "Mark Declined":
            quote = quote_service.mark_declined(quote.uuid)
        elif choice == "Create Invoice":
            invoice = invoice_service.create_from_quote(quote.uuid)
            console.print(
                f"[green bold]Invoice {invoice.invoice_number} created "
                f"({format_usd(invoice.total)}).[/green bold]"
            )
            return
    except InvalidTransitionError as exc:
        console.print(f"[red]{exc}[/red]")
        return
    console.print(f"[green]{quote.quote_number} is now {quote.status.value}.[/green]")


def list_invoices_menu(invoice_service: InvoiceService) -> None:
    invoices = invoice_service.list_invoices()
    if not invoices:
        console.print("[yellow]No invoices yet.[/yellow]")
        return

    console.print()
    console.print(_invoice_table(invoices))

    choices = [i.invoice_number for i in invoices] + [BACK]
    choice = questionary.select("Select an invoice:", choices=choices).ask()
    if choice is None or choice == BACK:
        return
    invoice = next(i for i in invoices if i.invoice_number == choice)

    actions = {
        InvoiceStatus.DRAFT: ["Mark Sent", "Cancel Invoice"],
        InvoiceStatus.SENT: ["Mark Paid", "Cancel Invoice"],
    }.get(invoice.status, [])
    action = questionary.select(f"{invoice.invoice_number}:", choices=actions + [BACK]).ask()
    if action is None or action == BACK:
        return

    try:
        if action == "Mark Sent":
            invoice = invoice_service.mark_sent(invoice.uuid)
        elif action == "Mark Paid":
            invoice = invoice_service.mark_paid(invoice.uuid)
        elif action == "Cancel Invoice":
            if not questionary.confirm(f"Cancel {invoice.invoice_number}?", default=False).ask():
                return
            invoice = invoice_service.cancel(invoice.uuid)
    except InvalidTransitionError as exc:
        console.print(f"[red]{exc}[/red]")
        return
    console.print(f"[green]{invoice.invoice_number} is now {invoice.status.value}.[/green]")
