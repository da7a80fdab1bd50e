import questionary
from rich.console import Console

from daflash.cli.admin_menu import password_hash_menu
from daflash.cli.document_menu import list_invoices_menu, list_quotes_menu
from daflash.repositories.factory import (
    get_invoice_repository,
    get_number_allocator,
    get_quote_repository,
)
from daflash.services.invoice_service import InvoiceService
from daflash.services.quote_service import QuoteService
from daflash.settings import settings

console = Console()


def _build_services() -> tuple[QuoteService, InvoiceService]:
    quote_repo = get_quote_repository()
    invoice_repo = get_invoice_repository()
    default_tax = settings.default_tax_config()
    return (
        QuoteService(
            quote_repo,
            get_number_allocator(quote_repo),
            default_tax=default_tax,
            expiry_days=settings.quote_expiry_days,
        ),
        InvoiceService(
            invoice_repo,
            get_number_allocator(invoice_repo),
            quote_repo=quote_repo,
            default_tax=default_tax,
            due_days=settings.invoice_due_days,
        ),
    )


def main_menu() -> None:
    quote_service, invoice_service = _build_services()

    console.print()
    console.print("[bold]daflash back office[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "List Quotes",
                "List Invoices",
                "Generate Admin Password Hash",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Bye![/bold]")
            break
        elif choice == "List Quotes":
            list_quotes_menu(quote_service, invoice_service)
        elif choice == "List Invoices":
            list_invoices_menu(invoice_service)
        elif choice == "Generate Admin Password Hash":
            password_hash_menu()
