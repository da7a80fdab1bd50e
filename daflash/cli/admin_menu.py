from __future__ import annotations

import questionary
from rich.console import Console

from daflash.services.authorization_service import hash_password

console = Console()


def password_hash_menu() -> None:
    console.print()
    console.print("[bold]Admin Password Hash[/bold]", style="cyan")

    password = questionary.password("Password:").ask()
    if not password:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    confirm = questionary.password("Confirm password:").ask()
    if password != confirm:
        console.print("[red]Passwords do not match.[/red]")
        return

    console.print()
    console.print("Add this to your environment or .env file:")
    console.print(f"DAFLASH_ADMIN_PASSWORD_HASH='{hash_password(password)}'", markup=False)
