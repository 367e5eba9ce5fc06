from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from revtrack.models.business import Business
from revtrack.services.business_service import BusinessService

console = Console()

ALL_BUSINESSES = "Alle bedrijven"


def select_business(business_service: BusinessService, prompt: str, allow_none: str | None = None) -> Business | None:
    """Prompt for a business. Returns None when cancelled or ``allow_none`` is picked."""
    businesses = business_service.list_businesses()
    choices = {f"{b.id} - {b.name}": b for b in businesses}
    options = list(choices.keys())
    if allow_none:
        options = [allow_none] + options
    if not options:
        return None
    choice = questionary.select(prompt, choices=options).ask()
    if choice is None or choice == allow_none:
        return None
    return choices[choice]


def business_management_menu(business_service: BusinessService) -> None:
    while True:
        choice = questionary.select(
            "Bedrijven",
            choices=[
                "Bedrijven tonen",
                "Nieuw bedrijf",
                "Bedrijf hernoemen",
                "Bedrijf verwijderen",
                "Terug",
            ],
        ).ask()

        if choice is None or choice == "Terug":
            break
        elif choice == "Bedrijven tonen":
            _list_businesses(business_service)
        elif choice == "Nieuw bedrijf":
            _create_business(business_service)
        elif choice == "Bedrijf hernoemen":
            _rename_business(business_service)
        elif choice == "Bedrijf verwijderen":
            _delete_business(business_service)


def _list_businesses(business_service: BusinessService) -> None:
    businesses = business_service.list_businesses()
    if not businesses:
        console.print("[yellow]Nog geen bedrijven.[/yellow]")
        return

    table = Table(title="Bedrijven")
    table.add_column("#", style="dim")
    table.add_column("Naam", style="bold")
    table.add_column("Omschrijving")
    for b in businesses:
        table.add_row(str(b.id), b.name, b.description)
    console.print()
    console.print(table)


def _create_business(business_service: BusinessService) -> None:
    name = questionary.text("Naam:").ask()
    if not name or not name.strip():
        console.print("[yellow]Geannuleerd.[/yellow]")
        return
    description = questionary.text("Omschrijving (optioneel):").ask() or ""
    business = business_service.create_business(name, description)
    console.print(f"[green]Bedrijf '{business.name}' toegevoegd.[/green]")


def _rename_business(business_service: BusinessService) -> None:
    business = select_business(business_service, "Welk bedrijf?", allow_none="Terug")
    if business is None:
        return
    name = questionary.text("Nieuwe naam:", default=business.name).ask()
    if name is None:
        return
    try:
        business = business_service.rename_business(business, name)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return
    console.print(f"[green]Bedrijf hernoemd naar '{business.name}'.[/green]")


def _delete_business(business_service: BusinessService) -> None:
    business = select_business(business_service, "Welk bedrijf?", allow_none="Terug")
    if business is None:
        return
    confirm = questionary.confirm(
        f"'{business.name}' en alle bijbehorende items verwijderen?", default=False
    ).ask()
    if confirm:
        business_service.delete_business(business.id)
        console.print("[green]Bedrijf verwijderd.[/green]")
