"""Seed the database with the demo businesses and items.

Usage:
    python -m revtrack.scripts.seed
"""

from __future__ import annotations

from datetime import date

from rich.console import Console
from rich.table import Table
from sqlalchemy import text

from revtrack.constants import KIND_LABELS
from revtrack.db import get_connection, initialize_db
from revtrack.logging import configure_logging, reconfigure
from revtrack.models import format_eur
from revtrack.models.item import Cadence, OneTimeItem, RecurringItem, VariableItem
from revtrack.repositories.factory import get_business_repository, get_item_repository
from revtrack.services.business_service import BusinessService
from revtrack.services.item_service import ItemService

console = Console()

TABLES_TO_TRUNCATE = ["item_monthly_amounts", "items", "businesses"]

BUSINESS_NAMES = ["TableTech", "WishWeb", "Carlendify"]

DEMO_ITEMS = [
    RecurringItem(
        customer="Cafe de Markt",
        plan_name="QR Basic",
        price=8000,
        cadence=Cadence.MONTHLY,
        start_date=date(2025, 5, 10),
        notes="Start in mei",
    ),
    RecurringItem(
        customer="Bistro Noord",
        plan_name="QR Pro (jaar)",
        price=90000,
        cadence=Cadence.YEARLY,
        start_date=date(2025, 2, 21),
        notes="Jaar vooruitbetaald",
    ),
    OneTimeItem(
        customer="Losse factuur",
        plan_name="Setup kosten",
        price=25000,
        start_date=date(2025, 6, 5),
        notes="Eenmalige onboarding",
    ),
    VariableItem(
        customer="App met variabele omzet",
        plan_name="Ad revenue",
        monthly_amounts={"2025-01": 12000, "2025-02": 26000, "2025-05": 9000},
        notes="Vul per maand in",
    ),
]


def truncate() -> None:
    conn = get_connection()
    for table in TABLES_TO_TRUNCATE:
        conn.execute(text(f"DELETE FROM {table}"))
    conn.commit()


def seed() -> None:
    business_service = BusinessService(get_business_repository())
    item_service = ItemService(get_item_repository())

    for name in BUSINESS_NAMES:
        business_service.create_business(name)

    table = Table(title="Demo items")
    table.add_column("Type")
    table.add_column("Klant", style="bold")
    table.add_column("Plan")
    table.add_column("Prijs", justify="right")

    for template in DEMO_ITEMS:
        item = item_service.create_item(template.model_copy(deep=True))
        price = format_eur(item.price) if not isinstance(item, VariableItem) else "-"
        table.add_row(KIND_LABELS[item.billing_kind], item.customer, item.plan_name, price)

    console.print(table)
    console.print(f"[green]Seeded {len(BUSINESS_NAMES)} businesses and {len(DEMO_ITEMS)} items.[/green]")


def main() -> None:
    configure_logging()
    initialize_db()
    reconfigure()
    truncate()
    seed()


if __name__ == "__main__":
    main()
