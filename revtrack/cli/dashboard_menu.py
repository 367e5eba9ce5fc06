from __future__ import annotations

import questionary
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from revtrack.cli.business_menu import ALL_BUSINESSES, select_business
from revtrack.constants import MODE_LABELS, format_month
from revtrack.models import format_eur
from revtrack.services.business_service import BusinessService
from revtrack.services.dashboard_service import Dashboard, DashboardService, year_choices
from revtrack.services.revenue_engine import AccountingMode, SeriesPoint
from revtrack.settings import settings

console = Console()

BAR_WIDTH = 40


def render_bars(series: list[SeriesPoint], width: int = BAR_WIDTH) -> Table:
    """One horizontal bar per month, scaled against the largest month."""
    peak = max([1] + [p.amount for p in series])
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Maand", style="dim")
    table.add_column("Staaf")
    table.add_column("Bedrag", justify="right")
    for point in series:
        length = round(point.amount / peak * width) if point.amount > 0 else 0
        table.add_row(
            format_month(str(point.month)),
            f"[#f5d38b]{'█' * length}[/#f5d38b]",
            format_eur(point.amount * 100),
        )
    return table


def render_dashboard(dashboard: Dashboard) -> None:
    cash = dashboard.mode == AccountingMode.CASH
    label = MODE_LABELS[dashboard.mode]
    kpis = Table.grid(padding=(0, 4))
    kpis.add_row(
        "Inkomen deze maand (cash)" if cash else "MRR (huidige maand)",
        f"Totaal {dashboard.year} ({label})",
        "Actieve items",
    )
    kpis.add_row(
        f"[bold]{format_eur(dashboard.current_amount * 100)}[/bold]",
        f"[bold]{format_eur(dashboard.total * 100)}[/bold]",
        f"[bold]{dashboard.item_count}[/bold]",
    )
    console.print()
    console.print(Panel(kpis, title="Kerncijfers"))

    title = "Maandelijkse inkomsten (cash)" if cash else "Maandelijkse terugkerende omzet (MRR)"
    console.print(Panel(render_bars(dashboard.series), title=f"{title} - {dashboard.year}"))


def dashboard_menu(dashboard_service: DashboardService, business_service: BusinessService) -> None:
    mode = AccountingMode(settings.default_mode)
    year = year_choices()[0]
    business_id: int | None = None

    while True:
        dashboard = dashboard_service.build(year, mode, business_id=business_id)
        render_dashboard(dashboard)

        other = AccountingMode.NORMALIZED if mode == AccountingMode.CASH else AccountingMode.CASH
        choice = questionary.select(
            "Dashboard",
            choices=[
                f"Wissel naar {MODE_LABELS[other]}",
                "Jaar kiezen",
                "Bedrijf filteren",
                "Terug",
            ],
        ).ask()

        if choice is None or choice == "Terug":
            break
        elif choice.startswith("Wissel naar"):
            mode = other
        elif choice == "Jaar kiezen":
            picked = questionary.select("Jaar:", choices=[str(y) for y in year_choices()]).ask()
            if picked:
                year = int(picked)
        elif choice == "Bedrijf filteren":
            business = select_business(business_service, "Bedrijf:", allow_none=ALL_BUSINESSES)
            business_id = business.id if business else None
