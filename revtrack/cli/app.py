import questionary
from rich.console import Console

from revtrack.cli.business_menu import business_management_menu
from revtrack.cli.dashboard_menu import dashboard_menu
from revtrack.cli.item_menu import item_management_menu
from revtrack.repositories.factory import get_business_repository, get_item_repository
from revtrack.services.business_service import BusinessService
from revtrack.services.dashboard_service import DashboardService
from revtrack.services.item_service import ItemService

console = Console()


def _build_services() -> tuple[BusinessService, ItemService, DashboardService]:
    business_service = BusinessService(get_business_repository())
    item_service = ItemService(get_item_repository())
    return business_service, item_service, DashboardService(item_service)


def main_menu() -> None:
    business_service, item_service, dashboard_service = _build_services()

    console.print()
    console.print("[bold]Revenue Tracker[/bold]", style="cyan")
    console.print("Inkomsten bijhouden per bedrijf en item (abonnement, eenmalig of variabel).")
    console.print()

    while True:
        choice = questionary.select(
            "Hoofdmenu",
            choices=[
                "Dashboard",
                "Items beheren",
                "Bedrijven beheren",
                "Afsluiten",
            ],
        ).ask()

        if choice is None or choice == "Afsluiten":
            console.print("[bold]Tot ziens![/bold]")
            break
        elif choice == "Dashboard":
            dashboard_menu(dashboard_service, business_service)
        elif choice == "Items beheren":
            item_management_menu(item_service, business_service)
        elif choice == "Bedrijven beheren":
            business_management_menu(business_service)
