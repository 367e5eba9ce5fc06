from __future__ import annotations

from datetime import date

import questionary
from rich.console import Console
from rich.table import Table

from revtrack.cli.business_menu import ALL_BUSINESSES, select_business
from revtrack.constants import CADENCE_LABELS, KIND_LABELS, format_month
from revtrack.models import format_eur, parse_date, parse_eur
from revtrack.models.business import Business
from revtrack.models.item import BillingKind, Cadence, OneTimeItem, RecurringItem, VariableItem
from revtrack.models.month import year_months
from revtrack.repositories.base import Item
from revtrack.services.business_service import BusinessService
from revtrack.services.dashboard_service import year_choices
from revtrack.services.item_service import ItemService

console = Console()

NO_BUSINESS = "-"
_KIND_BY_LABEL = {label: kind for kind, label in KIND_LABELS.items()}
_CADENCE_BY_LABEL = {label: cadence for cadence, label in CADENCE_LABELS.items()}


def _ask_amount(prompt: str, default: str = "") -> int | None:
    while True:
        raw = questionary.text(prompt, default=default).ask()
        if raw is None:
            return None
        parsed = parse_eur(raw)
        if parsed is not None and parsed >= 0:
            return parsed
        console.print("[red]Ongeldig bedrag. Probeer opnieuw.[/red]")


def _ask_date(prompt: str, default: str = "", optional: bool = False) -> date | None:
    while True:
        raw = questionary.text(prompt, default=default).ask()
        if raw is None:
            return None
        if optional and not raw.strip():
            return None
        parsed = parse_date(raw)
        if parsed is not None:
            return parsed
        console.print("[red]Ongeldige datum. Gebruik JJJJ-MM-DD.[/red]")


def _business_names(business_service: BusinessService) -> dict[int, str]:
    return {b.id: b.name for b in business_service.list_businesses() if b.id is not None}


def _frequency_label(item: Item) -> str:
    if isinstance(item, RecurringItem):
        return CADENCE_LABELS[item.cadence]
    return "—"


def _price_label(item: Item) -> str:
    if isinstance(item, VariableItem):
        return f"{len(item.monthly_amounts)} maand(en)"
    return format_eur(item.price)


def render_items(items: list[Item], businesses: dict[int, str]) -> Table:
    table = Table(title="Items (abonnementen, eenmalig, variabel)")
    table.add_column("#", style="dim")
    table.add_column("Type")
    table.add_column("Bedrijf")
    table.add_column("Klant", style="bold")
    table.add_column("Plan")
    table.add_column("Frequentie")
    table.add_column("Prijs", justify="right")
    table.add_column("Datum / Start")
    table.add_column("Eind")
    table.add_column("Notities")

    for item in items:
        start = getattr(item, "start_date", None)
        end = getattr(item, "end_date", None)
        table.add_row(
            str(item.id),
            KIND_LABELS[item.billing_kind],
            businesses.get(item.business_id, NO_BUSINESS) if item.business_id else NO_BUSINESS,
            item.customer,
            item.plan_name,
            _frequency_label(item),
            _price_label(item),
            start.isoformat() if start else "—",
            end.isoformat() if end else "—",
            item.notes,
        )
    return table


def item_management_menu(item_service: ItemService, business_service: BusinessService) -> None:
    business_filter: Business | None = None

    while True:
        choice = questionary.select(
            "Items",
            choices=[
                "Items tonen",
                "Nieuw item",
                "Item bewerken",
                "Item verwijderen",
                "Bedrijf filteren",
                "Terug",
            ],
        ).ask()

        if choice is None or choice == "Terug":
            break
        elif choice == "Items tonen":
            _list_items(item_service, business_service, business_filter)
        elif choice == "Nieuw item":
            create_item_menu(item_service, business_service)
        elif choice == "Item bewerken":
            item = _select_item(item_service, business_filter)
            if item is not None:
                edit_item_menu(item, item_service, business_service)
        elif choice == "Item verwijderen":
            _delete_item(item_service, business_filter)
        elif choice == "Bedrijf filteren":
            business_filter = select_business(business_service, "Bedrijf:", allow_none=ALL_BUSINESSES)


def _list_items(item_service: ItemService, business_service: BusinessService, business: Business | None) -> None:
    items = item_service.list_items(business.id if business else None)
    if not items:
        console.print("[yellow]Geen items gevonden.[/yellow]")
        return
    console.print()
    console.print(render_items(items, _business_names(business_service)))


def _select_item(item_service: ItemService, business: Business | None) -> Item | None:
    items = item_service.list_items(business.id if business else None)
    if not items:
        console.print("[yellow]Geen items gevonden.[/yellow]")
        return None
    choices = {f"{i.id} - {i.customer} / {i.plan_name} ({KIND_LABELS[i.billing_kind]})": i for i in items}
    choice = questionary.select("Selecteer een item:", choices=list(choices.keys()) + ["Terug"]).ask()
    if choice is None or choice == "Terug":
        return None
    return choices[choice]


def create_item_menu(item_service: ItemService, business_service: BusinessService) -> Item | None:
    console.print()
    console.print("[bold]Nieuw item toevoegen[/bold]", style="cyan")

    kind_label = questionary.select("Type:", choices=list(_KIND_BY_LABEL.keys())).ask()
    if kind_label is None:
        return None
    kind = _KIND_BY_LABEL[kind_label]

    business = select_business(business_service, "Bedrijf:", allow_none=NO_BUSINESS)

    customer = questionary.text("Klantnaam:").ask()
    if not customer:
        console.print("[yellow]Geannuleerd.[/yellow]")
        return None
    plan_name = questionary.text("Plan / omschrijving:").ask()
    if not plan_name:
        console.print("[yellow]Geannuleerd.[/yellow]")
        return None

    common = dict(
        business_id=business.id if business else None,
        customer=customer.strip(),
        plan_name=plan_name.strip(),
    )

    item: Item
    if kind == BillingKind.VARIABLE:
        console.print("  [dim]Bij variabel vul je bedragen per maand in na opslaan.[/dim]")
        item = VariableItem(**common)
    else:
        price = _ask_amount("Prijs (EUR):")
        if price is None:
            return None
        if kind == BillingKind.RECURRING:
            cadence_label = questionary.select("Betalingsfrequentie:", choices=list(_CADENCE_BY_LABEL.keys())).ask()
            if cadence_label is None:
                return None
            start = _ask_date("Startdatum (JJJJ-MM-DD):", default=date.today().isoformat())
            if start is None:
                return None
            end = _ask_date("Einddatum (optioneel):", optional=True)
            item = RecurringItem(
                **common,
                price=price,
                cadence=_CADENCE_BY_LABEL[cadence_label],
                start_date=start,
                end_date=end,
            )
        else:
            paid = _ask_date("Betaaldatum (JJJJ-MM-DD):", default=date.today().isoformat())
            if paid is None:
                return None
            item = OneTimeItem(**common, price=price, start_date=paid)

    item.notes = (questionary.text("Notities:").ask() or "").strip()

    try:
        created = item_service.create_item(item)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return None
    console.print(f"[green]Item '{created.customer} - {created.plan_name}' opgeslagen.[/green]")
    return created


def _edit_choices(item: Item) -> list[str]:
    choices = ["Type", "Bedrijf", "Klant", "Plan", "Notities"]
    if isinstance(item, RecurringItem):
        choices += ["Prijs", "Frequentie", "Startdatum", "Einddatum"]
    elif isinstance(item, OneTimeItem):
        choices += ["Prijs", "Betaaldatum"]
    else:
        choices += ["Maanden bewerken"]
    return choices + ["Terug"]


def edit_item_menu(item: Item, item_service: ItemService, business_service: BusinessService) -> Item:
    while True:
        console.print()
        console.print(render_items([item], _business_names(business_service)))
        choice = questionary.select("Wat wil je bewerken?", choices=_edit_choices(item)).ask()

        if choice is None or choice == "Terug":
            return item
        if choice == "Maanden bewerken":
            item = edit_variable_months_menu(item, item_service)
            continue

        update = _prompt_field(choice, item, business_service)
        if update is None:
            continue
        try:
            if choice == "Type":
                item = item_service.change_kind(item, update["billing_kind"])
            else:
                item = item_service.update_item(item.model_copy(update=update))
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            continue
        console.print("[green]Item bijgewerkt.[/green]")


def _prompt_field(field: str, item: Item, business_service: BusinessService) -> dict | None:
    if field == "Type":
        label = questionary.select("Type:", choices=list(_KIND_BY_LABEL.keys())).ask()
        return {"billing_kind": _KIND_BY_LABEL[label]} if label else None
    if field == "Bedrijf":
        business = select_business(business_service, "Bedrijf:", allow_none=NO_BUSINESS)
        return {"business_id": business.id if business else None}
    if field in ("Klant", "Plan", "Notities"):
        attr = {"Klant": "customer", "Plan": "plan_name", "Notities": "notes"}[field]
        value = questionary.text(f"{field}:", default=getattr(item, attr)).ask()
        return {attr: value.strip()} if value is not None else None
    if field == "Prijs":
        price = _ask_amount("Prijs (EUR):", default=f"{item.price / 100:.2f}")
        return {"price": price} if price is not None else None
    if field == "Frequentie":
        label = questionary.select("Betalingsfrequentie:", choices=list(_CADENCE_BY_LABEL.keys())).ask()
        return {"cadence": _CADENCE_BY_LABEL[label]} if label else None
    if field in ("Startdatum", "Betaaldatum"):
        start = _ask_date(f"{field} (JJJJ-MM-DD):", default=item.start_date.isoformat())
        return {"start_date": start} if start is not None else None
    if field == "Einddatum":
        current = item.end_date.isoformat() if item.end_date else ""
        raw = questionary.text("Einddatum (leeg = geen):", default=current).ask()
        if raw is None:
            return None
        if not raw.strip():
            return {"end_date": None}
        end = parse_date(raw)
        if end is None:
            console.print("[red]Ongeldige datum. Gebruik JJJJ-MM-DD.[/red]")
            return None
        return {"end_date": end}
    return None


def edit_variable_months_menu(item: Item, item_service: ItemService) -> Item:
    """Edit a variable item's amounts month by month for a chosen year."""
    picked = questionary.select("Jaar:", choices=[str(y) for y in year_choices()]).ask()
    if picked is None:
        return item
    months = year_months(int(picked))

    while True:
        table = Table(title=f"Variabele bedragen bewerken ({picked})")
        table.add_column("Maand")
        table.add_column("Bedrag", justify="right")
        for mk in months:
            amount = item.monthly_amounts.get(str(mk))
            table.add_row(format_month(str(mk)), format_eur(amount) if amount is not None else "—")
        console.print(table)

        labels = {format_month(str(mk)): mk for mk in months}
        choice = questionary.select("Maand:", choices=list(labels.keys()) + ["Klaar"]).ask()
        if choice is None or choice == "Klaar":
            return item

        mk = labels[choice]
        current = item.monthly_amounts.get(str(mk))
        default = f"{current / 100:.2f}" if current is not None else ""
        raw = questionary.text(f"Bedrag voor {choice} (leeg of 0 = wissen):", default=default).ask()
        if raw is None:
            continue
        cents = parse_eur(raw) if raw.strip() else 0
        if cents is None or cents < 0:
            console.print("[red]Ongeldig bedrag. Probeer opnieuw.[/red]")
            continue
        item = item_service.set_variable_amount(item, mk, cents)


def _delete_item(item_service: ItemService, business: Business | None) -> None:
    item = _select_item(item_service, business)
    if item is None:
        return
    confirm = questionary.confirm(f"'{item.customer} - {item.plan_name}' verwijderen?", default=False).ask()
    if confirm:
        item_service.delete_item(item.id)
        console.print("[green]Item verwijderd.[/green]")
