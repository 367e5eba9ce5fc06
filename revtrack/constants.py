from revtrack.models.item import BillingKind, Cadence
from revtrack.services.revenue_engine import AccountingMode

MONTHS_NL = {
    "01": "jan",
    "02": "feb",
    "03": "mrt",
    "04": "apr",
    "05": "mei",
    "06": "jun",
    "07": "jul",
    "08": "aug",
    "09": "sep",
    "10": "okt",
    "11": "nov",
    "12": "dec",
}

KIND_LABELS = {
    BillingKind.RECURRING: "Abonnement",
    BillingKind.ONE_TIME: "Eenmalig",
    BillingKind.VARIABLE: "Variabel",
}

CADENCE_LABELS = {Cadence.MONTHLY: "Maandelijks", Cadence.YEARLY: "Jaarlijks"}

MODE_LABELS = {AccountingMode.CASH: "Cash", AccountingMode.NORMALIZED: "MRR"}


def format_month(ref: str) -> str:
    """'2025-03' -> 'mrt 2025'"""
    if not ref or "-" not in ref:
        return ref or ""
    year, month = ref.split("-")
    return f"{MONTHS_NL.get(month, month)} {year}"
