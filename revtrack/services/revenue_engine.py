"""Monthly revenue aggregation.

Pure functions over read-only item snapshots.  Two accounting modes are
supported:

* ``cash``: revenue lands in the month money changes hands.  Yearly
  subscriptions are recognized once, in their anniversary month.
* ``mrr``: recurring charges are spread evenly over every active month.
  One-time and variable income never count towards MRR.

Item prices are integer cents; series amounts are whole currency units.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction

from revtrack.models.item import Cadence, OneTimeItem, RecurringItem, VariableItem
from revtrack.models.month import MonthKey, months_between
from revtrack.repositories.base import Item

logger = logging.getLogger(__name__)

_HALF = Fraction(1, 2)
_ZERO = Fraction(0)


class InvalidItemKind(ValueError):
    """An item with an unknown billing kind or cadence reached the engine."""


class AccountingMode(str, Enum):
    CASH = "cash"
    NORMALIZED = "mrr"


class RoundingPolicy(str, Enum):
    TOTAL = "total"
    ITEM = "item"


@dataclass(frozen=True)
class SeriesPoint:
    month: MonthKey
    amount: int


def _round_unit(value: Fraction) -> int:
    # half up, towards positive infinity
    return math.floor(value + _HALF)


def _to_units(cents: int) -> Fraction:
    return Fraction(cents, 100)


def _check_kind(item: Item) -> None:
    if isinstance(item, RecurringItem):
        if item.cadence not in (Cadence.MONTHLY, Cadence.YEARLY):
            raise InvalidItemKind(f"Unknown cadence {item.cadence!r} on item {item.id}")
    elif not isinstance(item, (OneTimeItem, VariableItem)):
        kind = getattr(item, "billing_kind", type(item).__name__)
        raise InvalidItemKind(f"Unknown billing kind {kind!r}")


def is_active_in_month(item: Item, year: int, month: int) -> bool:
    """Whether ``item`` counts as active in the given calendar month.

    Recurring items are active for any month overlapping
    ``[start_date, end_date]``; partial months count fully.
    """
    _check_kind(item)
    key = MonthKey(year, month)
    if isinstance(item, OneTimeItem):
        return MonthKey.from_date(item.start_date) == key
    if isinstance(item, VariableItem):
        return str(key) in item.monthly_amounts
    if item.start_date > key.last_day:
        return False
    return item.end_date is None or item.end_date >= key.first_day


def billing_months_cash(item: Item, from_month: MonthKey | str, to_month: MonthKey | str) -> list[MonthKey]:
    """Months within ``[from_month, to_month]`` in which a payment is recognized."""
    _check_kind(item)
    months = months_between(from_month, to_month)

    if isinstance(item, OneTimeItem):
        paid = MonthKey.from_date(item.start_date)
        return [paid] if paid in months else []

    if isinstance(item, VariableItem):
        return [mk for mk in months if str(mk) in item.monthly_amounts]

    anniversary = item.start_date.month
    out: list[MonthKey] = []
    for mk in months:
        if not is_active_in_month(item, mk.year, mk.month):
            continue
        if item.cadence == Cadence.MONTHLY or mk.month == anniversary:
            out.append(mk)
    return out


def monthly_normalized_amount(item: Item) -> Fraction:
    """Monthly-equivalent recurring revenue of ``item`` in currency units."""
    _check_kind(item)
    if not isinstance(item, RecurringItem):
        return _ZERO
    if item.cadence == Cadence.MONTHLY:
        return _to_units(item.price)
    return _to_units(item.price) / 12


def _cash_contributions(
    item: Item, months: set[MonthKey], first: MonthKey, last: MonthKey
) -> Iterator[tuple[MonthKey, Fraction]]:
    for mk in billing_months_cash(item, first, last):
        if mk not in months:
            continue
        if isinstance(item, VariableItem):
            yield mk, _to_units(item.monthly_amounts[str(mk)])
        else:
            yield mk, _to_units(item.price)


def _normalized_contributions(item: Item, months: Iterable[MonthKey]) -> Iterator[tuple[MonthKey, Fraction]]:
    if isinstance(item, VariableItem):
        return
    amount = monthly_normalized_amount(item)
    for mk in months:
        if is_active_in_month(item, mk.year, mk.month):
            yield mk, amount


def compute_series(
    items: Sequence[Item],
    mode: AccountingMode | str,
    months: Sequence[MonthKey | str],
    rounding: RoundingPolicy | str = RoundingPolicy.TOTAL,
) -> list[SeriesPoint]:
    """Aggregate ``items`` into one rounded amount per requested month.

    The output has exactly one point per entry of ``months``, in the same
    order.  With the default rounding policy each monthly total is rounded
    once, after every item has been added.
    """
    mode = AccountingMode(mode)
    rounding = RoundingPolicy(rounding)
    keys = [MonthKey.coerce(m) for m in months]
    if not keys:
        return []

    totals: dict[MonthKey, Fraction] = {mk: _ZERO for mk in keys}
    requested = set(keys)
    first, last = min(keys), max(keys)

    for item in items:
        if mode == AccountingMode.CASH:
            contributions = _cash_contributions(item, requested, first, last)
        else:
            _check_kind(item)
            contributions = _normalized_contributions(item, sorted(requested))
        for mk, amount in contributions:
            if rounding == RoundingPolicy.ITEM:
                amount = Fraction(_round_unit(amount))
            totals[mk] += amount

    logger.debug("Computed %s series over %d items, %d months", mode.value, len(items), len(keys))
    return [SeriesPoint(month=mk, amount=_round_unit(totals[mk])) for mk in keys]
