from __future__ import annotations

import logging
from datetime import date

from revtrack.models import MAX_CENTS
from revtrack.models.item import BillingKind, ItemBase, OneTimeItem, RecurringItem, VariableItem
from revtrack.models.month import MonthKey
from revtrack.repositories.base import Item, ItemRepository

logger = logging.getLogger(__name__)

_COMMON_FIELDS = set(ItemBase.model_fields)


def validate_item(item: Item) -> None:
    """Reject item data the revenue engine would silently accept."""
    if isinstance(item, VariableItem):
        for month, amount in item.monthly_amounts.items():
            if amount < 0:
                raise ValueError(f"Amount for {month} cannot be negative")
            if amount > MAX_CENTS:
                raise ValueError(f"Amount for {month} is too large")
        return
    if item.price < 0:
        raise ValueError("Price cannot be negative")
    if item.price > MAX_CENTS:
        raise ValueError("Price is too large")
    if isinstance(item, RecurringItem) and item.end_date is not None and item.end_date < item.start_date:
        raise ValueError("End date cannot be before the start date")


class ItemService:
    def __init__(self, repo: ItemRepository) -> None:
        self.repo = repo

    def create_item(self, item: Item) -> Item:
        validate_item(item)
        result = self.repo.create(item)
        logger.info(
            "Item created: id=%s, kind=%s, customer=%s",
            result.id,
            result.billing_kind.value,
            result.customer,
        )
        return result

    def list_items(self, business_id: int | None = None) -> list[Item]:
        if business_id is None:
            result = self.repo.list_all()
        else:
            result = self.repo.list_by_business(business_id)
        logger.debug("Listed %d items (business=%s)", len(result), business_id)
        return result

    def get_item(self, item_id: int) -> Item | None:
        result = self.repo.get_by_id(item_id)
        logger.debug("get_item id=%s found=%s", item_id, result is not None)
        return result

    def update_item(self, item: Item) -> Item:
        validate_item(item)
        result = self.repo.update(item)
        logger.info("Item updated: id=%s, kind=%s", result.id, result.billing_kind.value)
        return result

    def set_variable_amount(self, item: Item, month: MonthKey | str, cents: int | None) -> Item:
        """Set one month of a variable item; zero or ``None`` clears the month."""
        if not isinstance(item, VariableItem):
            raise ValueError("Monthly amounts only apply to variable items")
        key = str(MonthKey.coerce(month))
        amounts = dict(item.monthly_amounts)
        if cents:
            amounts[key] = cents
        else:
            amounts.pop(key, None)
        result = self.update_item(item.model_copy(update={"monthly_amounts": amounts}))
        logger.info("Variable amount for item %s, month %s set to %s", result.id, key, cents or 0)
        return result

    def change_kind(self, item: Item, kind: BillingKind | str, today: date | None = None) -> Item:
        """Re-type an item, keeping its descriptive fields.

        Price and start date carry over where both variants have them; a
        variable item turned into a dated one starts today at price zero.
        """
        kind = BillingKind(kind)
        if item.billing_kind == kind:
            return item
        common = item.model_dump(include=_COMMON_FIELDS)
        price = getattr(item, "price", 0)
        start = getattr(item, "start_date", None) or today or date.today()
        converted: Item
        if kind == BillingKind.RECURRING:
            converted = RecurringItem(**common, price=price, start_date=start)
        elif kind == BillingKind.ONE_TIME:
            converted = OneTimeItem(**common, price=price, start_date=start)
        else:
            converted = VariableItem(**common)
        result = self.update_item(converted)
        logger.info("Item %s changed from %s to %s", result.id, item.billing_kind.value, kind.value)
        return result

    def delete_item(self, item_id: int) -> None:
        self.repo.delete(item_id)
        logger.info("Item %s soft-deleted", item_id)
