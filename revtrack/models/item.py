from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from revtrack.models.month import MonthKey


class BillingKind(str, Enum):
    RECURRING = "recurring"
    ONE_TIME = "onetime"
    VARIABLE = "variable"


class Cadence(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ItemBase(BaseModel):
    id: int | None = None
    uuid: str = ""
    business_id: int | None = None
    customer: str = ""
    plan_name: str = ""
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class RecurringItem(ItemBase):
    billing_kind: Literal[BillingKind.RECURRING] = BillingKind.RECURRING
    price: int = 0  # cents per billing cycle
    cadence: Cadence = Cadence.MONTHLY
    start_date: date
    end_date: date | None = None


class OneTimeItem(ItemBase):
    billing_kind: Literal[BillingKind.ONE_TIME] = BillingKind.ONE_TIME
    price: int = 0  # cents
    start_date: date  # payment date


class VariableItem(ItemBase):
    billing_kind: Literal[BillingKind.VARIABLE] = BillingKind.VARIABLE
    monthly_amounts: dict[str, int] = {}  # 'YYYY-MM' -> cents

    @field_validator("monthly_amounts", mode="before")
    @classmethod
    def _normalize_month_keys(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {str(MonthKey.coerce(k)): v for k, v in value.items()}


BillableItem = Annotated[
    Union[RecurringItem, OneTimeItem, VariableItem],
    Field(discriminator="billing_kind"),
]

_item_adapter: TypeAdapter[BillableItem] = TypeAdapter(BillableItem)


def parse_item(data: dict[str, Any]) -> RecurringItem | OneTimeItem | VariableItem:
    """Validate a mapping into the item variant selected by ``billing_kind``."""
    return _item_adapter.validate_python(data)
