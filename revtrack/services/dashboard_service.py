from __future__ import annotations

import logging
from datetime import date

from pydantic import BaseModel

from revtrack.models.month import MonthKey, year_months
from revtrack.services.item_service import ItemService
from revtrack.services.revenue_engine import AccountingMode, RoundingPolicy, SeriesPoint, compute_series
from revtrack.settings import settings

logger = logging.getLogger(__name__)


class Dashboard(BaseModel):
    year: int
    mode: AccountingMode
    business_id: int | None = None
    series: list[SeriesPoint]
    total: int
    current_month: MonthKey
    current_amount: int
    item_count: int


def year_choices(today: date | None = None, count: int = 6) -> list[int]:
    """The current year followed by the ``count - 1`` years before it."""
    today = today or date.today()
    return [today.year - i for i in range(count)]


class DashboardService:
    def __init__(self, item_service: ItemService, rounding: RoundingPolicy | str | None = None) -> None:
        self.item_service = item_service
        self.rounding = RoundingPolicy(rounding or settings.rounding_policy)

    def build(
        self,
        year: int,
        mode: AccountingMode | str,
        business_id: int | None = None,
        today: date | None = None,
    ) -> Dashboard:
        mode = AccountingMode(mode)
        today = today or date.today()
        items = self.item_service.list_items(business_id)

        series = compute_series(items, mode, year_months(year), rounding=self.rounding)
        current = MonthKey.from_date(today)

        if mode == AccountingMode.CASH:
            current_amount = next((p.amount for p in series if p.month == current), 0)
        else:
            current_amount = compute_series(items, AccountingMode.NORMALIZED, [current], rounding=self.rounding)[0].amount

        dashboard = Dashboard(
            year=year,
            mode=mode,
            business_id=business_id,
            series=series,
            total=sum(p.amount for p in series),
            current_month=current,
            current_amount=current_amount,
            item_count=len(items),
        )
        logger.info(
            "Dashboard built: year=%s, mode=%s, business=%s, total=%d",
            year,
            mode.value,
            business_id,
            dashboard.total,
        )
        return dashboard
