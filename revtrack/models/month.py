"""Calendar month value type.

Months are naive local-calendar values with no timezone component.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True, order=True)
class MonthKey:
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")

    @classmethod
    def parse(cls, text: str) -> MonthKey:
        match = _MONTH_KEY_RE.match(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise ValueError(f"Invalid month key: {text!r} (expected YYYY-MM)")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def coerce(cls, value: MonthKey | str) -> MonthKey:
        if isinstance(value, MonthKey):
            return value
        return cls.parse(value)

    @classmethod
    def from_date(cls, d: date) -> MonthKey:
        return cls(d.year, d.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def next(self) -> MonthKey:
        if self.month == 12:
            return MonthKey(self.year + 1, 1)
        return MonthKey(self.year, self.month + 1)

    def previous(self) -> MonthKey:
        if self.month == 1:
            return MonthKey(self.year - 1, 12)
        return MonthKey(self.year, self.month - 1)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])


def months_between(start: MonthKey | str, end: MonthKey | str) -> list[MonthKey]:
    """Every month from ``start`` to ``end`` inclusive, ascending.

    Returns an empty list when ``start`` is after ``end``.
    """
    current = MonthKey.coerce(start)
    last = MonthKey.coerce(end)
    out: list[MonthKey] = []
    while current <= last:
        out.append(current)
        current = current.next()
    return out


def year_months(year: int) -> list[MonthKey]:
    return [MonthKey(year, m) for m in range(1, 13)]
