from __future__ import annotations

import math
from datetime import date

# Largest amount a signed 64-bit INTEGER column can hold
MAX_CENTS = 2**63 - 1


def format_eur(cents: int) -> str:
    """Format cents as a Dutch euro string: 123456 -> '€ 1.234,56'"""
    euros = cents / 100
    formatted = f"{euros:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"€ {formatted}"


def parse_eur(text: str) -> int | None:
    """Parse a euro amount string into cents. Returns None on invalid input.

    Accepts formats like '1234', '1234.50', '1.234,50', '1234,5'.
    Non-finite values and amounts beyond ``MAX_CENTS`` are invalid.
    """
    text = text.strip().removeprefix("€").strip()
    if not text:
        return None
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    try:
        value = float(text) * 100
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    cents = int(round(value))
    if abs(cents) > MAX_CENTS:
        return None
    return cents


def parse_date(text: str) -> date | None:
    """Parse an ISO 'YYYY-MM-DD' string. Returns None on blank or invalid input."""
    text = (text or "").strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None
