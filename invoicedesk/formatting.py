from __future__ import annotations

from datetime import date, datetime
from typing import Any


def number_value(value: Any) -> int | float:
    number = float(value or 0)
    if number.is_integer():
        return int(number)
    return round(number, 2)


def format_amount(value: Any) -> str:
    number = number_value(value)
    if isinstance(number, int):
        return f"{number:,}"
    return f"{number:,.2f}"


def format_money(value: Any, currency: str = "Rs") -> str:
    return f"{currency} {format_amount(value)}"


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date(value: Any) -> str:
    parsed = _parse_date(value)
    if parsed is None:
        return str(value or "")
    return parsed.strftime("%Y/%m/%d")
