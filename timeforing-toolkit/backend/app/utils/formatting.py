"""
Timeføring - Time Registration & Billing
Display Formatting Helpers

Hours, Norwegian krone amounts and dates as they are shown to the user.
"""
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Union

from app.config import MONTH_ABBREVIATIONS, WEEKDAY_NAMES

Number = Union[int, float, Decimal]

NBSP = "\u00a0"
MINUS_SIGN = "\u2212"


def format_hours(hours: Number, suffix: str = "") -> str:
    """
    Format hours without needless decimals.

    2.0 -> "2", 2.5 -> "2.50". `suffix` is appended as-is ("t" for timer).
    """
    if hours % 1 == 0:
        text = str(int(hours))
    else:
        exact = Decimal(hours) if not isinstance(hours, Decimal) else hours
        text = str(exact.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    return f"{text}{suffix}"


def format_currency(amount: Number) -> str:
    """Format an amount as Norwegian kroner, e.g. "1 500,00 kr" """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = MINUS_SIGN if value < 0 else ""

    # 1,500.00 -> 1 500,00
    grouped = f"{abs(value):,.2f}"
    grouped = grouped.replace(",", NBSP).replace(".", ",")

    return f"{sign}{grouped}{NBSP}kr"


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def format_date(value: Union[date, datetime]) -> str:
    """dd.MM.yyyy"""
    return _as_date(value).strftime("%d.%m.%Y")


def week_start(value: Union[date, datetime]) -> date:
    """Monday of the week containing `value`"""
    day = _as_date(value)
    return day - timedelta(days=day.weekday())


def week_dates(value: Union[date, datetime]) -> List[date]:
    """All dates of the week containing `value`, Monday through Sunday"""
    start = week_start(value)
    return [start + timedelta(days=i) for i in range(7)]


def week_day_headers(value: Union[date, datetime]) -> List[Dict[str, str]]:
    """Column headers for the weekly table"""
    return [
        {
            "day_name": WEEKDAY_NAMES[day.weekday()],
            "day_number": str(day.day),
            "month": MONTH_ABBREVIATIONS[day.month - 1],
            "date": day.isoformat(),
        }
        for day in week_dates(value)
    ]


# æ, ø, å follow z in the Norwegian alphabet; code point order has å first
_NORWEGIAN_LETTER_RANK = {
    "æ": 0x10000,
    "ø": 0x10001,
    "å": 0x10002,
}


def norwegian_sort_key(text: str) -> List[int]:
    """Case-insensitive sort key in Norwegian alphabetical order"""
    return [_NORWEGIAN_LETTER_RANK.get(ch, ord(ch)) for ch in text.lower()]
