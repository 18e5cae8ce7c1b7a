"""
Timeføring - Time Registration & Billing
Utilities Module
"""

from .decimal_input import (
    HoursInput,
    clamp_hours,
    format_number_with_comma,
    parse_decimal_input
)
from .formatting import (
    format_currency,
    format_date,
    format_hours,
    norwegian_sort_key,
    week_dates,
    week_day_headers,
    week_start
)

__all__ = [
    'HoursInput',
    'clamp_hours',
    'format_number_with_comma',
    'parse_decimal_input',
    'format_currency',
    'format_date',
    'format_hours',
    'norwegian_sort_key',
    'week_dates',
    'week_day_headers',
    'week_start',
]
