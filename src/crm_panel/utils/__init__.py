"""Formatting helpers shared across the CRM panel package."""

from crm_panel.utils.dates import (
    format_jalali_date,
    is_overdue,
    jalali_month_name,
    parse_date,
    to_jalali,
)
from crm_panel.utils.formatters import (
    debt_ratio,
    format_compact,
    format_currency,
    format_number,
    format_percent,
    format_toman,
    parse_currency_input,
    rials_to_tomans,
    to_decimal,
    to_english_digits,
    to_persian_digits,
)

__all__ = [
    "debt_ratio",
    "format_compact",
    "format_currency",
    "format_jalali_date",
    "format_number",
    "format_percent",
    "format_toman",
    "is_overdue",
    "jalali_month_name",
    "parse_currency_input",
    "parse_date",
    "rials_to_tomans",
    "to_decimal",
    "to_english_digits",
    "to_jalali",
    "to_persian_digits",
]
