"""
Date parsing and Jalali (Solar Hijri) display helpers.

The backend sends ISO timestamps; the panel shows Jalali dates in
``YYYY/MM/DD`` form with Persian digits.
"""

from __future__ import annotations

from datetime import date, datetime

import jdatetime

from crm_panel.utils.formatters import to_english_digits, to_persian_digits

MISSING_DATE = "-"

_MONTH_NAMES = (
    "فروردین",
    "اردیبهشت",
    "خرداد",
    "تیر",
    "مرداد",
    "شهریور",
    "مهر",
    "آبان",
    "آذر",
    "دی",
    "بهمن",
    "اسفند",
)


def parse_date(value: str | date | datetime | None) -> datetime | None:
    """
    Parse a backend date value into a datetime.

    Supports ISO 8601 (with or without a trailing ``Z``), m/d/Y, and
    date/datetime objects.

    Returns:
        datetime if parsing succeeds, None otherwise.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None

    text = to_english_digits(value.strip())
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    try:
        return datetime.strptime(text, "%m/%d/%Y")
    except ValueError:
        pass

    return None


def to_jalali(value: str | date | datetime | None) -> jdatetime.date | None:
    """Convert a Gregorian value to a jdatetime.date."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return jdatetime.date.fromgregorian(date=parsed.date())


def format_jalali_date(
    value: str | date | datetime | None, persian_digits: bool = True
) -> str:
    """Return ``YYYY/MM/DD`` in the Jalali calendar, or ``-`` when missing."""
    jalali = to_jalali(value)
    if jalali is None:
        return MISSING_DATE
    text = jalali.strftime("%Y/%m/%d")
    return to_persian_digits(text) if persian_digits else text


def jalali_month_name(month: int) -> str:
    """Return the Persian month name for 1-12, empty string otherwise."""
    if 1 <= month <= 12:
        return _MONTH_NAMES[month - 1]
    return ""


def is_overdue(
    due_date: str | date | datetime | None, now: datetime | None = None
) -> bool:
    """Return True when the due date is strictly before today."""
    due = parse_date(due_date)
    if due is None:
        return False
    today = (now or datetime.now()).date()
    return due.date() < today
