"""
Currency and number formatting for the Persian panel.

Backend amounts are stored in rials; the panel displays tomans
(1 toman = 10 rials) with Persian digits and comma grouping.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Literal

from crm_panel.exceptions import ValidationError

Unit = Literal["rial", "toman"]
Locale = Literal["fa-IR", "en-US"]

_PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
_ARABIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"
_TO_PERSIAN = str.maketrans("0123456789", _PERSIAN_DIGITS)
_TO_ENGLISH = str.maketrans(_PERSIAN_DIGITS + _ARABIC_DIGITS, "0123456789" * 2)

_UNIT_LABELS = {
    ("toman", "fa-IR"): "تومان",
    ("toman", "en-US"): "Toman",
    ("rial", "fa-IR"): "ریال",
    ("rial", "en-US"): "Rial",
}

# Largest integer a browser number keeps exactly; the backend rejects more.
MAX_AMOUNT = Decimal(2**53 - 1)


def to_persian_digits(value: object) -> str:
    """Replace ASCII digits with Persian digits."""
    return str(value).translate(_TO_PERSIAN)


def to_english_digits(value: str) -> str:
    """Replace Persian and Arabic-Indic digits with ASCII digits."""
    return value.translate(_TO_ENGLISH)


def to_decimal(value: object) -> Decimal:
    """
    Coerce a backend amount (decimal string, int, float or None) to Decimal.

    Non-numeric values become 0, matching how the list cards treat them.
    """
    parsed = _parse_number(value)
    return parsed if parsed is not None else Decimal("0")


def rials_to_tomans(amount: object) -> Decimal:
    """Convert a rial amount to tomans (divide by 10)."""
    return to_decimal(amount) / 10


def format_number(value: object, locale: Locale = "fa-IR", max_fraction: int = 3) -> str:
    """
    Group thousands with commas and trim trailing fraction zeros.

    Args:
        value: Number to format.
        locale: ``fa-IR`` switches to Persian digits.
        max_fraction: Decimal places kept before rounding half-up.
    """
    number = to_decimal(value)
    quantum = Decimal(1).scaleb(-max_fraction)
    text = f"{number.quantize(quantum, rounding=ROUND_HALF_UP):,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        text = "0"
    return to_persian_digits(text) if locale == "fa-IR" else text


def format_currency(
    amount: object, unit: Unit = "toman", locale: Locale = "fa-IR"
) -> str:
    """
    Format a rial amount for display.

    Args:
        amount: Amount in rials.
        unit: ``toman`` converts to tomans first; ``rial`` shows it as is.
        locale: Digit and label language.

    Returns:
        String such as ``'۱۲,۳۴۵ تومان'``; ``'۰ تومان'`` for non-numeric input.
    """
    value = _parse_number(amount)
    if value is None:
        return "۰ تومان"
    if unit == "toman":
        value = value / 10
    return f"{format_number(value, locale)} {_UNIT_LABELS[(unit, locale)]}"


def format_toman(amount: object, locale: Locale = "fa-IR") -> str:
    """Format an amount that is already in tomans, without fraction digits."""
    return f"{format_number(amount, locale, max_fraction=0)} {_UNIT_LABELS[('toman', locale)]}"


def format_compact(rial_amount: object) -> str:
    """Format a rial amount for dashboard widgets: millions, thousands, or units of tomans."""
    tomans = rials_to_tomans(rial_amount)
    if tomans >= 1_000_000:
        return f"{_fixed(tomans / 1_000_000, 1)} میلیون تومان"
    if tomans >= 1_000:
        return f"{_fixed(tomans / 1_000, 1)} هزار تومان"
    return f"{_fixed(tomans, 0)} تومان"


def parse_currency_input(text: str | None) -> Decimal:
    """
    Parse an amount typed by the user.

    Accepts Persian or ASCII digits with commas and spaces.

    Raises:
        ValidationError: With a Persian message for empty, non-numeric,
            negative or oversized input.
    """
    if not text or not isinstance(text, str):
        raise ValidationError("ورودی نامعتبر")
    cleaned = to_english_digits(text)
    for separator in (",", "٬", " ", "‌", "\t"):
        cleaned = cleaned.replace(separator, "")
    value = _parse_number(cleaned)
    if value is None:
        raise ValidationError("مقدار وارد شده عددی نیست")
    if value < 0:
        raise ValidationError("مقدار نمی‌تواند منفی باشد")
    if value > MAX_AMOUNT:
        raise ValidationError("مقدار بیش از حد مجاز است")
    return value


def debt_ratio(total_debt: object, total_sales: object) -> float:
    """Return debt as a percentage of sales, rounded to one decimal; 0 with no sales."""
    sales = to_decimal(total_sales)
    if sales <= 0:
        return 0.0
    ratio = to_decimal(total_debt) / sales * 100
    return float(ratio.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_percent(value: float, locale: Locale = "fa-IR") -> str:
    if locale == "fa-IR":
        return f"{format_number(value, locale, max_fraction=1)}٪"
    return f"{format_number(value, locale, max_fraction=1)}%"


def _fixed(value: Decimal, places: int) -> str:
    quantum = Decimal(1).scaleb(-places)
    return to_persian_digits(f"{value.quantize(quantum, rounding=ROUND_HALF_UP)}")


def _parse_number(value: object) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    text = to_english_digits(value.strip())
    if not text:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None
