from __future__ import annotations

from datetime import date, datetime

from crm_panel.utils import (
    format_jalali_date,
    is_overdue,
    jalali_month_name,
    parse_date,
    to_jalali,
)


def test_parse_date_formats():
    assert parse_date("2024-03-20T10:00:00Z").year == 2024
    assert parse_date("03/20/2024") == datetime(2024, 3, 20)
    assert parse_date(date(2024, 3, 20)) == datetime(2024, 3, 20)
    assert parse_date("") is None
    assert parse_date("yesterday") is None
    assert parse_date(12345) is None


def test_nowruz_is_first_of_farvardin():
    jalali = to_jalali("2024-03-20")
    assert (jalali.year, jalali.month, jalali.day) == (1403, 1, 1)
    assert format_jalali_date("2024-03-20T10:00:00Z") == "۱۴۰۳/۰۱/۰۱"
    assert format_jalali_date("2024-03-20", persian_digits=False) == "1403/01/01"


def test_missing_dates_render_as_dash():
    assert format_jalali_date(None) == "-"
    assert format_jalali_date("not a date") == "-"


def test_month_names():
    assert jalali_month_name(1) == "فروردین"
    assert jalali_month_name(12) == "اسفند"
    assert jalali_month_name(13) == ""


def test_is_overdue_compares_calendar_days():
    now = datetime(2024, 1, 2, 9, 0)
    assert is_overdue("2024-01-01", now=now) is True
    assert is_overdue("2024-01-02T23:00:00", now=now) is False
    assert is_overdue(None, now=now) is False
