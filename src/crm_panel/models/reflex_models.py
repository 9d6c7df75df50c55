"""
Reflex-compatible display models for the CRM panel.

These models extend rx.Base so they can be used with rx.foreach. Amounts
and dates are formatted here, once, so components only place strings.
"""

import reflex as rx

from crm_panel.models.invoice import Invoice
from crm_panel.models.representative import Representative, RepresentativeStatistics
from crm_panel.utils import (
    format_currency,
    format_jalali_date,
    format_number,
    format_percent,
    format_toman,
)


class RepresentativeCardModel(rx.Base):
    """One representative card."""

    id: int = 0
    code: str = ""
    name: str = ""
    owner_name: str = ""
    phone: str = ""
    is_active: bool = True
    total_sales: str = ""
    total_debt: str = ""
    credit: str = ""
    debt_ratio: float = 0.0
    debt_ratio_label: str = ""
    created_at: str = ""


class InvoiceRowModel(rx.Base):
    """One invoice table row."""

    id: int = 0
    invoice_number: str = ""
    representative_name: str = ""
    representative_code: str = ""
    amount: str = ""
    issue_date: str = ""
    due_date: str = ""
    status: str = ""
    status_label: str = ""
    sent_to_telegram: bool = False
    is_overdue: bool = False


class StatisticsModel(rx.Base):
    """Figures of the statistics strip."""

    total_count: str = ""
    active_count: str = ""
    inactive_count: str = ""
    total_sales: str = ""
    total_debt: str = ""
    avg_performance: str = ""
    risk_alerts: str = ""


def representative_to_model(rep: Representative, locale: str = "fa-IR") -> RepresentativeCardModel:
    """Convert a Representative into its card model."""
    persian = locale == "fa-IR"
    return RepresentativeCardModel(
        id=rep.id,
        code=rep.code,
        name=rep.name,
        owner_name=rep.owner_name,
        phone=rep.phone,
        is_active=rep.is_active,
        total_sales=format_toman(rep.total_sales, locale),
        total_debt=format_toman(rep.total_debt, locale),
        credit=format_toman(rep.credit, locale),
        debt_ratio=min(rep.debt_ratio, 100.0),
        debt_ratio_label=format_percent(rep.debt_ratio, locale),
        created_at=format_jalali_date(rep.created_at, persian_digits=persian),
    )


def invoice_to_model(invoice: Invoice, locale: str = "fa-IR") -> InvoiceRowModel:
    """Convert an Invoice into its table row model."""
    persian = locale == "fa-IR"
    return InvoiceRowModel(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        representative_name=invoice.representative_name,
        representative_code=invoice.representative_code,
        amount=format_currency(invoice.amount, "toman", locale),
        issue_date=format_jalali_date(invoice.issue_date, persian_digits=persian),
        due_date=format_jalali_date(invoice.due_date, persian_digits=persian),
        status=invoice.status.value,
        status_label=invoice.status_label,
        sent_to_telegram=invoice.sent_to_telegram,
        is_overdue=invoice.is_overdue(),
    )


def statistics_to_model(stats: RepresentativeStatistics, locale: str = "fa-IR") -> StatisticsModel:
    return StatisticsModel(
        total_count=format_number(stats.total_count, locale),
        active_count=format_number(stats.active_count, locale),
        inactive_count=format_number(stats.inactive_count, locale),
        total_sales=format_toman(stats.total_sales, locale),
        total_debt=format_toman(stats.total_debt, locale),
        avg_performance=format_percent(stats.avg_performance, locale),
        risk_alerts=format_number(stats.risk_alerts, locale),
    )
