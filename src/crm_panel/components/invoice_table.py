"""Invoice list: table of invoices with status badges and pagination."""

import reflex as rx

from crm_panel.components.pagination import pagination
from crm_panel.components.results import error_state, loading_state
from crm_panel.models.reflex_models import InvoiceRowModel
from crm_panel.state import InvoicesState

_STATUS_COLORS = {
    "paid": "green",
    "partial": "amber",
    "overdue": "red",
    "unpaid": "gray",
}


def invoice_results() -> rx.Component:
    return rx.box(
        rx.cond(
            InvoicesState.is_error,
            error_state(InvoicesState),
            rx.cond(
                InvoicesState.is_loading,
                loading_state("در حال بارگذاری فاکتورها..."),
                rx.cond(InvoicesState.is_empty, _empty(), _table()),
            ),
        ),
        id="results-container",
    )


def _table() -> rx.Component:
    return rx.box(
        rx.table.root(
            rx.table.header(
                rx.table.row(
                    rx.table.column_header_cell("شماره"),
                    rx.table.column_header_cell("نماینده"),
                    rx.table.column_header_cell("مبلغ"),
                    rx.table.column_header_cell("تاریخ صدور"),
                    rx.table.column_header_cell("سررسید"),
                    rx.table.column_header_cell("وضعیت"),
                ),
            ),
            rx.table.body(rx.foreach(InvoicesState.invoices, _row)),
            variant="surface",
            class_name="invoice-table",
        ),
        pagination(InvoicesState),
        class_name="results",
    )


def _row(invoice: InvoiceRowModel) -> rx.Component:
    return rx.table.row(
        rx.table.cell(invoice.invoice_number),
        rx.table.cell(
            rx.text(invoice.representative_name),
            rx.text(invoice.representative_code, class_name="muted"),
        ),
        rx.table.cell(invoice.amount),
        rx.table.cell(invoice.issue_date),
        rx.table.cell(
            invoice.due_date,
            class_name=rx.cond(invoice.is_overdue, "overdue", ""),
        ),
        rx.table.cell(
            rx.badge(
                invoice.status_label,
                color_scheme=rx.match(
                    invoice.status,
                    *[(status, color) for status, color in _STATUS_COLORS.items()],
                    "gray",
                ),
            )
        ),
    )


def _empty() -> rx.Component:
    return rx.box(
        rx.icon("file-x", class_name="empty-icon", size=60),
        rx.heading("فاکتوری یافت نشد", size="3", as_="h3"),
        class_name="card empty-state",
    )
