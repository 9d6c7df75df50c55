"""
Representative results display component.

Handles the statistics strip, loading, error, empty and grid states.
"""

import reflex as rx

from crm_panel.components.pagination import pagination
from crm_panel.components.representative_card import representative_card
from crm_panel.state import RepresentativesState


def representative_results() -> rx.Component:
    """
    Build the representative results container.

    Returns:
        The results container component.
    """
    return rx.box(
        statistics_strip(),
        rx.cond(
            RepresentativesState.mutation_error != "",
            rx.callout(
                RepresentativesState.mutation_error,
                icon="triangle-alert",
                color_scheme="red",
                class_name="mutation-error",
            ),
        ),
        rx.cond(
            RepresentativesState.is_error,
            error_state(RepresentativesState),
            rx.cond(
                RepresentativesState.is_loading,
                loading_state("در حال بارگذاری نمایندگان..."),
                rx.cond(RepresentativesState.is_empty, _empty(), _results()),
            ),
        ),
        id="results-container",
    )


def statistics_strip() -> rx.Component:
    stats = RepresentativesState.stats
    return rx.grid(
        _stat("کل نمایندگان", stats.total_count),
        _stat("فعال", stats.active_count),
        _stat("فروش کل", stats.total_sales),
        _stat("بدهی کل", stats.total_debt),
        _stat("عملکرد", stats.avg_performance),
        _stat("هشدار بدهی", stats.risk_alerts),
        columns="6",
        spacing="3",
        class_name="stats-strip",
    )


def _stat(label: str, value) -> rx.Component:
    return rx.box(
        rx.text(label, class_name="muted"),
        rx.text(value, class_name="stat-value"),
        class_name="card stat",
    )


def _results() -> rx.Component:
    return rx.box(
        rx.box(
            rx.text(RepresentativesState.result_summary, class_name="muted"),
            class_name="results-summary",
        ),
        rx.grid(
            rx.foreach(RepresentativesState.representatives, representative_card),
            columns="3",
            spacing="4",
            class_name="rep-grid",
        ),
        pagination(RepresentativesState),
        class_name="results",
    )


def _empty() -> rx.Component:
    """Build the empty state when no representatives match."""
    return rx.box(
        rx.icon("users", class_name="empty-icon", size=60),
        rx.heading("نماینده‌ای یافت نشد", size="3", as_="h3"),
        rx.cond(
            RepresentativesState.search_term != "",
            rx.text("عبارت جستجو یا فیلتر را تغییر دهید.", class_name="muted"),
            rx.text("هنوز نماینده‌ای ثبت نشده است.", class_name="muted"),
        ),
        class_name="card empty-state",
    )


def loading_state(message: str) -> rx.Component:
    """Build the loading indicator shown before the first data arrives."""
    return rx.box(
        rx.box(class_name="spinner"),
        rx.text(message, class_name="muted"),
        class_name="card loading-state",
    )


def error_state(state: type[rx.State]) -> rx.Component:
    """Build the inline error with a manual retry button."""
    return rx.box(
        rx.icon("circle-alert", class_name="empty-icon", size=48),
        rx.heading("خطا در دریافت اطلاعات", size="3", as_="h3"),
        rx.text(state.error_message, class_name="muted"),
        rx.button("تلاش مجدد", on_click=state.retry),
        class_name="card error-state",
    )
