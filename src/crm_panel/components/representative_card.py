"""
Representative card component.

Displays one representative with sales, debt, credit and the debt ratio bar.
Uses RepresentativeCardModel, whose amounts are already formatted.
"""

import reflex as rx

from crm_panel.models.reflex_models import RepresentativeCardModel
from crm_panel.state import RepresentativesState


def representative_card(rep: RepresentativeCardModel) -> rx.Component:
    """
    Build a card component for one representative.

    Args:
        rep: RepresentativeCardModel instance.

    Returns:
        The representative card component.
    """
    return rx.box(
        _build_header(rep),
        rx.box(
            _figure("فروش کل", rep.total_sales),
            _figure("بدهی", rep.total_debt),
            _figure("اعتبار", rep.credit),
            class_name="card-figures",
        ),
        _debt_bar(rep),
        _build_actions(rep),
        class_name=rx.cond(rep.is_active, "card rep-card", "card rep-card inactive"),
    )


def _build_header(rep: RepresentativeCardModel) -> rx.Component:
    return rx.box(
        rx.box(
            rx.icon("store", class_name="title-icon"),
            rx.heading(rep.name, size="3", as_="h3"),
            rx.badge(
                rx.cond(rep.is_active, "فعال", "غیرفعال"),
                color_scheme=rx.cond(rep.is_active, "green", "gray"),
            ),
            class_name="title-row",
        ),
        rx.box(
            _meta_item("hash", rep.code),
            _meta_item("user", rep.owner_name),
            rx.cond(rep.phone != "", _meta_item("phone", rep.phone)),
            _meta_item("calendar", rep.created_at),
            class_name="meta-row",
        ),
        class_name="card-header",
    )


def _meta_item(icon: str, value) -> rx.Component:
    return rx.box(rx.icon(icon, size=14), rx.text(value), class_name="meta-item")


def _figure(label: str, value) -> rx.Component:
    return rx.box(
        rx.text(label, class_name="muted figure-label"),
        rx.text(value, class_name="figure-value"),
        class_name="figure",
    )


def _debt_bar(rep: RepresentativeCardModel) -> rx.Component:
    return rx.box(
        rx.hstack(
            rx.text("نسبت بدهی", class_name="muted"),
            rx.text(rep.debt_ratio_label),
            justify="between",
        ),
        rx.progress(value=rep.debt_ratio.to(int), max=100),
        class_name="debt-ratio",
    )


def _build_actions(rep: RepresentativeCardModel) -> rx.Component:
    return rx.hstack(
        rx.button(
            rx.cond(rep.is_active, "غیرفعال‌سازی", "فعال‌سازی"),
            on_click=RepresentativesState.toggle_active(rep.id, rep.is_active),
            variant="soft",
            size="1",
        ),
        rx.button(
            rx.icon("trash-2", size=14),
            on_click=RepresentativesState.delete_representative(rep.id),
            color_scheme="red",
            variant="ghost",
            size="1",
        ),
        class_name="card-actions",
        justify="end",
    )
