"""
Search panel component for the CRM list pages.

Provides the search input with status filter and sort selects.
"""

import reflex as rx

_STATUS_OPTIONS = [("all", "همه"), ("active", "فعال"), ("inactive", "غیرفعال")]

_SORT_OPTIONS = [
    ("name", "نام"),
    ("totalSales", "بیشترین فروش"),
    ("totalDebt", "بیشترین بدهی"),
    ("createdAt", "جدیدترین"),
]


def search_panel(state: type[rx.State], placeholder: str, with_sort: bool = True) -> rx.Component:
    """
    Build the search toolbar for a list page.

    Args:
        state: Page state exposing search_term, status_filter, sort_key and
               the search, filter_status and sort_by handlers.
        placeholder: Input placeholder text.
        with_sort: Whether to render the sort select.

    Returns:
        The search panel component.
    """
    controls = [
        rx.box(
            rx.icon("search", class_name="input-icon"),
            rx.input(
                placeholder=placeholder,
                value=state.search_term,
                on_change=state.search,
                class_name="search-input",
                debounce=300,
            ),
            class_name="input-with-icon",
        ),
        _select(_STATUS_OPTIONS, state.status_filter, state.filter_status),
    ]
    if with_sort:
        controls.append(_select(_SORT_OPTIONS, state.sort_key, state.sort_by))
    return rx.box(*controls, class_name="card search-card toolbar")


def _select(options, value, on_change) -> rx.Component:
    return rx.select.root(
        rx.select.trigger(class_name="toolbar-select"),
        rx.select.content(
            *[rx.select.item(label, value=key) for key, label in options],
        ),
        value=value,
        on_change=on_change,
    )
