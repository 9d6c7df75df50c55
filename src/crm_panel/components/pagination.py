"""Previous/next pagination controls."""

import reflex as rx


def pagination(state: type[rx.State]) -> rx.Component:
    """
    Build the pagination bar for a list page.

    Hidden while there is a single page.
    """
    return rx.cond(
        state.total_pages > 1,
        rx.hstack(
            rx.button(
                rx.icon("chevron-right"),
                "قبلی",
                on_click=state.previous_page,
                disabled=state.page <= 1,
                variant="soft",
            ),
            rx.text(state.page_label, class_name="muted page-label"),
            rx.button(
                "بعدی",
                rx.icon("chevron-left"),
                on_click=state.next_page,
                disabled=state.page >= state.total_pages,
                variant="soft",
            ),
            class_name="pagination",
            justify="center",
        ),
    )
