"""
Reflex application entry point for the CRM panel.

This module initializes the Reflex app and defines the representative and
invoice pages.
"""

import reflex as rx

from crm_panel import config
from crm_panel.components.invoice_table import invoice_results
from crm_panel.components.results import representative_results
from crm_panel.components.search_panel import search_panel
from crm_panel.lib import logs
from crm_panel.state import InvoicesState, RepresentativesState

LOG = logs.logger(__file__)

LOG.info("Service: %s, API: %s", config.SERVICE_KIND, config.API_URL)

_FONT_URL = "https://cdn.jsdelivr.net/gh/rastikerdar/vazirmatn@v33.003/Vazirmatn-font-face.css"


def page_header(subtitle: str) -> rx.Component:
    """Build the hero text area at the top of the page."""
    return rx.box(
        rx.heading(config.APP_TITLE, size="6", as_="h1"),
        rx.text(subtitle, class_name="muted"),
        rx.hstack(
            rx.link("نمایندگان", href="/"),
            rx.link("فاکتورها", href="/invoices"),
            class_name="nav-links",
        ),
        class_name="page-header",
    )


def index() -> rx.Component:
    """Representative list page."""
    return rx.box(
        rx.box(
            page_header(config.APP_SUBTITLE),
            search_panel(
                RepresentativesState, "جستجو بر اساس نام، کد یا نام مالک..."
            ),
            representative_results(),
            class_name="app-container",
        ),
        class_name="app-shell",
        dir="rtl",
        on_unmount=RepresentativesState.on_unmount,
    )


def invoices() -> rx.Component:
    """Invoice list page."""
    return rx.box(
        rx.box(
            page_header("فهرست فاکتورها"),
            search_panel(
                InvoicesState,
                "جستجو بر اساس شماره فاکتور یا نماینده...",
                with_sort=False,
            ),
            invoice_results(),
            class_name="app-container",
        ),
        class_name="app-shell",
        dir="rtl",
        on_unmount=InvoicesState.on_unmount,
    )


# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=[
        _FONT_URL,
        "/styles.css",
    ],
)

app.add_page(index, title=config.APP_TITLE, on_load=RepresentativesState.on_load)
app.add_page(
    invoices,
    route="/invoices",
    title=config.APP_TITLE,
    on_load=InvoicesState.on_load,
)


def main() -> None:
    """Entrypoint for `crm-panel`; runs `reflex run` on the configured port."""
    import subprocess
    import sys

    subprocess.run(
        [sys.executable, "-m", "reflex", "run", "--port", str(config.APP_PORT)]
    )


if __name__ == "__main__":
    main()
