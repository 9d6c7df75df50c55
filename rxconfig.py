"""Reflex configuration for the CRM panel."""

import reflex as rx

config = rx.Config(
    app_name="crm_panel",
    # Use the src directory structure
    app_module_import="crm_panel.app",
)
