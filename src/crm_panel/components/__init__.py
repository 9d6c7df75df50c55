"""
Reflex UI components for the CRM panel.

- search_panel: search input with status and sort selects
- pagination: previous/next controls with the page label
- representative_card: one card of the representative grid
- results: loading, error, empty and grid states plus the statistics strip
- invoice_table: invoice list page body

Components are pure functions returning rx.Component trees bound to the
page states in crm_panel.state.
"""
