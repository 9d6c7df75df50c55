"""
HTTP client factory for the CRM REST backend.

Provides process-wide access to an httpx.AsyncClient configured from
environment variables:

- CRM_PANEL_API_URL: Base URL of the CRM API
- CRM_PANEL_HTTP_TIMEOUT: Request timeout in seconds

Session cookies are sent with every request, so the client is shared rather
than created per call.
"""

import functools

import httpx

from crm_panel import config


def _timeout() -> httpx.Timeout:
    return httpx.Timeout(config.HTTP_TIMEOUT)


@functools.cache
def api_client() -> httpx.AsyncClient:
    """
    Return the shared AsyncClient for the CRM API.

    Returns:
        AsyncClient with the configured base URL, timeout and JSON headers.
    """
    return http_client(config.API_URL)


def http_client(
    base_url: str, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """
    Build an AsyncClient for a base URL.

    Args:
        base_url: API root, e.g. ``http://localhost:5000/api/crm``.
        transport: Optional transport; tests pass ``httpx.MockTransport``.

    Returns:
        Configured AsyncClient.
    """
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/") + "/",
        timeout=_timeout(),
        headers={"Accept": "application/json"},
        transport=transport,
    )
