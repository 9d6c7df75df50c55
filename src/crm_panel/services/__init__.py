"""
Service factory for the CRM panel.

This module provides the get_crm_service() factory function that returns
the appropriate CrmService implementation based on configuration.

Available Implementations:
- demo: In-memory service with static records (no backend required)
- impl: httpx-backed service calling the CRM REST API

The service is cached at the module level, so the same instance is reused
across all requests. Configure via CRM_PANEL_SERVICE environment variable.
"""

from functools import cache
from typing import Callable, Dict

from crm_panel import config
from crm_panel.lib import logs
from crm_panel.services.crm_service import CrmService
from crm_panel.services.crm_service_demo import DemoCrmService
from crm_panel.services.crm_service_impl import RestCrmService

LOG = logs.logger(__file__)

_SERVICE_REGISTRY: Dict[str, Callable[[], CrmService]] = {
    "demo": lambda: DemoCrmService(),
    "impl": lambda: RestCrmService(),
}


@cache
def get_crm_service(kind: str | None = None) -> CrmService:
    """Return the configured CRM service implementation."""
    resolved_kind = (kind or config.SERVICE_KIND).lower()
    LOG.info("get_crm_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown CRM service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


__all__ = ["CrmService", "DemoCrmService", "RestCrmService", "get_crm_service"]
