"""Cached representative statistics for the dashboard strip."""

from crm_panel import config
from crm_panel.lib import objects
from crm_panel.lib.caches import CacheEntry, QueryCache
from crm_panel.models.common import ResourceKind
from crm_panel.services.crm_service import CrmService


def statistics_key(resource: ResourceKind = ResourceKind.REPRESENTATIVES) -> str:
    """Key inside the resource's family, so its mutations invalidate it too."""
    return objects.query_key(resource.statistics_path)


async def load_statistics(
    service: CrmService,
    cache: QueryCache,
    stale_after: float = config.STATS_STALE_AFTER,
    evict_after: float = config.STATS_EVICT_AFTER,
) -> CacheEntry:
    """Read representative statistics through the cache."""
    return await cache.fetch(
        statistics_key(),
        service.representative_statistics,
        stale_after=stale_after,
        evict_after=evict_after,
    )
