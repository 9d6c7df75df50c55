"""
List management core of the CRM panel.

- ListController: search/filter/sort/page state and fetches per list view
- MutationCoordinator: backend writes plus coarse cache invalidation
- load_statistics: cached dashboard figures
- ControllerRegistry: per-session controllers with idle and size bounds

shared_cache() returns the process-wide QueryCache used by the Reflex pages.
Tests build their own QueryCache with a fake clock instead.
"""

from functools import cache

from crm_panel import config
from crm_panel.controllers.list_controller import ListController, ListView
from crm_panel.controllers.mutations import MutationCoordinator
from crm_panel.controllers.registry import ControllerRegistry
from crm_panel.controllers.statistics import load_statistics, statistics_key
from crm_panel.lib.caches import QueryCache


@cache
def shared_cache() -> QueryCache:
    """Return the process-wide query cache, cleared only on restart."""
    return QueryCache(stale_after=config.STALE_AFTER, evict_after=config.EVICT_AFTER)


__all__ = [
    "ControllerRegistry",
    "ListController",
    "ListView",
    "MutationCoordinator",
    "load_statistics",
    "shared_cache",
    "statistics_key",
]
