"""
Local library modules for the CRM panel.

Modules:
    logs: Logging utilities
    objects: Stable cache keys and JSON serialization
    caches: In-memory query cache with staleness and eviction
    clients: httpx client factory for the CRM REST API
"""

from crm_panel.lib import caches, clients, logs, objects

__all__ = ["caches", "clients", "logs", "objects"]
