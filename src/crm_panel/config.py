"""
Environment configuration for the CRM panel.

Values are read once at import time. Durations are in seconds.
"""

import os

from crm_panel.lib import logs

LOG = logs.logger(__file__)

_TRUE_VALUES = {"1", "true", "yes"}


def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        LOG.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


APP_PORT = int(_env_float("CRM_PANEL_PORT", 8000))
SERVICE_KIND = os.getenv("CRM_PANEL_SERVICE", "impl").lower()
API_URL = os.getenv("CRM_PANEL_API_URL", "http://localhost:5000/api/crm").rstrip("/")
HTTP_TIMEOUT = _env_float("CRM_PANEL_HTTP_TIMEOUT", 30.0)

# Representative lists render a 3x3 card grid.
PAGE_SIZE = int(_env_float("CRM_PANEL_PAGE_SIZE", 9))

STALE_AFTER = _env_float("CRM_PANEL_STALE_AFTER", 8 * 60)
EVICT_AFTER = _env_float("CRM_PANEL_EVICT_AFTER", 12 * 60)
STATS_STALE_AFTER = _env_float("CRM_PANEL_STATS_STALE_AFTER", 10 * 60)
STATS_EVICT_AFTER = _env_float("CRM_PANEL_STATS_EVICT_AFTER", 15 * 60)

# Per-session list controllers. Reflex gives no unmount event when a tab closes.
CONTROLLER_IDLE_AFTER = _env_float("CRM_PANEL_CONTROLLER_IDLE_AFTER", EVICT_AFTER)
CONTROLLER_LIMIT = int(_env_float("CRM_PANEL_CONTROLLER_LIMIT", 500))

USE_PERSIAN_DIGITS = _env_bool("CRM_PANEL_PERSIAN_DIGITS", True)

APP_TITLE = "پنل مدیریت CRM"
APP_SUBTITLE = "مدیریت نمایندگان و پیگیری فاکتورها"
