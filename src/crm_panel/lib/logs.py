"""
Logging utilities for the CRM panel.

Provides a simple logger factory that creates configured Python loggers
with consistent formatting across the application.
"""

import logging
import os
from pathlib import Path

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def logger(name: str) -> logging.Logger:
    """
    Create and configure a logger for the given name.

    If name is a file path (e.g., __file__), the module name is used
    so log lines read ``list_controller`` instead of a full path.

    Args:
        name: Logger name or __file__ path.

    Returns:
        Configured logging.Logger instance.
    """
    if "/" in name or "\\" in name:
        name = f"crm_panel.{Path(name).stem}"

    log = logging.getLogger(name)

    if not log.handlers:
        log.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        log.addHandler(handler)

    return log
