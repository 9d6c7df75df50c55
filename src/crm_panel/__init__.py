"""
CRM panel: representative and invoice management for a Persian CRM.

This package provides:
- A query cache with staleness, eviction and per-key request coalescing
- A list controller shared by the representative and invoice views
- A mutation coordinator that invalidates cached lists after writes
- Persian currency and Jalali date formatting
- A Reflex front-end over a demo or REST-backed service
"""

__version__ = "0.1.0"
