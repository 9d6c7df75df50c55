"""
Data models for the CRM panel.

This package provides:
- List request/response models (ListQuery, Page) and the resource enums
- Representative and Invoice domain models with camelCase payload parsing
- Mutation request/result models

All models use Python dataclasses.
"""

from crm_panel.models.common import (
    FILTER_FIELDS,
    ListQuery,
    Page,
    ResourceKind,
    SortKey,
    StatusFilter,
    total_pages_for,
)
from crm_panel.models.invoice import (
    Invoice,
    InvoiceStatus,
    parse_invoice,
    serialize_invoice,
)
from crm_panel.models.mutation import (
    MutationOperation,
    MutationRequest,
    MutationResult,
)
from crm_panel.models.representative import (
    Representative,
    RepresentativeStatistics,
    TopPerformer,
    parse_representative,
    parse_statistics,
    serialize_representative,
)

__all__ = [
    "FILTER_FIELDS",
    "Invoice",
    "InvoiceStatus",
    "ListQuery",
    "MutationOperation",
    "MutationRequest",
    "MutationResult",
    "Page",
    "Representative",
    "RepresentativeStatistics",
    "ResourceKind",
    "SortKey",
    "StatusFilter",
    "TopPerformer",
    "parse_invoice",
    "parse_representative",
    "parse_statistics",
    "serialize_invoice",
    "serialize_representative",
    "total_pages_for",
]
