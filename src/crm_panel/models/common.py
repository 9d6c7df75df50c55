"""
Shared list models for the CRM panel.

This module defines the objects that describe a list request and its
response, used identically by the representative and invoice views:

- ResourceKind: the cache namespaces the panel knows about
- ListQuery: search/filter/sort/page state that forms the cache key
- Page: one page of records plus pagination metadata
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, Mapping, Sequence, TypeVar

from crm_panel.lib import objects

T = TypeVar("T")


class ResourceKind(str, Enum):
    """Backend resource families. Also the invalidation scope of mutations."""

    REPRESENTATIVES = "representatives"
    INVOICES = "invoices"

    @property
    def statistics_path(self) -> str:
        return f"{self.value}/statistics"


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


class SortKey(str, Enum):
    NAME = "name"
    TOTAL_SALES = "totalSales"
    TOTAL_DEBT = "totalDebt"
    CREATED_AT = "createdAt"


# Fields whose change resets the page and forms part of the cache key.
FILTER_FIELDS = ("search_term", "status_filter", "sort_key")


@dataclass(frozen=True, slots=True)
class ListQuery:
    """
    Immutable snapshot of a list view's request state.

    Attributes:
        resource: Resource family being listed.
        page: Current page (1-indexed).
        page_size: Items per page.
        search_term: Free-text search, already stripped.
        status_filter: Active/inactive filter.
        sort_key: Sort order requested from the backend.
    """

    resource: ResourceKind
    page: int = 1
    page_size: int = 9
    search_term: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    sort_key: SortKey = SortKey.NAME

    def with_filter(self, name: str, value: Any) -> "ListQuery":
        """Return a copy with one filter field changed and the page reset to 1."""
        return replace(self, page=1, **{name: value})

    def with_page(self, page: int) -> "ListQuery":
        return replace(self, page=page)

    def to_params(self) -> dict[str, Any]:
        """
        Return the query-string parameters for the list endpoint.

        ``search`` is omitted when empty and ``status`` when it is ``all``.
        """
        params: dict[str, Any] = {"page": self.page, "limit": self.page_size}
        if self.search_term:
            params["search"] = self.search_term
        if self.status_filter is not StatusFilter.ALL:
            params["status"] = self.status_filter.value
        params["sortBy"] = self.sort_key.value
        return params

    def cache_key(self) -> str:
        """Return the cache key: resource name plus every request parameter."""
        return objects.query_key(self.resource.value, self.to_params())


def total_pages_for(total_count: int, page_size: int) -> int:
    """Return ``ceil(total_count / page_size)``, never less than 1."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(max(total_count, 0) / page_size))


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """
    One page of list results.

    Attributes:
        items: Records on this page, in backend order.
        page: Page number the backend actually served.
        total_pages: Number of pages for the query (at least 1).
        total_count: Number of records matching the query.
    """

    items: Sequence[T] = field(default_factory=tuple)
    page: int = 1
    total_pages: int = 1
    total_count: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @classmethod
    def from_items(
        cls, items: Sequence[T], page: int, page_size: int, total_count: int
    ) -> "Page[T]":
        """Build a page, deriving total_pages from the count and page size."""
        return cls(
            items=tuple(items),
            page=page,
            total_pages=total_pages_for(total_count, page_size),
            total_count=total_count,
        )

    @classmethod
    def from_response(
        cls, payload: Mapping[str, Any], parse_item, page_size: int | None = None
    ) -> "Page[T]":
        """
        Deserialize a ``{data, pagination}`` list response.

        Older endpoints report the count as ``total`` instead of
        ``totalCount`` and may send ``totalPages: 0`` for empty results.

        Args:
            payload: Decoded JSON body.
            parse_item: Callable turning one raw record into a model.
            page_size: Used to derive totalPages when the response omits it.
        """
        raw_items = payload.get("data") or []
        pagination = payload.get("pagination") or {}
        count = pagination.get("totalCount", pagination.get("total", len(raw_items)))
        total_count = int(count or 0)
        if "totalPages" in pagination:
            total_pages = max(1, int(pagination["totalPages"] or 1))
        else:
            total_pages = total_pages_for(total_count, page_size or max(len(raw_items), 1))
        return cls(
            items=tuple(parse_item(item) for item in raw_items),
            page=int(pagination.get("page", 1) or 1),
            total_pages=total_pages,
            total_count=total_count,
        )
