"""
List controller shared by the representative and invoice views.

The controller owns the search term, status filter, sort key and page of
one list view. Every change produces a new ListQuery whose cache key drives
a fetch through the shared QueryCache. The controller subscribes to the
cache entry of its current key only, so results for a key the user has
already moved away from never reach the view.
"""

from dataclasses import dataclass
from functools import partial
from typing import Any, Awaitable, Callable

from crm_panel import config
from crm_panel.controllers.mutations import MutationCoordinator
from crm_panel.exceptions import ValidationError
from crm_panel.lib import logs
from crm_panel.lib.caches import CacheEntry, QueryCache
from crm_panel.models.common import (
    FILTER_FIELDS,
    ListQuery,
    Page,
    ResourceKind,
    SortKey,
    StatusFilter,
)
from crm_panel.models.mutation import MutationRequest, MutationResult
from crm_panel.services.crm_service import CrmService

LOG = logs.logger(__file__)

PageFetcher = Callable[[ListQuery], Awaitable[Page]]
ViewListener = Callable[["ListView"], None]

# Wire and camelCase names accepted by set_filter.
_FIELD_ALIASES = {
    "search": "search_term",
    "searchTerm": "search_term",
    "status": "status_filter",
    "statusFilter": "status_filter",
    "sortBy": "sort_key",
    "sortKey": "sort_key",
}


@dataclass(frozen=True, slots=True)
class ListView:
    """
    What a list page renders.

    Attributes:
        query: Query the view belongs to.
        items: Records of the current page.
        is_loading: Waiting for the first data of this query.
        is_error: The last fetch for this query failed.
        error: That failure, for the inline error message.
        page: Page being shown (the backend's answer once data exists).
        total_pages: Page count; 1 until known.
        total_count: Matching records; 0 until known.
        is_fetching: Any fetch, including a background refresh, is running.
        is_stale: Shown data is older than the staleness window or invalidated.
    """

    query: ListQuery
    items: tuple = ()
    is_loading: bool = False
    is_error: bool = False
    error: BaseException | None = None
    page: int = 1
    total_pages: int = 1
    total_count: int = 0
    is_fetching: bool = False
    is_stale: bool = False

    @property
    def error_message(self) -> str:
        return str(self.error) if self.error else ""


class ListController:
    """
    Search/filter/sort/page state machine for one list view.

    Attributes:
        resource: Resource family listed by this controller.
    """

    def __init__(
        self,
        resource: ResourceKind | str,
        fetch_page: PageFetcher,
        cache: QueryCache,
        page_size: int = config.PAGE_SIZE,
        stale_after: float | None = None,
        evict_after: float | None = None,
        coordinator: MutationCoordinator | None = None,
    ) -> None:
        """
        Initialize the controller at page 1 with default filters.

        Args:
            resource: Resource family to list.
            fetch_page: Coroutine function returning a Page for a ListQuery,
                        usually ``CrmService.list_page``.
            cache: Shared query cache.
            page_size: Items per page.
            stale_after: Staleness window for this list's entries.
            evict_after: Eviction window for this list's entries.
            coordinator: Optional MutationCoordinator used by mutate().
        """
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
            raise ValidationError(f"page_size must be a positive integer, got {page_size!r}")
        try:
            self.resource = ResourceKind(resource)
        except ValueError as exc:
            raise ValidationError(f"Unknown resource: {resource!r}") from exc

        self._fetch_page = fetch_page
        self._cache = cache
        self._stale_after = stale_after
        self._evict_after = evict_after
        self._coordinator = coordinator
        self._query = ListQuery(resource=self.resource, page_size=page_size)
        self._view = ListView(query=self._query)
        self._total_pages: int | None = None
        self._listeners: list[ViewListener] = []
        self._unsubscribe: Callable[[], None] | None = None
        self._closed = False
        self._watch()

    @classmethod
    def for_service(
        cls, resource: ResourceKind | str, service: CrmService, cache: QueryCache, **kwargs: Any
    ) -> "ListController":
        """Build a controller listing through ``service.list_page``."""
        return cls(resource, service.list_page, cache, **kwargs)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def total_pages(self) -> int | None:
        """Page count for the current filters, or None before the first page arrives."""
        return self._total_pages

    def current_query(self) -> ListQuery:
        """Return the current query snapshot. Pure."""
        return self._query

    def view(self) -> ListView:
        return self._view

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """
        Receive every new ListView of this controller.

        Returns:
            Function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def set_filter(self, field: str, value: Any) -> ListView:
        """
        Change one filter field, reset to page 1 and fetch.

        Args:
            field: ``search_term``, ``status_filter`` or ``sort_key``
                   (wire names such as ``sortBy`` are accepted too).
            value: New value; enum fields accept the enum or its string value.

        Raises:
            ValidationError: Unknown field or a value that is not valid for it.
        """
        self._ensure_open()
        name = _FIELD_ALIASES.get(field, field)
        if name not in FILTER_FIELDS:
            raise ValidationError(f"Unknown filter field: {field!r}")
        self._query = self._query.with_filter(name, _coerce(name, value))
        self._total_pages = None
        self._watch()
        return await self.load()

    async def set_page(self, page: int) -> ListView:
        """
        Move to a page and fetch it.

        Once the page count for the current filters is known the page is
        clamped to ``[1, total_pages]``; before that any positive page is
        requested and the backend bounds it.

        Raises:
            ValidationError: page is not a positive integer.
        """
        self._ensure_open()
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValidationError(f"Page must be a positive integer, got {page!r}")
        if self._total_pages is not None and page > self._total_pages:
            LOG.debug("Clamping page %s to %s", page, self._total_pages)
            page = self._total_pages
        if page != self._query.page:
            self._query = self._query.with_page(page)
            self._watch()
        return await self.load()

    async def next_page(self) -> ListView:
        return await self.set_page(self._query.page + 1)

    async def previous_page(self) -> ListView:
        return await self.set_page(max(1, self._query.page - 1))

    async def load(self) -> ListView:
        """Read the current key through the cache, fetching when needed."""
        return await self._fetch(force=False)

    async def refresh(self) -> ListView:
        """Fetch the current key again and wait for the result."""
        return await self._fetch(force=True)

    async def retry(self) -> ListView:
        """Manual retry after an error; re-requests the same key."""
        LOG.info("Retry - key:%s", self._query.cache_key())
        return await self._fetch(force=True)

    async def settle(self) -> ListView:
        """Wait for any fetch of the current key still running, e.g. after invalidation."""
        query = self._query
        entry = await self._cache.join(query.cache_key())
        if entry is not None and not self._closed and query == self._query:
            self._apply(entry)
        return self._view

    async def mutate(self, request: MutationRequest) -> MutationResult:
        """Run a mutation through the attached coordinator."""
        if self._coordinator is None:
            raise RuntimeError("No mutation coordinator attached to this controller")
        return await self._coordinator.mutate(request)

    def close(self) -> None:
        """Detach from the cache. Fetches still running change nothing visible."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()
        self._closed = True

    async def _fetch(self, force: bool) -> ListView:
        self._ensure_open()
        query = self._query
        entry = await self._cache.fetch(
            query.cache_key(),
            partial(self._fetch_page, query),
            stale_after=self._stale_after,
            evict_after=self._evict_after,
            force=force,
        )
        if self._closed or query != self._query:
            LOG.debug("Dropping result for abandoned key:%s", entry.key)
            return self._view
        self._apply(entry)
        return self._view

    def _watch(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        key = self._query.cache_key()
        entry = self._cache.get(key)
        self._unsubscribe = self._cache.subscribe(key, self._on_entry)
        if entry is not None:
            self._apply(entry)
        else:
            self._publish(
                ListView(
                    query=self._query,
                    page=self._query.page,
                    total_pages=self._total_pages or 1,
                )
            )

    def _on_entry(self, entry: CacheEntry) -> None:
        if not self._closed:
            self._apply(entry)

    def _apply(self, entry: CacheEntry) -> None:
        if entry.key != self._query.cache_key():
            return
        data: Page | None = entry.data if entry.has_data else None
        if data is not None:
            self._total_pages = data.total_pages
        self._publish(
            ListView(
                query=self._query,
                items=tuple(data.items) if data is not None else (),
                is_loading=entry.is_loading,
                is_error=entry.is_error,
                error=entry.error if entry.is_error else None,
                page=data.page if data is not None else self._query.page,
                total_pages=data.total_pages if data is not None else (self._total_pages or 1),
                total_count=data.total_count if data is not None else 0,
                is_fetching=entry.is_fetching,
                is_stale=entry.is_stale,
            )
        )

    def _publish(self, view: ListView) -> None:
        if view == self._view:
            return
        self._view = view
        for listener in list(self._listeners):
            listener(view)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"{self.resource.value} list controller is closed")


def _coerce(name: str, value: Any) -> Any:
    try:
        if name == "status_filter":
            return StatusFilter(value)
        if name == "sort_key":
            return SortKey(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid value for {name}: {value!r}") from exc

    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"Invalid value for {name}: {value!r}")
    return value.strip()
