"""
In-memory query cache with staleness and eviction timers.

Provides a QueryCache class shared by every list view in the process. Each
key (built with ``objects.query_key``) holds one entry with two independent
timers:

- stale_after: once the entry is older than this, the next read still
  returns the cached data immediately but starts a background refetch.
- evict_after: an entry without subscribers and without an in-flight fetch
  that is not read for this long is dropped; the next read is a cold fetch.

At most one loader call per key is in flight. Concurrent readers of a cold
key await the same fetch. Every fetch is tagged with a per-key generation;
starting a newer one (force, invalidation) cancels the older loader call, and
a response from an older generation is never applied. Waiters of the older
fetch receive the newest fetch's result instead.

The cache runs on a single asyncio event loop and is not thread-safe.
"""

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable

from crm_panel.lib import logs

LOG = logs.logger(__file__)

DEFAULT_STALE_AFTER = 8 * 60
DEFAULT_EVICT_AFTER = 12 * 60

Loader = Callable[[], Awaitable[Any]]


class CacheStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """
    Immutable snapshot of a cache slot.

    Attributes:
        key: Cache key.
        resource: Resource family the key belongs to (invalidation scope).
        data: Last successfully fetched value, or None before the first success.
        status: idle, loading (first fetch), success or error.
        error: Error from the last failed fetch.
        fetched_at: Clock reading of the last success.
        stale_after: Seconds until the data is considered stale.
        evict_after: Seconds of disuse before the entry is dropped.
        is_fetching: True while any fetch (cold or background) is in flight.
        is_stale: True when the data is older than stale_after or was invalidated.
    """

    key: str
    resource: str
    data: Any = None
    status: CacheStatus = CacheStatus.IDLE
    error: BaseException | None = None
    fetched_at: float | None = None
    stale_after: float = DEFAULT_STALE_AFTER
    evict_after: float = DEFAULT_EVICT_AFTER
    is_fetching: bool = False
    is_stale: bool = True

    @property
    def has_data(self) -> bool:
        return self.fetched_at is not None

    @property
    def is_loading(self) -> bool:
        """True while waiting for data that has never arrived."""
        return self.is_fetching and not self.has_data

    @property
    def is_error(self) -> bool:
        return self.status is CacheStatus.ERROR


Listener = Callable[[CacheEntry], None]


@dataclass(eq=False)
class _Slot:
    key: str
    resource: str
    stale_after: float
    evict_after: float
    last_access: float
    data: Any = None
    status: CacheStatus = CacheStatus.IDLE
    error: BaseException | None = None
    fetched_at: float | None = None
    invalidated: bool = False
    generation: int = 0
    task: "asyncio.Task[CacheEntry] | None" = None
    request: "asyncio.Future[Any] | None" = None
    loader: Loader | None = None
    listeners: list[Listener] = field(default_factory=list)


def resource_of(key: str) -> str:
    """
    Return the resource family encoded in a key.

    ``representatives:{...}`` and ``representatives/statistics:{}`` both
    belong to ``representatives``.
    """
    namespace = key.split(":", 1)[0]
    return namespace.split("/", 1)[0]


class QueryCache:
    """
    Process-wide key to CacheEntry store.

    Attributes:
        stale_after: Default staleness window in seconds.
        evict_after: Default eviction window in seconds.
    """

    def __init__(
        self,
        stale_after: float = DEFAULT_STALE_AFTER,
        evict_after: float = DEFAULT_EVICT_AFTER,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize an empty cache.

        Args:
            stale_after: Default seconds before an entry is stale.
            evict_after: Default seconds of disuse before eviction.
            clock: Monotonic clock; tests pass a fake one.
        """
        self.stale_after = stale_after
        self.evict_after = evict_after
        self._clock = clock
        self._slots: dict[str, _Slot] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, key: str) -> bool:
        return key in self._slots

    def keys(self) -> list[str]:
        return list(self._slots)

    def get(self, key: str) -> CacheEntry | None:
        """
        Return a snapshot of the entry without fetching or touching it.

        Args:
            key: Cache key string.

        Returns:
            CacheEntry if present, None otherwise (including after eviction).
        """
        self.collect_garbage()
        slot = self._slots.get(key)
        return self._snapshot(slot) if slot else None

    async def fetch(
        self,
        key: str,
        loader: Loader,
        stale_after: float | None = None,
        evict_after: float | None = None,
        force: bool = False,
    ) -> CacheEntry:
        """
        Read a key, fetching through the loader when needed.

        - Fresh data: returned with no call to the loader.
        - Stale data: returned immediately; a background refetch starts
          unless one is already in flight.
        - No data (cold or failed): awaits the in-flight fetch, starting one
          if needed. Concurrent callers share that fetch.

        Args:
            key: Cache key string.
            loader: Coroutine function producing the value.
            stale_after: Overrides the default staleness for this key.
            evict_after: Overrides the default eviction for this key.
            force: Start a new fetch even when fresh data exists and wait
                   for it. Supersedes any in-flight fetch and cancels its
                   loader call.

        Returns:
            Snapshot of the entry after the read. Fetch failures are
            reported as ``status=error`` rather than raised.
        """
        now = self._clock()
        self.collect_garbage(now)
        slot = self._slot(key, now)
        slot.loader = loader
        slot.last_access = now
        if stale_after is not None:
            slot.stale_after = stale_after
        if evict_after is not None:
            slot.evict_after = evict_after

        if force:
            return await asyncio.shield(self._start(slot))

        if slot.fetched_at is not None:
            if self._is_stale(slot, now) and slot.task is None:
                LOG.debug("Background refetch - key:%s", key)
                self._start(slot)
            return self._snapshot(slot)

        task = slot.task or self._start(slot)
        return await asyncio.shield(task)

    def set(self, key: str, data: Any) -> CacheEntry:
        """
        Store a value as freshly fetched, superseding any in-flight fetch.

        Args:
            key: Cache key string.
            data: Value to store.
        """
        now = self._clock()
        slot = self._slot(key, now)
        self._cancel_request(slot)
        slot.generation += 1
        slot.task = None
        slot.last_access = now
        self._apply_success(slot, data, now)
        return self._snapshot(slot)

    def invalidate(self, resource: Any) -> list[str]:
        """
        Mark every entry of a resource family stale.

        Entries with subscribers or an in-flight fetch are refetched right
        away (superseding the in-flight fetch, whose data may predate the
        change). Others are refetched on their next read. Must be called
        from the event loop when any matching entry is active.

        Args:
            resource: ResourceKind or family name.

        Returns:
            Keys that were invalidated.
        """
        family = getattr(resource, "value", resource)
        invalidated = []
        for slot in list(self._slots.values()):
            if slot.resource != family:
                continue
            slot.invalidated = True
            invalidated.append(slot.key)
            if slot.loader is not None and (slot.listeners or slot.task is not None):
                self._start(slot)
            else:
                self._notify(slot)
        LOG.info("Invalidated %s entries - resource:%s", len(invalidated), family)
        return invalidated

    def subscribe(self, key: str, listener: Listener) -> Callable[[], None]:
        """
        Receive a snapshot every time the entry changes.

        A subscribed entry is never evicted.

        Args:
            key: Cache key string.
            listener: Called with each new CacheEntry snapshot.

        Returns:
            Function that removes the subscription.
        """
        slot = self._slot(key, self._clock())
        slot.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in slot.listeners:
                slot.listeners.remove(listener)
                slot.last_access = self._clock()

        return unsubscribe

    async def join(self, key: str) -> CacheEntry | None:
        """Wait for the key's in-flight fetch, if any, and return the entry."""
        slot = self._slots.get(key)
        if slot is None:
            return None
        while slot.task is not None:
            await asyncio.shield(slot.task)
        return self._snapshot(slot)

    def remove(self, key: str) -> None:
        """Drop an entry. A fetch still in flight for it is discarded when it lands."""
        slot = self._slots.pop(key, None)
        if slot is not None:
            self._cancel_request(slot)
            slot.generation += 1
            slot.task = None

    def clear(self) -> None:
        """Drop every entry."""
        for key in list(self._slots):
            self.remove(key)

    def collect_garbage(self, now: float | None = None) -> list[str]:
        """
        Evict entries unused for longer than their evict_after.

        Returns:
            Keys that were evicted.
        """
        now = self._clock() if now is None else now
        evicted = [
            slot.key
            for slot in self._slots.values()
            if not slot.listeners
            and slot.task is None
            and now - slot.last_access > slot.evict_after
        ]
        for key in evicted:
            LOG.debug("Evicted - key:%s", key)
            self.remove(key)
        return evicted

    def _slot(self, key: str, now: float) -> _Slot:
        slot = self._slots.get(key)
        if slot is None:
            slot = _Slot(
                key=key,
                resource=resource_of(key),
                stale_after=self.stale_after,
                evict_after=self.evict_after,
                last_access=now,
            )
            self._slots[key] = slot
        return slot

    def _is_stale(self, slot: _Slot, now: float) -> bool:
        if slot.invalidated or slot.fetched_at is None:
            return True
        return now - slot.fetched_at > slot.stale_after

    def _start(self, slot: _Slot) -> "asyncio.Task[CacheEntry]":
        if slot.loader is None:
            raise RuntimeError(f"No loader registered for {slot.key}")
        self._cancel_request(slot)
        slot.generation += 1
        if slot.fetched_at is None:
            slot.status = CacheStatus.LOADING
        slot.task = asyncio.get_running_loop().create_task(
            self._run(slot, slot.generation, slot.loader)
        )
        self._notify(slot)
        return slot.task

    def _cancel_request(self, slot: _Slot) -> None:
        # Only one loader call per key may be running.
        request, slot.request = slot.request, None
        if request is not None and not request.done():
            LOG.debug("Cancelling superseded request - key:%s", slot.key)
            request.cancel()

    async def _run(self, slot: _Slot, generation: int, loader: Loader) -> CacheEntry:
        if self._superseded(slot, generation):
            return await self._follow(slot)

        request = asyncio.ensure_future(loader())
        slot.request = request
        try:
            data = await request
        except asyncio.CancelledError:
            if self._superseded(slot, generation):
                return await self._follow(slot)
            request.cancel()
            slot.task = None
            raise
        except Exception as exc:
            if self._superseded(slot, generation):
                return await self._follow(slot)
            LOG.error("Fetch failed - key:%s error:%s", slot.key, exc, exc_info=True)
            slot.task = None
            slot.status = CacheStatus.ERROR
            slot.error = exc
            self._notify(slot)
            return self._snapshot(slot)
        finally:
            if slot.request is request:
                slot.request = None

        if self._superseded(slot, generation):
            LOG.debug("Discarding superseded response - key:%s", slot.key)
            return await self._follow(slot)

        slot.task = None
        self._apply_success(slot, data, self._clock())
        return self._snapshot(slot)

    def _apply_success(self, slot: _Slot, data: Any, now: float) -> None:
        slot.data = data
        slot.fetched_at = now
        slot.status = CacheStatus.SUCCESS
        slot.error = None
        slot.invalidated = False
        self._notify(slot)

    def _superseded(self, slot: _Slot, generation: int) -> bool:
        return generation != slot.generation or self._slots.get(slot.key) is not slot

    async def _follow(self, slot: _Slot) -> CacheEntry:
        if self._slots.get(slot.key) is slot and slot.task is not None:
            return await asyncio.shield(slot.task)
        return self._snapshot(slot)

    def _snapshot(self, slot: _Slot) -> CacheEntry:
        return CacheEntry(
            key=slot.key,
            resource=slot.resource,
            data=slot.data,
            status=slot.status,
            error=slot.error,
            fetched_at=slot.fetched_at,
            stale_after=slot.stale_after,
            evict_after=slot.evict_after,
            is_fetching=slot.task is not None,
            is_stale=self._is_stale(slot, self._clock()),
        )

    def _notify(self, slot: _Slot) -> None:
        if not slot.listeners:
            return
        entry = self._snapshot(slot)
        for listener in list(slot.listeners):
            try:
                listener(entry)
            except Exception:
                LOG.exception("Cache listener failed - key:%s", slot.key)
