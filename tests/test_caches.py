from __future__ import annotations

import asyncio

from crm_panel.lib.caches import CacheStatus, QueryCache, resource_of

KEY = 'representatives:{"limit":9,"page":1,"sortBy":"name"}'
MINUTE = 60


def run_async(coro):
    return asyncio.run(coro)


def counting_loader(value="data"):
    calls = {"count": 0}

    async def loader():
        calls["count"] += 1
        return f"{value}-{calls['count']}"

    return loader, calls


def test_resource_of_reads_family_from_key():
    assert resource_of(KEY) == "representatives"
    assert resource_of("representatives/statistics:{}") == "representatives"
    assert resource_of('invoices:{"page":2}') == "invoices"


def test_fresh_entry_is_served_without_fetching(cache, clock):
    loader, calls = counting_loader()

    async def scenario():
        first = await cache.fetch(KEY, loader)
        clock.advance(5 * MINUTE)
        second = await cache.fetch(KEY, loader)
        return first, second

    first, second = run_async(scenario())
    assert calls["count"] == 1
    assert first.status is CacheStatus.SUCCESS
    assert second.data == "data-1"
    assert second.is_stale is False
    assert second.is_fetching is False


def test_stale_entry_returns_cached_data_and_refetches_in_background(cache, clock):
    loader, calls = counting_loader()

    async def scenario():
        await cache.fetch(KEY, loader)
        clock.advance(10 * MINUTE)
        stale = await cache.fetch(KEY, loader)
        settled = await cache.join(KEY)
        return stale, settled

    stale, settled = run_async(scenario())
    assert stale.data == "data-1"
    assert stale.is_stale is True
    assert stale.is_fetching is True
    assert stale.status is CacheStatus.SUCCESS
    assert calls["count"] == 2
    assert settled.data == "data-2"
    assert settled.is_stale is False


def test_unused_entry_is_evicted_and_refetched_cold(cache, clock):
    loader, calls = counting_loader()
    seen = []

    async def scenario():
        await cache.fetch(KEY, loader)
        clock.advance(13 * MINUTE)
        assert cache.get(KEY) is None
        unsubscribe = cache.subscribe(KEY, lambda entry: seen.append(entry.status))
        seen.append(cache.get(KEY).status)
        entry = await cache.fetch(KEY, loader)
        unsubscribe()
        return entry

    entry = run_async(scenario())
    assert calls["count"] == 2
    assert entry.data == "data-2"
    assert seen == [CacheStatus.IDLE, CacheStatus.LOADING, CacheStatus.SUCCESS]


def test_subscribed_entry_is_never_evicted(cache, clock):
    loader, _ = counting_loader()

    async def scenario():
        await cache.fetch(KEY, loader)
        cache.subscribe(KEY, lambda entry: None)
        clock.advance(60 * MINUTE)
        return cache.get(KEY)

    entry = run_async(scenario())
    assert entry is not None
    assert entry.data == "data-1"


def test_concurrent_reads_of_cold_key_share_one_fetch(cache):
    calls = {"count": 0}

    async def loader():
        calls["count"] += 1
        await asyncio.sleep(0.01)
        return "shared"

    async def scenario():
        return await asyncio.gather(
            cache.fetch(KEY, loader), cache.fetch(KEY, loader), cache.fetch(KEY, loader)
        )

    entries = run_async(scenario())
    assert calls["count"] == 1
    assert [entry.data for entry in entries] == ["shared", "shared", "shared"]


def test_superseded_response_is_discarded(cache):
    async def scenario():
        release_old = asyncio.Event()

        async def slow_loader():
            await release_old.wait()
            return "old"

        async def fast_loader():
            return "new"

        first = asyncio.create_task(cache.fetch(KEY, slow_loader))
        await asyncio.sleep(0)
        forced = await cache.fetch(KEY, fast_loader, force=True)
        release_old.set()
        late = await first
        return forced, late, cache.get(KEY)

    forced, late, current = run_async(scenario())
    assert forced.data == "new"
    assert late.data == "new"
    assert current.data == "new"


def test_failed_fetch_records_error_without_retrying(cache, clock):
    calls = {"count": 0}

    async def failing_loader():
        calls["count"] += 1
        raise RuntimeError("backend down")

    async def scenario():
        entry = await cache.fetch(KEY, failing_loader)
        clock.advance(30 * MINUTE)
        await asyncio.sleep(0)
        return entry

    entry = run_async(scenario())
    assert calls["count"] == 1
    assert entry.status is CacheStatus.ERROR
    assert entry.is_error is True
    assert str(entry.error) == "backend down"
    assert entry.has_data is False


def test_failed_refresh_keeps_previous_data(cache, clock):
    responses = iter(["first"])

    async def loader():
        try:
            return next(responses)
        except StopIteration:
            raise RuntimeError("gone") from None

    async def scenario():
        await cache.fetch(KEY, loader)
        return await cache.fetch(KEY, loader, force=True)

    entry = run_async(scenario())
    assert entry.is_error is True
    assert entry.data == "first"


def test_invalidate_marks_family_stale_and_refetches_active_entries(cache):
    rep_loader, rep_calls = counting_loader("rep")
    other_loader, other_calls = counting_loader("other")
    inv_loader, inv_calls = counting_loader("inv")
    other_key = 'representatives:{"limit":9,"page":2,"sortBy":"name"}'
    invoice_key = 'invoices:{"limit":9,"page":1,"sortBy":"name"}'

    async def scenario():
        await cache.fetch(KEY, rep_loader)
        await cache.fetch(other_key, other_loader)
        await cache.fetch(invoice_key, inv_loader)
        cache.subscribe(KEY, lambda entry: None)

        invalidated = cache.invalidate("representatives")
        active = await cache.join(KEY)
        return invalidated, active, cache.get(other_key), cache.get(invoice_key)

    invalidated, active, idle, invoices = run_async(scenario())
    assert sorted(invalidated) == sorted([KEY, other_key])
    assert rep_calls["count"] == 2
    assert active.is_stale is False
    assert other_calls["count"] == 1
    assert idle.is_stale is True
    assert inv_calls["count"] == 1
    assert invoices.is_stale is False


def test_set_stores_fresh_value(cache):
    entry = cache.set(KEY, "manual")
    assert entry.data == "manual"
    assert entry.status is CacheStatus.SUCCESS
    assert KEY in cache
    assert len(cache) == 1


def test_remove_and_clear(cache):
    cache.set(KEY, "a")
    cache.set("invoices:{}", "b")
    cache.remove(KEY)
    assert cache.keys() == ["invoices:{}"]
    cache.clear()
    assert len(cache) == 0


def test_listener_failure_does_not_break_fetch(clock):
    cache = QueryCache(clock=clock)
    loader, _ = counting_loader()

    def broken(entry):
        raise ValueError("listener bug")

    async def scenario():
        cache.subscribe(KEY, broken)
        return await cache.fetch(KEY, loader)

    entry = run_async(scenario())
    assert entry.data == "data-1"


def tracking_loader(state, delay=0.01):
    state.update(calls=0, inflight=0, max_inflight=0, cancelled=0)

    async def loader():
        state["calls"] += 1
        state["inflight"] += 1
        state["max_inflight"] = max(state["max_inflight"], state["inflight"])
        try:
            await asyncio.sleep(delay)
            return f"data-{state['calls']}"
        except asyncio.CancelledError:
            state["cancelled"] += 1
            raise
        finally:
            state["inflight"] -= 1

    return loader


async def _until_running(state):
    while state["inflight"] == 0:
        await asyncio.sleep(0)


def test_forced_fetch_cancels_the_running_request(cache):
    state = {}
    loader = tracking_loader(state)

    async def scenario():
        first = asyncio.create_task(cache.fetch(KEY, loader))
        await _until_running(state)
        forced = await cache.fetch(KEY, loader, force=True)
        return forced, await first

    forced, first = run_async(scenario())
    assert state["max_inflight"] == 1
    assert state["cancelled"] == 1
    assert forced.data == "data-2"
    assert first.data == "data-2"


def test_invalidate_during_fetch_keeps_one_request_in_flight(cache):
    state = {}
    loader = tracking_loader(state)

    async def scenario():
        pending = asyncio.create_task(cache.fetch(KEY, loader))
        await _until_running(state)
        invalidated = cache.invalidate("representatives")
        return invalidated, await pending

    invalidated, entry = run_async(scenario())
    assert invalidated == [KEY]
    assert state["max_inflight"] == 1
    assert state["cancelled"] == 1
    assert entry.data == "data-2"
    assert entry.is_stale is False
    assert entry.is_fetching is False


def test_removed_entry_cancels_its_request(cache):
    state = {}
    loader = tracking_loader(state)

    async def scenario():
        pending = asyncio.create_task(cache.fetch(KEY, loader))
        await _until_running(state)
        cache.remove(KEY)
        return await pending

    entry = run_async(scenario())
    assert state["cancelled"] == 1
    assert entry.has_data is False
    assert KEY not in cache


def test_set_counts_as_use_for_eviction(cache, clock):
    loader, calls = counting_loader()

    async def scenario():
        await cache.fetch(KEY, loader)
        clock.advance(13 * MINUTE)
        cache.set(KEY, "fresh")
        entry = cache.get(KEY)
        again = await cache.fetch(KEY, loader)
        return entry, again

    entry, again = run_async(scenario())
    assert entry is not None
    assert entry.data == "fresh"
    assert again.data == "fresh"
    assert calls["count"] == 1
