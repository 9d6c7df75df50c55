from __future__ import annotations

import asyncio

import pytest

from crm_panel.controllers import ListController
from crm_panel.exceptions import ServerError, ValidationError
from crm_panel.lib.caches import QueryCache
from crm_panel.models import (
    MutationOperation,
    MutationRequest,
    Page,
    ResourceKind,
    SortKey,
    StatusFilter,
    parse_representative,
)
from crm_panel.services import DemoCrmService


def run_async(coro):
    return asyncio.run(coro)


def _records(count: int) -> list:
    return [
        parse_representative(
            {
                "id": i,
                "code": f"REP-{i:03d}",
                "name": f"Rep {i:02d}",
                "ownerName": f"Owner {i}",
                "isActive": i % 2 == 1,
                "totalSales": str(i * 1000),
                "totalDebt": str(i * 100),
            }
        )
        for i in range(1, count + 1)
    ]


def _controller(service, cache: QueryCache, **kwargs) -> ListController:
    return ListController.for_service("representatives", service, cache, **kwargs)


def test_initial_load_reports_pagination(cache):
    service = DemoCrmService(representatives=_records(23))

    async def scenario():
        controller = _controller(service, cache)
        return await controller.load()

    view = run_async(scenario())
    assert view.page == 1
    assert view.total_pages == 3
    assert view.total_count == 23
    assert [rep.name for rep in view.items][:2] == ["Rep 01", "Rep 02"]
    assert len(view.items) == 9
    assert view.is_loading is False


def test_filter_change_resets_page(cache):
    service = DemoCrmService(representatives=_records(23))

    async def scenario():
        controller = _controller(service, cache)
        await controller.load()
        await controller.set_page(2)
        assert controller.current_query().page == 2
        return await controller.set_filter("status_filter", "active")

    view = run_async(scenario())
    assert view.query.page == 1
    assert view.query.status_filter is StatusFilter.ACTIVE
    assert view.total_count == 12
    assert view.total_pages == 2
    assert all(rep.is_active for rep in view.items)


def test_page_is_clamped_to_known_total(cache):
    service = DemoCrmService(representatives=_records(23))

    async def scenario():
        controller = _controller(service, cache)
        await controller.load()
        view = await controller.set_page(4)
        return controller, view

    controller, view = run_async(scenario())
    assert controller.total_pages == 3
    assert controller.current_query().page == 3
    assert view.page == 3
    assert len(view.items) == 5


def test_next_and_previous_page(cache):
    service = DemoCrmService(representatives=_records(23))

    async def scenario():
        controller = _controller(service, cache)
        await controller.load()
        pages = [(await controller.next_page()).page]
        pages.append((await controller.next_page()).page)
        pages.append((await controller.next_page()).page)
        pages.append((await controller.previous_page()).page)
        return pages

    assert run_async(scenario()) == [2, 3, 3, 2]


def test_current_query_is_pure(cache):
    controller = _controller(DemoCrmService(), cache)
    first = controller.current_query()
    second = controller.current_query()
    assert first == second
    assert first.cache_key() == second.cache_key()


def test_filter_aliases_and_sort(cache):
    service = DemoCrmService(representatives=_records(23))

    async def scenario():
        controller = _controller(service, cache)
        return await controller.set_filter("sortBy", "totalSales")

    view = run_async(scenario())
    assert view.query.sort_key is SortKey.TOTAL_SALES
    assert view.items[0].name == "Rep 23"


def test_search_is_stripped_and_matches_code(cache):
    service = DemoCrmService(representatives=_records(23))

    async def scenario():
        controller = _controller(service, cache)
        return await controller.set_filter("search", "  rep-007 ")

    view = run_async(scenario())
    assert view.query.search_term == "rep-007"
    assert [rep.id for rep in view.items] == [7]
    assert view.total_pages == 1


def test_same_query_is_fetched_once_across_controllers(cache):
    service = DemoCrmService(representatives=_records(23))

    async def scenario():
        first = _controller(service, cache)
        second = _controller(service, cache)
        await asyncio.gather(first.load(), second.load())

    run_async(scenario())
    assert len(service.calls) == 1


def test_overlapping_load_retry_refresh_run_one_request(cache):
    counts = {"calls": 0, "inflight": 0, "max_inflight": 0}

    async def fetch_page(query):
        counts["calls"] += 1
        counts["inflight"] += 1
        counts["max_inflight"] = max(counts["max_inflight"], counts["inflight"])
        try:
            await asyncio.sleep(0.01)
            return Page.from_items(["row"], query.page, query.page_size, 1)
        finally:
            counts["inflight"] -= 1

    async def scenario():
        controller = ListController("representatives", fetch_page, cache)
        return await asyncio.gather(controller.load(), controller.retry(), controller.refresh())

    views = run_async(scenario())
    assert counts["max_inflight"] == 1
    assert counts["calls"] == 1
    assert all(view.items == ("row",) for view in views)


def test_result_for_abandoned_key_is_not_shown(cache):
    async def scenario():
        release = asyncio.Event()

        async def fetch_page(query):
            if query.search_term == "old":
                await release.wait()
            return Page.from_items([query.search_term], query.page, query.page_size, 1)

        controller = ListController("representatives", fetch_page, cache)
        abandoned = asyncio.create_task(controller.set_filter("search_term", "old"))
        await asyncio.sleep(0)
        current = await controller.set_filter("search_term", "new")
        release.set()
        await abandoned
        return current, controller.view()

    current, view = run_async(scenario())
    assert current.items == ("new",)
    assert view.items == ("new",)
    assert view.query.search_term == "new"


def test_listener_sees_loading_then_data(cache):
    service = DemoCrmService(representatives=_records(3))
    views = []

    async def scenario():
        controller = _controller(service, cache)
        controller.subscribe(views.append)
        await controller.load()

    run_async(scenario())
    assert views[0].is_loading is True
    assert views[-1].is_loading is False
    assert len(views[-1].items) == 3


def test_close_discards_late_results(cache):
    views = []

    async def scenario():
        release = asyncio.Event()

        async def fetch_page(query):
            await release.wait()
            return Page.from_items(["late"], query.page, query.page_size, 1)

        controller = ListController("representatives", fetch_page, cache)
        controller.subscribe(views.append)
        pending = asyncio.create_task(controller.load())
        await asyncio.sleep(0)
        controller.close()
        seen = len(views)
        release.set()
        view = await pending
        return controller, view, seen

    controller, view, seen = run_async(scenario())
    assert controller.closed is True
    assert view.items == ()
    assert len(views) == seen
    with pytest.raises(RuntimeError):
        run_async(controller.set_page(2))


def test_error_then_retry(cache):
    attempts = {"count": 0}

    async def fetch_page(query):
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise ServerError("خطای سرور", status_code=500)
        return Page.from_items(["ok"], query.page, query.page_size, 1)

    async def scenario():
        controller = ListController("invoices", fetch_page, cache)
        failed = await controller.load()
        retried = await controller.retry()
        return failed, retried

    failed, retried = run_async(scenario())
    assert failed.is_error is True
    assert failed.error_message == "500: خطای سرور"
    assert retried.is_error is False
    assert retried.items == ("ok",)
    assert attempts["count"] == 2


@pytest.mark.parametrize(
    "field, value",
    [
        ("color", "red"),
        ("status_filter", "deleted"),
        ("sort_key", "price"),
        ("search_term", 42),
    ],
)
def test_invalid_filters_are_rejected(cache, field, value):
    controller = _controller(DemoCrmService(), cache)
    with pytest.raises(ValidationError):
        run_async(controller.set_filter(field, value))
    assert controller.current_query().page == 1


@pytest.mark.parametrize("page", [0, -1, True, "2"])
def test_invalid_pages_are_rejected(cache, page):
    controller = _controller(DemoCrmService(), cache)
    with pytest.raises(ValidationError):
        run_async(controller.set_page(page))


def test_invalid_construction(cache):
    with pytest.raises(ValidationError):
        _controller(DemoCrmService(), cache, page_size=0)
    with pytest.raises(ValidationError):
        ListController("orders", DemoCrmService().list_page, cache)


def test_mutate_requires_coordinator(cache):
    controller = _controller(DemoCrmService(), cache)
    request = MutationRequest(ResourceKind.REPRESENTATIVES, MutationOperation.DELETE, record_id=1)
    with pytest.raises(RuntimeError):
        run_async(controller.mutate(request))
