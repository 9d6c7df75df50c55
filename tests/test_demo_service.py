from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest

from crm_panel.exceptions import ServerError
from crm_panel.models import (
    ListQuery,
    MutationOperation,
    MutationRequest,
    ResourceKind,
    SortKey,
    StatusFilter,
)
from crm_panel.services import DemoCrmService, get_crm_service
from crm_panel.services.crm_service_demo import sort_records


def run_async(coro):
    return asyncio.run(coro)


def test_lists_first_page_sorted_by_name():
    service = DemoCrmService()
    page = run_async(service.list_page(ListQuery(ResourceKind.REPRESENTATIVES)))
    names = [rep.name for rep in page.items]
    assert names == sorted(names)
    assert page.total_count == 11
    assert page.total_pages == 2
    assert len(page.items) == 9


def test_page_past_the_end_is_empty():
    service = DemoCrmService()
    page = run_async(service.list_page(ListQuery(ResourceKind.REPRESENTATIVES, page=5)))
    assert page.items == ()
    assert page.page == 5
    assert page.total_pages == 2


def test_status_filter_and_search():
    service = DemoCrmService()
    inactive = run_async(
        service.list_page(
            ListQuery(ResourceKind.REPRESENTATIVES, status_filter=StatusFilter.INACTIVE)
        )
    )
    assert sorted(rep.id for rep in inactive.items) == [3, 6, 10]

    found = run_async(
        service.list_page(ListQuery(ResourceKind.REPRESENTATIVES, search_term="آریا"))
    )
    assert [rep.id for rep in found.items] == [1]


def test_sorting_by_money_fields_is_descending():
    service = DemoCrmService()
    by_debt = run_async(
        service.list_page(ListQuery(ResourceKind.REPRESENTATIVES, sort_key=SortKey.TOTAL_DEBT))
    )
    assert by_debt.items[0].id == 3
    debts = [rep.total_debt for rep in by_debt.items]
    assert debts == sorted(debts, reverse=True)


def test_invoices_filter_open_and_sort_newest_first():
    service = DemoCrmService()
    page = run_async(
        service.list_page(
            ListQuery(
                ResourceKind.INVOICES,
                status_filter=StatusFilter.ACTIVE,
                sort_key=SortKey.CREATED_AT,
            )
        )
    )
    assert page.total_count == 5
    assert page.items[0].id == 106
    assert all(invoice.id != 102 for invoice in page.items)


def test_sort_keeps_missing_values_last():
    service = DemoCrmService()
    page = run_async(service.list_page(ListQuery(ResourceKind.REPRESENTATIVES)))
    records = list(page.items)
    records[0].created_at = None
    ordered = sort_records(records, SortKey.CREATED_AT)
    assert ordered[-1] is records[0]


def test_statistics():
    stats = run_async(DemoCrmService().representative_statistics())
    assert stats.total_count == 11
    assert stats.active_count == 8
    assert stats.inactive_count == 3
    assert stats.avg_performance == 73
    assert stats.risk_alerts == 9
    assert stats.total_sales > Decimal("0")
    assert [p.id for p in stats.top_performers[:3]] == [2, 7, 1]


def test_mutations_change_records():
    service = DemoCrmService()

    async def scenario():
        created = await service.mutate(
            MutationRequest(
                ResourceKind.INVOICES,
                MutationOperation.CREATE,
                {"invoiceNumber": "INV-1403-0007", "amount": "5000", "representativeId": 1},
            )
        )
        updated = await service.mutate(
            MutationRequest(
                ResourceKind.INVOICES,
                MutationOperation.UPDATE,
                {"status": "paid"},
                record_id=created.data["id"],
            )
        )
        return created, updated

    created, updated = run_async(scenario())
    assert created.success is True
    assert created.data["id"] == 107
    assert updated.data["status"] == "paid"
    assert service.calls == ["POST invoices", "PUT invoices/107"]


def test_missing_record_raises_not_found():
    service = DemoCrmService()
    request = MutationRequest(
        ResourceKind.REPRESENTATIVES, MutationOperation.UPDATE, {"name": "x"}, record_id=404
    )
    with pytest.raises(ServerError) as info:
        run_async(service.mutate(request))
    assert info.value.status_code == 404


def test_service_factory():
    assert isinstance(get_crm_service("demo"), DemoCrmService)
    assert get_crm_service("demo") is get_crm_service("demo")
    with pytest.raises(ValueError):
        get_crm_service("graphql")
