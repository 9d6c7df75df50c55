from __future__ import annotations

from decimal import Decimal

import pytest

from crm_panel.data.demo_records import DEMO_INVOICES, DEMO_REPRESENTATIVES
from crm_panel.exceptions import ValidationError
from crm_panel.lib import objects
from crm_panel.models import (
    InvoiceStatus,
    ListQuery,
    MutationOperation,
    MutationRequest,
    MutationResult,
    Page,
    ResourceKind,
    SortKey,
    StatusFilter,
    parse_invoice,
    parse_representative,
    parse_statistics,
    serialize_representative,
    total_pages_for,
)


def test_query_params_omit_defaults():
    query = ListQuery(ResourceKind.REPRESENTATIVES)
    assert query.to_params() == {"page": 1, "limit": 9, "sortBy": "name"}
    assert query.cache_key() == 'representatives:{"limit":9,"page":1,"sortBy":"name"}'


def test_query_params_with_filters():
    query = ListQuery(
        ResourceKind.INVOICES,
        page=2,
        search_term="آریا",
        status_filter=StatusFilter.INACTIVE,
        sort_key=SortKey.CREATED_AT,
    )
    assert query.to_params() == {
        "page": 2,
        "limit": 9,
        "search": "آریا",
        "status": "inactive",
        "sortBy": "createdAt",
    }
    assert query.cache_key().startswith("invoices:")
    assert "آریا" in query.cache_key()


def test_with_filter_resets_page():
    query = ListQuery(ResourceKind.REPRESENTATIVES, page=3)
    changed = query.with_filter("sort_key", SortKey.TOTAL_DEBT)
    assert changed.page == 1
    assert changed.sort_key is SortKey.TOTAL_DEBT
    assert query.page == 3


def test_query_key_is_order_independent():
    assert objects.query_key("x", {"b": 1, "a": 2}) == objects.query_key("x", {"a": 2, "b": 1})
    assert objects.query_key("x", {"a": None}) == "x:{}"


def test_total_pages_for():
    assert total_pages_for(23, 9) == 3
    assert total_pages_for(0, 9) == 1
    assert total_pages_for(9, 9) == 1
    with pytest.raises(ValueError):
        total_pages_for(10, 0)


def test_page_from_response_variants():
    page = Page.from_response(
        {"data": [{"id": 1}], "pagination": {"page": 2, "totalPages": 3, "totalCount": 19}},
        dict,
    )
    assert (page.page, page.total_pages, page.total_count) == (2, 3, 19)
    assert page.has_next and page.has_previous

    legacy = Page.from_response({"data": [], "pagination": {"page": 1, "total": 23}}, dict, 9)
    assert legacy.total_pages == 3
    assert legacy.total_count == 23

    empty = Page.from_response({"data": [], "pagination": {"totalPages": 0, "totalCount": 0}}, dict)
    assert empty.total_pages == 1
    assert not empty.has_next


def test_parse_representative_from_camel_case():
    rep = parse_representative(DEMO_REPRESENTATIVES[0])
    assert rep.id == 1
    assert rep.owner_name == "علی رضایی"
    assert rep.total_sales == Decimal("98000000")
    assert rep.debt_ratio == 12.8
    assert rep.created_at is not None
    assert serialize_representative(rep)["totalDebt"] == "12500000"


def test_parse_representative_tolerates_missing_fields():
    rep = parse_representative({"id": None, "name": "نمونه"})
    assert rep.id == 0
    assert rep.code == ""
    assert rep.total_debt == Decimal("0")
    assert rep.is_active is True


def test_null_is_active_means_active():
    assert parse_representative({"id": 1, "isActive": None}).is_active is True
    assert parse_representative({"id": 2, "isActive": False}).is_active is False
    stats = parse_statistics({"topPerformers": [{"id": 5, "isActive": None}]})
    assert stats.top_performers[0].is_active is True


def test_parse_statistics():
    stats = parse_statistics(
        {
            "totalCount": 3,
            "activeCount": 2,
            "inactiveCount": 1,
            "totalSales": "1000",
            "avgPerformance": 66.7,
            "topPerformers": [{"id": 5, "name": "الف", "code": "R5", "totalSales": "900"}],
        }
    )
    assert stats.total_count == 3
    assert stats.total_debt == Decimal("0")
    assert stats.top_performers[0].total_sales == Decimal("900")


def test_parse_invoice_and_status():
    invoice = parse_invoice(DEMO_INVOICES[1])
    assert invoice.status is InvoiceStatus.PAID
    assert invoice.is_active is False
    assert invoice.is_overdue() is False
    assert InvoiceStatus.parse("PARTIAL") is InvoiceStatus.PARTIAL
    assert InvoiceStatus.parse("refunded") is InvoiceStatus.UNPAID
    assert InvoiceStatus.parse(None) is InvoiceStatus.UNPAID


def test_mutation_request_paths():
    create = MutationRequest(ResourceKind.INVOICES, MutationOperation.CREATE, {"amount": "1"})
    assert create.path() == "invoices"
    assert create.operation.http_method == "POST"
    update = MutationRequest(ResourceKind.REPRESENTATIVES, MutationOperation.UPDATE, record_id=4)
    assert update.path() == "representatives/4"
    with pytest.raises(ValidationError):
        MutationRequest(ResourceKind.REPRESENTATIVES, MutationOperation.DELETE).path()


def test_mutation_result_from_response():
    assert MutationResult.from_response({"success": False, "error": "x"}).error == "x"
    assert MutationResult.from_response({"id": 3}).success is True
    assert MutationResult.from_response([1, 2]).data == [1, 2]
