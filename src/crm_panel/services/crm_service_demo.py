"""
Demo implementation of CrmService using in-memory records.

This service is useful for:
- Local development without a running backend
- Testing the list views with realistic Persian data
- Demonstrating the panel offline

Search, status filtering, sorting and pagination follow the backend's list
endpoint: search matches name, code and owner (invoice number and
representative for invoices), ``name`` sorts ascending, money fields and
``createdAt`` sort descending, and pages past the end come back empty.
"""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Sequence

from crm_panel.data.demo_records import DEMO_INVOICES, DEMO_REPRESENTATIVES
from crm_panel.exceptions import ServerError
from crm_panel.lib import logs
from crm_panel.models.common import ListQuery, Page, ResourceKind, SortKey, StatusFilter
from crm_panel.models.invoice import Invoice, parse_invoice, serialize_invoice
from crm_panel.models.mutation import MutationOperation, MutationRequest, MutationResult
from crm_panel.models.representative import (
    Representative,
    RepresentativeStatistics,
    TopPerformer,
    parse_representative,
    serialize_representative,
)
from crm_panel.services.crm_service import CrmService

LOG = logs.logger(__file__)

# Debt above this many rials raises a risk alert on the statistics strip.
RISK_DEBT_THRESHOLD = Decimal("100000")

_NOT_FOUND = {
    ResourceKind.REPRESENTATIVES: "نماینده یافت نشد",
    ResourceKind.INVOICES: "فاکتور یافت نشد",
}


class DemoCrmService(CrmService):
    """
    In-memory CRM service backed by static demo data.

    Attributes:
        latency: Seconds to sleep before answering, to exercise loading states.
    """

    def __init__(
        self,
        representatives: Sequence[Representative] | None = None,
        invoices: Sequence[Invoice] | None = None,
        latency: float = 0.0,
    ) -> None:
        """
        Initialize with record data.

        Args:
            representatives: Custom representatives, or None for the demo set.
            invoices: Custom invoices, or None for the demo set.
            latency: Artificial delay per call in seconds.
        """
        if representatives is None:
            representatives = [parse_representative(r) for r in DEMO_REPRESENTATIVES]
        if invoices is None:
            invoices = [parse_invoice(i) for i in DEMO_INVOICES]
        self._records: dict[ResourceKind, list[Any]] = {
            ResourceKind.REPRESENTATIVES: list(representatives),
            ResourceKind.INVOICES: list(invoices),
        }
        self.latency = latency
        self.calls: list[str] = []

    async def list_page(self, query: ListQuery) -> Page:
        self.calls.append(query.cache_key())
        await self._delay()
        records = [
            record
            for record in self._records[query.resource]
            if matches_query(record, query.search_term)
            and matches_status(record, query.status_filter)
        ]
        records = sort_records(records, query.sort_key)
        start = (query.page - 1) * query.page_size
        return Page.from_items(
            records[start : start + query.page_size],
            page=query.page,
            page_size=query.page_size,
            total_count=len(records),
        )

    async def representative_statistics(self) -> RepresentativeStatistics:
        self.calls.append(ResourceKind.REPRESENTATIVES.statistics_path)
        await self._delay()
        reps: list[Representative] = self._records[ResourceKind.REPRESENTATIVES]
        active = [r for r in reps if r.is_active]
        top = sorted(reps, key=lambda r: r.total_sales, reverse=True)[:5]
        return RepresentativeStatistics(
            total_count=len(reps),
            active_count=len(active),
            inactive_count=len(reps) - len(active),
            total_sales=sum((r.total_sales for r in reps), Decimal("0")),
            total_debt=sum((r.total_debt for r in reps), Decimal("0")),
            avg_performance=round(len(active) / len(reps) * 100) if reps else 0,
            risk_alerts=sum(1 for r in reps if r.total_debt > RISK_DEBT_THRESHOLD),
            top_performers=[
                TopPerformer(
                    id=r.id,
                    name=r.name,
                    code=r.code,
                    total_sales=r.total_sales,
                    is_active=r.is_active,
                )
                for r in top
            ],
        )

    async def mutate(self, request: MutationRequest) -> MutationResult:
        self.calls.append(f"{request.operation.http_method} {request.path()}")
        await self._delay()
        records = self._records[request.resource]
        parse, serialize = _codec(request.resource)

        if request.operation is MutationOperation.CREATE:
            next_id = max((r.id for r in records), default=0) + 1
            now = datetime.now(timezone.utc).isoformat()
            payload = {"createdAt": now, "updatedAt": now, **request.payload, "id": next_id}
            record = parse(payload)
            records.append(record)
            LOG.info("Demo create - resource:%s id:%s", request.resource.value, next_id)
            return MutationResult(success=True, data=serialize(record))

        index = self._index_of(request)
        if request.operation is MutationOperation.DELETE:
            removed = records.pop(index)
            LOG.info("Demo delete - resource:%s id:%s", request.resource.value, removed.id)
            return MutationResult(success=True, data={"id": removed.id})

        merged = {**serialize(records[index]), **request.payload, "id": records[index].id}
        records[index] = parse(merged)
        return MutationResult(success=True, data=serialize(records[index]))

    def _index_of(self, request: MutationRequest) -> int:
        for index, record in enumerate(self._records[request.resource]):
            if str(record.id) == str(request.record_id):
                return index
        raise ServerError(_NOT_FOUND[request.resource], status_code=404)

    async def _delay(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)


def _codec(resource: ResourceKind) -> tuple[Callable[[Any], Any], Callable[[Any], dict]]:
    if resource is ResourceKind.REPRESENTATIVES:
        return parse_representative, serialize_representative
    return parse_invoice, serialize_invoice


def matches_query(record: Any, query: str) -> bool:
    """
    Check if a record matches the search query.

    Performs case-insensitive substring matching against the record's
    searchable terms.
    """
    normalized = query.strip().lower()
    if not normalized:
        return True
    return any(normalized in value for value in record.searchable_terms())


def matches_status(record: Any, status_filter: StatusFilter) -> bool:
    if status_filter is StatusFilter.ACTIVE:
        return record.is_active
    if status_filter is StatusFilter.INACTIVE:
        return not record.is_active
    return True


_SORT_FIELDS = {
    SortKey.NAME: ("name", "invoice_number"),
    SortKey.TOTAL_SALES: ("total_sales", "amount"),
    SortKey.TOTAL_DEBT: ("total_debt", "amount"),
    SortKey.CREATED_AT: ("created_at",),
}


def sort_records(records: Sequence[Any], sort_key: SortKey) -> list[Any]:
    """
    Order records the way the backend does.

    ``name`` sorts ascending; every other key sorts descending with missing
    values last. Ties keep id order.
    """
    by_id = sorted(records, key=lambda r: r.id)
    attribute = next(
        (name for name in _SORT_FIELDS[sort_key] if by_id and hasattr(by_id[0], name)),
        None,
    )
    if attribute is None:
        return by_id
    if sort_key is SortKey.NAME:
        return sorted(by_id, key=lambda r: getattr(r, attribute) or "")
    present = [r for r in by_id if getattr(r, attribute) is not None]
    missing = [r for r in by_id if getattr(r, attribute) is None]
    return sorted(present, key=lambda r: getattr(r, attribute), reverse=True) + missing
