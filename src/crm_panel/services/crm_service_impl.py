"""
REST-backed implementation of CrmService.

Talks to the CRM backend through a shared httpx.AsyncClient:

- ``GET <resource>?page&limit&search&status&sortBy`` returns
  ``{data: [...], pagination: {page, totalPages, totalCount}}``
- ``POST <resource>``, ``PUT|DELETE <resource>/<id>`` return
  ``{success, data?, error?}``
- ``GET representatives/statistics`` returns the statistics object

Transport failures become NetworkError; non-2xx answers, undecodable bodies
and ``success=false`` envelopes become ServerError.
"""

from typing import Any, Callable, Mapping

import httpx

from crm_panel.exceptions import NetworkError, ServerError
from crm_panel.lib import clients, logs, objects
from crm_panel.models.common import ListQuery, Page, ResourceKind
from crm_panel.models.invoice import parse_invoice
from crm_panel.models.mutation import MutationOperation, MutationRequest, MutationResult
from crm_panel.models.representative import (
    RepresentativeStatistics,
    parse_representative,
    parse_statistics,
)
from crm_panel.services.crm_service import CrmService

LOG = logs.logger(__file__)

_PARSERS: dict[ResourceKind, Callable[[Mapping[str, Any]], Any]] = {
    ResourceKind.REPRESENTATIVES: parse_representative,
    ResourceKind.INVOICES: parse_invoice,
}

_FETCH_FAILED = "خطا در دریافت اطلاعات"


class RestCrmService(CrmService):
    """
    Production service calling the CRM REST API.

    Attributes:
        _client: Shared AsyncClient; the process-wide one by default.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """
        Initialize the service.

        Args:
            client: AsyncClient to use; defaults to ``clients.api_client()``.
        """
        self._client = client or clients.api_client()

    async def list_page(self, query: ListQuery) -> Page:
        LOG.info("list_page - key:%s", query.cache_key())
        payload = await self._request("GET", query.resource.value, params=query.to_params())
        if not isinstance(payload, Mapping):
            raise ServerError(_FETCH_FAILED)
        return Page.from_response(payload, _PARSERS[query.resource], query.page_size)

    async def representative_statistics(self) -> RepresentativeStatistics:
        payload = await self._request("GET", ResourceKind.REPRESENTATIVES.statistics_path)
        if not isinstance(payload, Mapping):
            raise ServerError(_FETCH_FAILED)
        return parse_statistics(payload)

    async def mutate(self, request: MutationRequest) -> MutationResult:
        path = request.path()
        LOG.info("mutate - %s %s", request.operation.http_method, path)
        body = None
        if request.operation is not MutationOperation.DELETE:
            body = objects.to_jsonable(dict(request.payload))
        payload = await self._request(request.operation.http_method, path, json=body)
        result = MutationResult.from_response(payload)
        if not result.success:
            raise ServerError(result.error or "عملیات ناموفق بود")
        return result

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            raise NetworkError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise ServerError(_error_message(response), status_code=response.status_code)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ServerError(
                "پاسخ نامعتبر از سرور", status_code=response.status_code
            ) from exc


def _error_message(response: httpx.Response) -> str:
    """Prefer the backend's ``error``/``message`` field, then the raw text."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, Mapping):
        for key in ("error", "message"):
            if body.get(key):
                return str(body[key])
    return response.text or response.reason_phrase
