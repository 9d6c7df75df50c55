"""
Mutation coordinator: backend writes followed by coarse cache invalidation.

After a successful create/update/delete every cached entry of the affected
resource family is marked stale, whatever its filters or page. Entries being
displayed refetch right away; the rest refetch on their next read. A failed
mutation leaves the cache untouched so the data on screen stays valid.
"""

from typing import Any, Mapping

from crm_panel.exceptions import CrmError
from crm_panel.lib import logs
from crm_panel.lib.caches import QueryCache
from crm_panel.models.common import ResourceKind
from crm_panel.models.mutation import MutationOperation, MutationRequest, MutationResult
from crm_panel.services.crm_service import CrmService

LOG = logs.logger(__file__)


class MutationCoordinator:
    """Runs mutations against a CrmService and restores cache consistency."""

    def __init__(self, service: CrmService, cache: QueryCache) -> None:
        self._service = service
        self._cache = cache

    async def mutate(self, request: MutationRequest) -> MutationResult:
        """
        Perform the mutation, then invalidate its resource family.

        Invalidation only happens after the backend confirms success.

        Args:
            request: The mutation to run.

        Returns:
            The backend's result.

        Raises:
            NetworkError, ServerError: The mutation failed; no entry was touched.
        """
        try:
            result = await self._service.mutate(request)
        except CrmError as exc:
            LOG.error(
                "Mutation failed - %s %s: %s",
                request.operation.value,
                request.resource.value,
                exc,
            )
            raise

        invalidated = self._cache.invalidate(request.resource)
        LOG.info(
            "Mutation succeeded - %s %s, invalidated:%s",
            request.operation.value,
            request.resource.value,
            len(invalidated),
        )
        return result

    async def create(
        self, resource: ResourceKind, payload: Mapping[str, Any]
    ) -> MutationResult:
        return await self.mutate(
            MutationRequest(resource, MutationOperation.CREATE, payload=payload)
        )

    async def update(
        self, resource: ResourceKind, record_id: int | str, payload: Mapping[str, Any]
    ) -> MutationResult:
        return await self.mutate(
            MutationRequest(
                resource, MutationOperation.UPDATE, payload=payload, record_id=record_id
            )
        )

    async def delete(self, resource: ResourceKind, record_id: int | str) -> MutationResult:
        return await self.mutate(
            MutationRequest(resource, MutationOperation.DELETE, record_id=record_id)
        )
