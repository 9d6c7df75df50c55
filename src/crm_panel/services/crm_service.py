"""
Abstract base class defining the CRM data access contract.

All service implementations must extend CrmService. The list controller
only ever calls list_page(); the mutation coordinator calls mutate().

Implementations:
- DemoCrmService: In-memory records for development and tests
- RestCrmService: httpx calls against the CRM REST backend
"""

from abc import ABC, abstractmethod

from crm_panel.models.common import ListQuery, Page
from crm_panel.models.mutation import MutationRequest, MutationResult
from crm_panel.models.representative import RepresentativeStatistics


class CrmService(ABC):
    """
    Abstract base class for CRM data access.

    Errors are reported with the exceptions in ``crm_panel.exceptions``:
    NetworkError when the backend is unreachable, ServerError when it
    answers with a failure.
    """

    @abstractmethod
    async def list_page(self, query: ListQuery) -> Page:
        """
        Return one page of records matching the query.

        The backend is authoritative for bounding ``query.page``.

        Args:
            query: Resource, filters, sort and page to fetch.
        """

    @abstractmethod
    async def representative_statistics(self) -> RepresentativeStatistics:
        """Return aggregate representative figures for the dashboard strip."""

    @abstractmethod
    async def mutate(self, request: MutationRequest) -> MutationResult:
        """
        Perform a create/update/delete.

        Returns:
            The backend result; only returned when it reports success.

        Raises:
            NetworkError, ServerError: On failure, including ``success=false``.
        """

    async def close(self) -> None:
        """Release any held connections. Default implementation does nothing."""
