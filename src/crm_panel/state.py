"""
Reflex state management for the CRM panel.

Each page state keeps only primitive, serializable vars. The list logic
lives in a ListController per browser session and resource, built over the
process-wide query cache, so every session shares cached pages.
"""

import reflex as rx

from crm_panel import config
from crm_panel.controllers import (
    ControllerRegistry,
    ListController,
    ListView,
    MutationCoordinator,
    load_statistics,
    shared_cache,
)
from crm_panel.exceptions import CrmError
from crm_panel.lib import logs
from crm_panel.models.common import ResourceKind
from crm_panel.models.mutation import MutationOperation, MutationRequest
from crm_panel.models.reflex_models import (
    InvoiceRowModel,
    RepresentativeCardModel,
    StatisticsModel,
    invoice_to_model,
    representative_to_model,
    statistics_to_model,
)
from crm_panel.services import get_crm_service
from crm_panel.utils import format_number

LOG = logs.logger(__file__)

LOCALE = "fa-IR" if config.USE_PERSIAN_DIGITS else "en-US"


def _service():
    """Get the configured CRM service (lazy loaded)."""
    return get_crm_service(config.SERVICE_KIND)


def _coordinator() -> MutationCoordinator:
    return MutationCoordinator(_service(), shared_cache())


def _new_controller(resource: ResourceKind) -> ListController:
    return ListController.for_service(
        resource, _service(), shared_cache(), coordinator=_coordinator()
    )


# Controllers per (client token, resource). Released on unmount, otherwise
# closed once idle or when the registry is full.
_REGISTRY = ControllerRegistry(_new_controller)


def _apply_view(state: rx.State, view: ListView) -> None:
    """Copy a ListView into the primitive vars shared by both pages."""
    state.search_term = view.query.search_term
    state.status_filter = view.query.status_filter.value
    state.sort_key = view.query.sort_key.value
    state.page = view.page
    state.total_pages = view.total_pages
    state.total_count = view.total_count
    state.is_loading = view.is_loading
    state.is_error = view.is_error
    state.error_message = view.error_message


class RepresentativesState(rx.State):
    """
    Representative list page state.

    Handles search, status filter, sort, pagination, statistics and the
    activate/deactivate and delete actions.
    """

    representatives: list[RepresentativeCardModel] = []
    search_term: str = ""
    status_filter: str = "all"
    sort_key: str = "name"
    page: int = 1
    total_pages: int = 1
    total_count: int = 0
    is_loading: bool = True
    is_error: bool = False
    error_message: str = ""
    mutation_error: str = ""
    stats: StatisticsModel = StatisticsModel()

    @rx.var
    def result_summary(self) -> str:
        """Summary line above the cards."""
        base = f"{format_number(self.total_count, LOCALE)} نماینده"
        if self.search_term:
            return f"{base} برای «{self.search_term}»"
        return base

    @rx.var
    def is_empty(self) -> bool:
        return not self.is_loading and not self.is_error and len(self.representatives) == 0

    @rx.var
    def page_label(self) -> str:
        page = format_number(self.page, LOCALE)
        total = format_number(self.total_pages, LOCALE)
        return f"صفحه {page} از {total}"

    def _ctrl(self) -> ListController:
        return _REGISTRY.get(self.router.session.client_token, ResourceKind.REPRESENTATIVES)

    def _show(self, view: ListView) -> None:
        _apply_view(self, view)
        self.representatives = [representative_to_model(r, LOCALE) for r in view.items]

    @rx.event
    async def on_load(self):
        """Fetch the first page and the statistics strip."""
        self.is_loading = True
        yield
        self._show(await self._ctrl().load())
        await self._load_statistics()

    @rx.event
    def on_unmount(self):
        _REGISTRY.release(self.router.session.client_token, ResourceKind.REPRESENTATIVES)

    @rx.event
    async def search(self, value: str):
        self.search_term = value
        self._show(await self._ctrl().set_filter("search_term", value))

    @rx.event
    async def filter_status(self, value: str):
        self._show(await self._ctrl().set_filter("status_filter", value))

    @rx.event
    async def sort_by(self, value: str):
        self._show(await self._ctrl().set_filter("sort_key", value))

    @rx.event
    async def next_page(self):
        self._show(await self._ctrl().next_page())

    @rx.event
    async def previous_page(self):
        self._show(await self._ctrl().previous_page())

    @rx.event
    async def retry(self):
        self.is_loading = True
        yield
        self._show(await self._ctrl().retry())

    @rx.event
    async def toggle_active(self, rep_id: int, is_active: bool):
        """Activate or deactivate a representative, then show the refetched page."""
        await self._mutate(
            MutationRequest(
                ResourceKind.REPRESENTATIVES,
                MutationOperation.UPDATE,
                {"isActive": not is_active},
                record_id=rep_id,
            )
        )

    @rx.event
    async def delete_representative(self, rep_id: int):
        await self._mutate(
            MutationRequest(
                ResourceKind.REPRESENTATIVES, MutationOperation.DELETE, record_id=rep_id
            )
        )

    async def _mutate(self, request: MutationRequest) -> None:
        self.mutation_error = ""
        try:
            await self._ctrl().mutate(request)
        except CrmError as e:
            LOG.error("Representative mutation failed: %s", e, exc_info=True)
            self.mutation_error = str(e)
            return
        self._show(await self._ctrl().settle())
        await self._load_statistics()

    async def _load_statistics(self) -> None:
        entry = await load_statistics(_service(), shared_cache())
        if entry.has_data:
            self.stats = statistics_to_model(entry.data, LOCALE)


class InvoicesState(rx.State):
    """Invoice list page state."""

    invoices: list[InvoiceRowModel] = []
    search_term: str = ""
    status_filter: str = "all"
    sort_key: str = "createdAt"
    page: int = 1
    total_pages: int = 1
    total_count: int = 0
    is_loading: bool = True
    is_error: bool = False
    error_message: str = ""

    @rx.var
    def is_empty(self) -> bool:
        return not self.is_loading and not self.is_error and len(self.invoices) == 0

    @rx.var
    def page_label(self) -> str:
        page = format_number(self.page, LOCALE)
        total = format_number(self.total_pages, LOCALE)
        return f"صفحه {page} از {total}"

    def _ctrl(self) -> ListController:
        return _REGISTRY.get(self.router.session.client_token, ResourceKind.INVOICES)

    def _show(self, view: ListView) -> None:
        _apply_view(self, view)
        self.invoices = [invoice_to_model(i, LOCALE) for i in view.items]

    @rx.event
    async def on_load(self):
        self.is_loading = True
        yield
        controller = self._ctrl()
        if controller.current_query().sort_key.value != self.sort_key:
            self._show(await controller.set_filter("sort_key", self.sort_key))
        else:
            self._show(await controller.load())

    @rx.event
    def on_unmount(self):
        _REGISTRY.release(self.router.session.client_token, ResourceKind.INVOICES)

    @rx.event
    async def search(self, value: str):
        self.search_term = value
        self._show(await self._ctrl().set_filter("search_term", value))

    @rx.event
    async def filter_status(self, value: str):
        self._show(await self._ctrl().set_filter("status_filter", value))

    @rx.event
    async def next_page(self):
        self._show(await self._ctrl().next_page())

    @rx.event
    async def previous_page(self):
        self._show(await self._ctrl().previous_page())

    @rx.event
    async def retry(self):
        self.is_loading = True
        yield
        self._show(await self._ctrl().retry())
