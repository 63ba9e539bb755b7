"""DeadlineListController -- state owner for the deadline list view

Holds the loaded collection plus FilterState, SortState, page and Selection,
each replaced wholesale on change. Fetches are tagged with a generation
number; a response older than the latest request is dropped on arrival.
A failed fetch keeps the previous collection visible and records the error.
"""

from collections.abc import Iterable
from datetime import datetime

import structlog
from prazos.core.config import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS
from prazos.core.models.deadline import Deadline
from prazos.core.models.enums import QuickFilter, SortField
from prazos.core.models.filters import FilterState
from prazos.core.pipeline import ProjectedPage, Selection, SortState, project, sort_deadlines, total_pages
from prazos.core.quick_filters import apply_quick_filter, clear_filters, update_filter
from prazos.core.stats import DeadlineStats, summarize

from .bulk import BulkMutationCoordinator, BulkOperation, BulkResult
from .exceptions import ApiError

log = structlog.get_logger()


class DeadlineListController:
    """Deadline list state and the actions that change it"""

    def __init__(
        self,
        api,
        coordinator: BulkMutationCoordinator | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """
        Args:
            api: DeadlineApiClient
            coordinator: bulk coordinator (defaults to one over ``api``)
            page_size: initial items per page
        """
        self._api = api
        self._bulk = coordinator or BulkMutationCoordinator(api)
        self._generation = 0

        self.deadlines: list[Deadline] = []
        self.filters = FilterState()
        self.sort = SortState()
        self.page = 1
        self.page_size = page_size
        self.selection = Selection()
        self.error: ApiError | None = None
        self.loading = False

    # -- fetching ------------------------------------------------------------

    async def refresh(self) -> bool:
        """Reload the collection with the current filters

        Returns:
            True when this response was applied, False when it failed or was
            superseded by a newer request
        """
        self._generation += 1
        generation = self._generation
        self.loading = True

        try:
            deadlines = await self._api.list_deadlines(self.filters)
        except ApiError as e:
            if generation != self._generation:
                log.info("deadline_fetch_discarded", generation=generation, latest=self._generation)
                return False
            self.error = e
            self.loading = False
            log.warning(
                "deadline_fetch_failed",
                kind=e.kind,
                error=str(e),
                kept=len(self.deadlines),
            )
            return False

        if generation != self._generation:
            log.info("deadline_fetch_discarded", generation=generation, latest=self._generation)
            return False

        self.deadlines = deadlines
        self.error = None
        self.loading = False
        self.selection = self.selection.restrict(d.id for d in deadlines)
        self.page = min(self.page, total_pages(len(deadlines), self.page_size))
        log.debug("deadline_fetch_applied", generation=generation, count=len(deadlines))
        return True

    # -- filters -------------------------------------------------------------

    async def set_filters(self, filters: FilterState) -> bool:
        """Replace the filters, go back to page 1 and reload"""
        self.filters = filters
        self.page = 1
        return await self.refresh()

    async def set_filter(self, field: str, value: str) -> bool:
        return await self.set_filters(update_filter(self.filters, field, value))

    async def apply_quick_filter(self, name: str | QuickFilter, now: datetime) -> bool:
        return await self.set_filters(apply_quick_filter(self.filters, name, now))

    async def clear_filters(self) -> bool:
        return await self.set_filters(clear_filters())

    # -- sorting and paging --------------------------------------------------

    def toggle_sort(self, field: SortField) -> SortState:
        self.sort = self.sort.toggle(field)
        return self.sort

    def set_page_size(self, page_size: int) -> None:
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {PAGE_SIZE_OPTIONS}, got {page_size}")
        self.page_size = page_size
        self.page = 1

    def go_to_page(self, page: int) -> int:
        """Move to a page, clamped to the valid range"""
        last = total_pages(len(self.deadlines), self.page_size)
        self.page = max(1, min(page, last))
        return self.page

    def current_page(self) -> ProjectedPage:
        return project(
            self.deadlines,
            self.sort.field,
            self.sort.direction,
            self.page,
            self.page_size,
        )

    # -- selection -----------------------------------------------------------

    def toggle_selected(self, deadline_id: str) -> Selection:
        self.selection = self.selection.toggle(deadline_id)
        return self.selection

    def toggle_page_selection(self) -> Selection:
        """Select or deselect every deadline on the current page only"""
        self.selection = self.selection.toggle_page(self.current_page().ids)
        return self.selection

    def clear_selection(self) -> Selection:
        self.selection = self.selection.clear()
        return self.selection

    def selected_deadlines(self) -> list[Deadline]:
        return [d for d in self.deadlines if d.id in self.selection]

    # -- bulk ----------------------------------------------------------------

    async def run_bulk(self, operation: BulkOperation) -> BulkResult:
        """Apply operation to the selection, then reload the whole collection

        The selection is cleared on full success; after a partial failure it
        keeps only the failed IDs.

        Raises:
            ValueError: nothing selected
        """
        if not len(self.selection):
            raise ValueError("No deadlines selected")
        order = self._ordered_ids(self.deadlines)
        result, self.selection = await self._bulk.submit_selection(self.selection, operation, order)
        await self.refresh()
        return result

    def _ordered_ids(self, deadlines: Iterable[Deadline]) -> list[str]:
        return [d.id for d in sort_deadlines(deadlines, self.sort.field, self.sort.direction)]

    # -- derived -------------------------------------------------------------

    def stats(self, now: datetime) -> DeadlineStats:
        return summarize(self.deadlines, now)
