"""DeadlineListController tests -- fetch races, filters, selection, bulk refresh"""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import httpx
import pytest
from prazos.client.api import DeadlineApiClient
from prazos.client.bulk import DeleteDeadlines, SetStatus
from prazos.client.collection import DeadlineListController
from prazos.client.config import ClientConfig
from prazos.client.exceptions import ApiError
from prazos.core.models import DeadlineStatus, ErrorKind, FilterState, SortField


@pytest.fixture
def api():
    return AsyncMock()


@pytest.fixture
def controller(api):
    return DeadlineListController(api, page_size=5)


@pytest.fixture
def twelve(make_deadline, now):
    return [make_deadline(id=f"d{i:02d}", due_date=now + timedelta(days=i)) for i in range(12)]


class TestRefresh:
    """Loading and stale responses"""

    async def test_loads_collection(self, controller, api, twelve):
        api.list_deadlines.return_value = twelve

        assert await controller.refresh() is True

        assert len(controller.deadlines) == 12
        assert controller.loading is False
        api.list_deadlines.assert_awaited_once_with(FilterState())

    async def test_stale_response_discarded(self, controller, api, make_deadline):
        slow_release = asyncio.Event()
        old = [make_deadline(id="old")]
        new = [make_deadline(id="new")]

        async def list_deadlines(filters):
            if filters.search == "slow":
                await slow_release.wait()
                return old
            return new

        api.list_deadlines.side_effect = list_deadlines

        slow = asyncio.create_task(controller.set_filter("search", "slow"))
        await asyncio.sleep(0)
        await controller.set_filter("search", "fast")
        slow_release.set()
        applied = await slow

        assert applied is False
        assert [d.id for d in controller.deadlines] == ["new"]
        assert controller.filters.search == "fast"

    async def test_failure_keeps_previous_collection(self, controller, api, twelve):
        api.list_deadlines.return_value = twelve
        await controller.refresh()
        api.list_deadlines.side_effect = ApiError(ErrorKind.NETWORK, "down")

        assert await controller.refresh() is False

        assert len(controller.deadlines) == 12
        assert controller.error.kind == ErrorKind.NETWORK
        assert controller.loading is False

    async def test_non_json_body_keeps_previous_collection(self, backend, session, twelve):
        records = [d.model_dump(mode="json") for d in twelve]
        backend.routes["GET /api/v1/deadlines"] = httpx.Response(200, json=records)
        async with DeadlineApiClient(
            ClientConfig(api_base_url="http://backend.test"),
            session=session,
            transport=httpx.MockTransport(backend),
        ) as real_api:
            controller = DeadlineListController(real_api)
            assert await controller.refresh() is True

            backend.routes["GET /api/v1/deadlines"] = httpx.Response(200, text="<html>proxy</html>")
            assert await controller.refresh() is False

        assert len(controller.deadlines) == 12
        assert controller.error.kind == ErrorKind.VALIDATION
        assert controller.loading is False

    async def test_success_clears_error(self, controller, api, twelve):
        api.list_deadlines.side_effect = [ApiError(ErrorKind.NETWORK, "down"), twelve]
        await controller.refresh()
        await controller.refresh()
        assert controller.error is None

    async def test_selection_pruned_to_loaded_ids(self, controller, api, twelve):
        api.list_deadlines.return_value = twelve
        await controller.refresh()
        controller.toggle_selected("d00")
        controller.toggle_selected("d01")

        api.list_deadlines.return_value = twelve[1:]
        await controller.refresh()

        assert controller.selection.ids == frozenset({"d01"})

    async def test_page_clamped_when_collection_shrinks(self, controller, api, twelve):
        api.list_deadlines.return_value = twelve
        await controller.refresh()
        controller.go_to_page(3)

        api.list_deadlines.return_value = twelve[:4]
        await controller.refresh()

        assert controller.page == 1


class TestFilters:
    """Filter changes reset to page 1 and reload"""

    async def test_quick_filter_resets_page(self, controller, api, twelve, now):
        api.list_deadlines.return_value = twelve
        await controller.refresh()
        controller.go_to_page(2)

        await controller.apply_quick_filter("critical", now)

        assert controller.page == 1
        assert controller.filters.classification == "critico"
        assert api.list_deadlines.await_args.args[0].classification == "critico"

    async def test_set_filter_merges(self, controller, api):
        api.list_deadlines.return_value = []
        await controller.set_filter("type", "Recurso")
        await controller.set_filter("search", "agravo")
        assert controller.filters == FilterState(type="Recurso", search="agravo")

    async def test_clear_filters(self, controller, api):
        api.list_deadlines.return_value = []
        await controller.set_filter("status", "pendente")
        await controller.clear_filters()
        assert controller.filters.is_empty()

    async def test_unknown_quick_filter(self, controller, now):
        with pytest.raises(ValueError):
            await controller.apply_quick_filter("nextYear", now)


class TestPaging:
    """Sort, page size and navigation"""

    async def test_current_page(self, controller, api, twelve):
        api.list_deadlines.return_value = list(reversed(twelve))
        await controller.refresh()

        page = controller.current_page()

        assert page.ids == ["d00", "d01", "d02", "d03", "d04"]
        assert page.total_pages == 3

    async def test_toggle_sort_reverses(self, controller, api, twelve):
        api.list_deadlines.return_value = twelve
        await controller.refresh()

        controller.toggle_sort(SortField.DUE_DATE)

        assert controller.current_page().ids[0] == "d11"

    async def test_go_to_page_clamps(self, controller, api, twelve):
        api.list_deadlines.return_value = twelve
        await controller.refresh()
        assert controller.go_to_page(99) == 3
        assert controller.go_to_page(0) == 1

    def test_page_size_options(self, controller):
        controller.page = 3
        controller.set_page_size(25)
        assert controller.page == 1
        with pytest.raises(ValueError):
            controller.set_page_size(7)


class TestSelectionAndBulk:
    """Selection actions and bulk mutation"""

    async def test_toggle_page_selection(self, controller, api, twelve):
        api.list_deadlines.return_value = twelve
        await controller.refresh()
        controller.go_to_page(2)

        controller.toggle_page_selection()

        assert controller.selection.ids == frozenset(f"d{i:02d}" for i in range(5, 10))
        controller.toggle_page_selection()
        assert len(controller.selection) == 0

    async def test_run_bulk_refreshes(self, controller, api, twelve):
        api.list_deadlines.return_value = twelve
        await controller.refresh()
        controller.toggle_selected("d03")
        controller.toggle_selected("d01")

        result = await controller.run_bulk(SetStatus(status=DeadlineStatus.COMPLETED))

        assert result.ok is True
        assert [call.args[0] for call in api.update_deadline.await_args_list] == ["d01", "d03"]
        assert api.list_deadlines.await_count == 2
        assert len(controller.selection) == 0

    async def test_run_bulk_partial_keeps_failed(self, controller, api, twelve):
        api.list_deadlines.return_value = twelve
        await controller.refresh()
        controller.toggle_selected("d01")
        controller.toggle_selected("d02")

        async def delete(deadline_id):
            if deadline_id == "d02":
                raise ApiError(ErrorKind.CONFLICT, "locked", status_code=409)

        api.delete_deadline.side_effect = delete
        api.list_deadlines.return_value = [d for d in twelve if d.id != "d01"]

        result = await controller.run_bulk(DeleteDeadlines())

        assert result.partial is True
        assert controller.selection.ids == frozenset({"d02"})
        assert all(d.id != "d01" for d in controller.deadlines)

    async def test_run_bulk_needs_selection(self, controller):
        with pytest.raises(ValueError):
            await controller.run_bulk(DeleteDeadlines())

    async def test_selected_deadlines(self, controller, api, twelve):
        api.list_deadlines.return_value = twelve
        await controller.refresh()
        controller.toggle_selected("d05")
        assert [d.id for d in controller.selected_deadlines()] == ["d05"]


class TestStats:
    """Dashboard counters over the loaded collection"""

    async def test_stats(self, controller, api, twelve, now):
        api.list_deadlines.return_value = twelve
        await controller.refresh()
        stats = controller.stats(now)
        assert stats.total == 12
        assert stats.pending == 12
