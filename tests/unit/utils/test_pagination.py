"""
Tests for the paged search iterator and the cursor export iterator.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from tests.fixtures.search_fixtures import ScriptedSearch, make_page
from zendeskapi.core.errors import NetworkError, SearchError
from zendeskapi.core.types import ExportSearchOptions, RateLimitState, SearchCriteria
from zendeskapi.utils.network.pagination import (
    CursorExportIterator,
    IteratorState,
    PagedSearchIterator,
    extract_after_cursor,
    has_more_export,
)


async def _drain(iterator):
    return [batch async for batch in iterator]


class TestPagedSearchIterator:
    @pytest.mark.asyncio
    async def test_follows_next_page(self, search_criteria):
        search = ScriptedSearch(
            make_page([1, 2], next_page="p2"),
            make_page([3, 4], next_page="p3"),
            make_page([5]),
        )
        batches = await _drain(PagedSearchIterator(search, search_criteria))

        assert batches == [
            [{"id": 1, "result_type": "ticket"}, {"id": 2, "result_type": "ticket"}],
            [{"id": 3, "result_type": "ticket"}, {"id": 4, "result_type": "ticket"}],
            [{"id": 5, "result_type": "ticket"}],
        ]
        assert [c.page for c in search.calls] == [1, 2, 3]
        assert all(c.query == "status:open" for c in search.calls)

    @pytest.mark.asyncio
    async def test_stops_without_next_page(self, search_criteria):
        search = ScriptedSearch(make_page([1]), make_page([2]))
        batches = await _drain(PagedSearchIterator(search, search_criteria))
        assert len(batches) == 1
        assert len(search.calls) == 1

    @pytest.mark.asyncio
    async def test_stops_on_empty_batch(self, search_criteria):
        search = ScriptedSearch(make_page([1], next_page="p2"), make_page([], next_page="p3"))
        iterator = PagedSearchIterator(search, search_criteria)
        batches = await _drain(iterator)
        assert len(batches) == 1
        assert len(search.calls) == 2
        assert iterator.state is IteratorState.DONE

    @pytest.mark.asyncio
    async def test_starts_from_given_page(self):
        search = ScriptedSearch(make_page([1]))
        await _drain(PagedSearchIterator(search, SearchCriteria(query="x", page=4)))
        assert search.calls[0].page == 4

    @pytest.mark.asyncio
    async def test_failure_wrapped_with_page(self, search_criteria):
        cause = NetworkError("reset")
        search = ScriptedSearch(make_page([1], next_page="p2"), cause)
        iterator = PagedSearchIterator(search, search_criteria)

        received = []
        with pytest.raises(SearchError) as exc_info:
            async for batch in iterator:
                received.append(batch)

        assert len(received) == 1
        error = exc_info.value
        assert error.page == 2
        assert error.query == "status:open"
        assert error.cause is cause
        assert error.__cause__ is cause
        assert iterator.state is IteratorState.ERRORED

    @pytest.mark.asyncio
    async def test_unexpected_exception_wrapped(self, search_criteria):
        cause = ValueError("unexpected payload")
        search = ScriptedSearch(cause, make_page([1]))
        iterator = PagedSearchIterator(search, search_criteria)

        with pytest.raises(SearchError) as exc_info:
            await iterator.__anext__()

        assert exc_info.value.page == 1
        assert exc_info.value.cause is cause
        assert iterator.state is IteratorState.ERRORED
        with pytest.raises(StopAsyncIteration):
            await iterator.__anext__()
        assert len(search.calls) == 1

    @pytest.mark.asyncio
    async def test_early_stop_issues_no_more_calls(self, search_criteria):
        search = ScriptedSearch(make_page([1], next_page="p2"), make_page([2], next_page="p3"))
        async for _ in PagedSearchIterator(search, search_criteria):
            break
        assert len(search.calls) == 1

    @pytest.mark.asyncio
    async def test_not_restartable(self, search_criteria):
        iterator = PagedSearchIterator(ScriptedSearch(make_page([1])), search_criteria)
        await _drain(iterator)
        with pytest.raises(RuntimeError):
            await _drain(iterator)

    @pytest.mark.asyncio
    async def test_progress_emitted_per_page(self, search_criteria):
        search = ScriptedSearch(make_page([1, 2], next_page="p2", count=3), make_page([3], count=3))
        observer = MagicMock()
        await _drain(PagedSearchIterator(search, search_criteria, progress_observer=observer))

        assert observer.call_count == 2
        first, second = (c.args[0] for c in observer.call_args_list)
        assert (first.current_page, first.total_pages, first.processed_count) == (1, 2, 2)
        assert (second.current_page, second.total_pages, second.processed_count) == (2, 2, 3)
        assert second.estimated_total == 3

    @pytest.mark.asyncio
    async def test_observer_failure_does_not_break_iteration(self, search_criteria):
        search = ScriptedSearch(make_page([1], next_page="p2"), make_page([2]))
        observer = MagicMock(side_effect=ValueError("observer bug"))
        batches = await _drain(PagedSearchIterator(search, search_criteria, progress_observer=observer))
        assert len(batches) == 2

    @pytest.mark.asyncio
    async def test_courtesy_pause_when_quota_low(self, search_criteria):
        search = ScriptedSearch(make_page([1]))
        state = RateLimitState(limit=700, remaining=10, reset_at=None)
        with patch("zendeskapi.utils.network.pagination.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await _drain(PagedSearchIterator(search, search_criteria, rate_limit_state=lambda: state))
        sleep.assert_awaited_once_with(1.0)

    @pytest.mark.asyncio
    async def test_no_pause_with_quota(self, search_criteria):
        search = ScriptedSearch(make_page([1]))
        state = RateLimitState(limit=700, remaining=500)
        with patch("zendeskapi.utils.network.pagination.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await _drain(PagedSearchIterator(search, search_criteria, rate_limit_state=lambda: state))
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_collect(self, search_criteria):
        search = ScriptedSearch(make_page([1, 2], next_page="p2"), make_page([3]))
        items = await PagedSearchIterator(search, search_criteria).collect()
        assert [i["id"] for i in items] == [1, 2, 3]


def _export_batch(ids, cursor=None, end_of_stream=False, has_more=None):
    response = {"results": [{"id": i} for i in ids], "end_of_stream": end_of_stream}
    meta = {}
    if cursor is not None:
        meta["after_cursor"] = cursor
    if has_more is not None:
        meta["has_more"] = has_more
    if meta:
        response["meta"] = meta
    return response


class TestCursorExport:
    def test_cursor_helpers(self):
        assert extract_after_cursor({"meta": {"after_cursor": "a"}}) == "a"
        assert extract_after_cursor({"after_cursor": "b"}) == "b"
        assert not has_more_export({"end_of_stream": True, "after_cursor": "x"})
        assert not has_more_export({"meta": {"has_more": False, "after_cursor": "x"}})
        assert not has_more_export({"results": []})
        assert has_more_export({"meta": {"has_more": True, "after_cursor": "x"}})

    @pytest.mark.asyncio
    async def test_follows_cursor_until_end_of_stream(self):
        export = AsyncMock(
            side_effect=[
                _export_batch([1, 2], cursor="c1", has_more=True),
                _export_batch([3], cursor="c2", end_of_stream=True),
            ]
        )
        options = ExportSearchOptions(filter_type="ticket", page_size=2)
        batches = await _drain(CursorExportIterator(export, "status:open", options))

        assert [[r["id"] for r in b] for b in batches] == [[1, 2], [3]]
        first_options = export.await_args_list[0].args[1]
        second_options = export.await_args_list[1].args[1]
        assert first_options.cursor is None
        assert second_options.cursor == "c1"
        assert second_options.filter_type == "ticket"

    @pytest.mark.asyncio
    async def test_failure_wrapped_with_batch_number(self):
        export = AsyncMock(side_effect=[_export_batch([1], cursor="c1", has_more=True), NetworkError("x")])
        with pytest.raises(SearchError) as exc_info:
            await _drain(CursorExportIterator(export, "q"))
        assert exc_info.value.page == 2

    @pytest.mark.asyncio
    async def test_unexpected_exception_wrapped(self):
        cause = KeyError("meta")
        export = AsyncMock(side_effect=[cause])
        iterator = CursorExportIterator(export, "q")
        with pytest.raises(SearchError) as exc_info:
            await _drain(iterator)
        assert exc_info.value.page == 1
        assert exc_info.value.cause is cause
        assert iterator.state is IteratorState.ERRORED
