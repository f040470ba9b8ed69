"""
Tests for date range partitioning.
"""

from unittest.mock import MagicMock

import pytest

from tests.fixtures.search_fixtures import QueryRoutedSearch, ScriptedSearch, make_page
from zendeskapi.core.errors import APIError, SearchError
from zendeskapi.core.types import BulkSearchCriteria
from zendeskapi.utils.search.partitioner import DateRangePartitioner, PartitionFailure


JAN = "created>=2024-01-01 created<2024-01-31"
FEB = "created>=2024-01-31 created<2024-03-01"


def _criteria(**overrides):
    values = dict(query="status:solved", start_date="2024-01-01", end_date="2024-03-01")
    values.update(overrides)
    return BulkSearchCriteria(**values)


async def _drain(iterator):
    return [batch async for batch in iterator]


@pytest.mark.asyncio
async def test_queries_every_partition_in_order():
    search = QueryRoutedSearch({JAN: [make_page([1, 2])], FEB: [make_page([3])]})
    batches = await _drain(DateRangePartitioner(search, _criteria()))

    assert [[r["id"] for r in b] for b in batches] == [[1, 2], [3]]
    assert [c.query for c in search.calls] == [
        f"status:solved {JAN}",
        f"status:solved {FEB}",
    ]
    assert all(c.page == 1 for c in search.calls)


@pytest.mark.asyncio
async def test_paginates_within_partition():
    search = QueryRoutedSearch(
        {JAN: [make_page([1], next_page="p2"), make_page([2])], FEB: [make_page([3])]}
    )
    batches = await _drain(DateRangePartitioner(search, _criteria()))
    assert len(batches) == 3
    assert [c.page for c in search.calls] == [1, 2, 1]


@pytest.mark.asyncio
async def test_updated_field():
    search = ScriptedSearch()
    await _drain(DateRangePartitioner(search, _criteria(date_field="updated_at", end_date="2024-01-05")))
    assert search.calls[0].query == "status:solved updated>=2024-01-01 updated<2024-01-05"


@pytest.mark.asyncio
async def test_max_results_truncates_and_stops():
    search = QueryRoutedSearch(
        {JAN: [make_page([1, 2, 3], next_page="p2"), make_page([4, 5, 6])], FEB: [make_page([7])]}
    )
    partitioner = DateRangePartitioner(search, _criteria(max_results=5))
    batches = await _drain(partitioner)

    assert [[r["id"] for r in b] for b in batches] == [[1, 2, 3], [4, 5]]
    assert sum(len(b) for b in batches) == 5
    assert len(search.calls) == 2
    assert partitioner.processed_count == 5


@pytest.mark.asyncio
async def test_exact_cap_stops_without_another_call():
    search = QueryRoutedSearch({JAN: [make_page([1, 2], next_page="p2"), make_page([3])]})
    batches = await _drain(DateRangePartitioner(search, _criteria(max_results=2)))
    assert [[r["id"] for r in b] for b in batches] == [[1, 2]]
    assert len(search.calls) == 1


@pytest.mark.asyncio
async def test_failed_partition_is_skipped_and_recorded():
    search = QueryRoutedSearch({JAN: [APIError("boom", 500)], FEB: [make_page([3])]})
    partitioner = DateRangePartitioner(search, _criteria())
    batches = await _drain(partitioner)

    assert [[r["id"] for r in b] for b in batches] == [[3]]
    assert len(partitioner.failures) == 1
    failure = partitioner.failures[0]
    assert isinstance(failure, PartitionFailure)
    assert str(failure.start) == "2024-01-01"
    assert str(failure.end) == "2024-01-31"
    assert isinstance(failure.error, SearchError)


@pytest.mark.asyncio
async def test_unexpected_partition_error_is_skipped():
    search = QueryRoutedSearch({JAN: [ValueError("bad response")], FEB: [make_page([4])]})
    partitioner = DateRangePartitioner(search, _criteria())
    batches = await _drain(partitioner)

    assert [[r["id"] for r in b] for b in batches] == [[4]]
    assert len(search.calls) == 2
    assert isinstance(partitioner.failures[0].error.cause, ValueError)


@pytest.mark.asyncio
async def test_strict_mode_raises():
    search = QueryRoutedSearch({JAN: [APIError("boom", 500)], FEB: [make_page([3])]})
    with pytest.raises(SearchError):
        await _drain(DateRangePartitioner(search, _criteria(), strict=True))
    assert len(search.calls) == 1


@pytest.mark.asyncio
async def test_progress_per_partition():
    search = QueryRoutedSearch({JAN: [make_page([1, 2])], FEB: [make_page([3])]})
    observer = MagicMock()
    await _drain(DateRangePartitioner(search, _criteria(), progress_observer=observer))

    snapshots = [c.args[0] for c in observer.call_args_list]
    assert [(p.current_page, p.total_pages, p.processed_count) for p in snapshots] == [
        (1, 2, 2),
        (2, 2, 3),
    ]


@pytest.mark.asyncio
async def test_not_restartable():
    partitioner = DateRangePartitioner(ScriptedSearch(), _criteria())
    await _drain(partitioner)
    with pytest.raises(RuntimeError):
        await _drain(partitioner)


@pytest.mark.asyncio
async def test_zero_cap_issues_no_calls():
    search = ScriptedSearch()
    assert await _drain(DateRangePartitioner(search, _criteria(max_results=0))) == []
    assert search.calls == []
