"""
Date range partitioning for large searches.

The search endpoint caps how many results one query can reach, so a long
interval is split into ``chunk_days`` wide partitions, each bounded with
explicit ``field>=lower field<upper`` tokens and paginated on its own.
"""

import datetime
import time
from dataclasses import dataclass
from typing import Any, AsyncIterator, List, Optional

from ...core.config.rate_limiting import RateLimitConfig
from ...core.errors import SearchError
from ...core.logging import get_structured_logger
from ...core.types import BulkSearchCriteria, SearchProgress
from ..date.date_utils import iter_date_chunks, partition_count
from ..network.pagination import (
    PagedSearchIterator,
    ProgressObserver,
    RateLimitStateGetter,
    SearchFunc,
    elapsed_ms,
    notify_progress,
)
from .query import date_range_query


@dataclass(frozen=True)
class PartitionFailure:
    """A partition that could not be fetched completely."""

    start: datetime.date
    end: datetime.date
    error: SearchError


class DateRangePartitioner:
    """
    Async iterator over result batches spanning a whole date interval.

    Batches from every partition are yielded in date order. When
    ``max_results`` is set the batch that reaches it is truncated and
    iteration stops there.

    By default a failing partition is logged, recorded in ``failures`` and
    skipped. With ``strict=True`` the first failure is raised instead.

    Attributes:
        failures: Partitions skipped because of an error
        processed_count: Items yielded so far across partitions
    """

    def __init__(
        self,
        search_func: SearchFunc,
        criteria: BulkSearchCriteria,
        progress_observer: Optional[ProgressObserver] = None,
        strict: bool = False,
        rate_limit_state: Optional[RateLimitStateGetter] = None,
        rate_limit: Optional[RateLimitConfig] = None,
    ):
        self.search_func = search_func
        self.criteria = criteria = criteria.with_defaults()
        self.progress_observer = progress_observer
        self.strict = strict
        self.rate_limit_state = rate_limit_state
        self.rate_limit = rate_limit

        self.failures: List[PartitionFailure] = []
        self.processed_count = 0
        self.total_partitions = partition_count(
            criteria.start_date, criteria.end_date, criteria.chunk_days
        )

        self._iterator: Optional[AsyncIterator[List[Any]]] = None
        self._log = get_structured_logger(__name__, {"query": criteria.query})

    def __aiter__(self) -> AsyncIterator[List[Any]]:
        if self._iterator is not None:
            raise RuntimeError("DateRangePartitioner cannot be restarted; create a new one")
        self._iterator = self._run()
        return self._iterator

    @property
    def cap_reached(self) -> bool:
        cap = self.criteria.max_results
        return cap is not None and self.processed_count >= cap

    async def _run(self) -> AsyncIterator[List[Any]]:
        criteria = self.criteria
        field = criteria.date_field.value
        start_time = datetime.datetime.now()
        started = time.monotonic()

        for index, (lower, upper) in enumerate(
            iter_date_chunks(criteria.start_date, criteria.end_date, criteria.chunk_days),
            start=1,
        ):
            if self.cap_reached:
                break

            log = self._log.bind(partition=f"{lower}..{upper}")
            query = date_range_query(criteria.query, field, lower, upper)
            pages = PagedSearchIterator(
                self.search_func,
                criteria.to_search_criteria(query),
                rate_limit_state=self.rate_limit_state,
                rate_limit=self.rate_limit,
            )

            log.debug(f"Searching partition {index}/{self.total_partitions}")
            try:
                async for batch in pages:
                    remaining = self._remaining_budget()
                    if remaining is not None and len(batch) >= remaining:
                        batch = batch[:remaining]
                        self.processed_count += len(batch)
                        if batch:
                            yield batch
                        break

                    self.processed_count += len(batch)
                    yield batch
            except SearchError as e:
                if self.strict:
                    raise
                log.warning(f"Failed to search date range {lower} - {upper}: {e}")
                self.failures.append(PartitionFailure(lower, upper, e))

            notify_progress(
                self.progress_observer,
                SearchProgress(
                    total_pages=self.total_partitions,
                    current_page=index,
                    processed_count=self.processed_count,
                    estimated_total=self.processed_count,
                    start_time=start_time,
                    elapsed_ms=elapsed_ms(started),
                ),
            )

        if self.failures:
            self._log.warning(
                f"{len(self.failures)} of {self.total_partitions} partitions failed; "
                f"results are incomplete"
            )

    def _remaining_budget(self) -> Optional[int]:
        cap = self.criteria.max_results
        if cap is None:
            return None
        return max(0, cap - self.processed_count)

    async def collect(self) -> List[Any]:
        """Drain the partitioner into a single list."""
        items: List[Any] = []
        async for batch in self:
            items.extend(batch)
        return items
