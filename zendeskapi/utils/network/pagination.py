"""
Pagination drivers for search responses.

This module turns repeated search calls into lazy async sequences of result
batches. ``PagedSearchIterator`` follows numbered pages; ``CursorExportIterator``
follows the opaque cursor of the export endpoint. Neither is restartable:
build a new one from the initial criteria to search again.
"""

import asyncio
import datetime
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ...core.config.rate_limiting import RateLimitConfig
from ...core.errors import SearchError
from ...core.logging import get_logger, get_structured_logger
from ...core.types import ExportSearchOptions, RateLimitState, SearchCriteria, SearchProgress


logger = get_logger(__name__)

SearchFunc = Callable[[SearchCriteria], Awaitable[Dict[str, Any]]]
ExportFunc = Callable[[str, ExportSearchOptions], Awaitable[Dict[str, Any]]]
ProgressObserver = Callable[[SearchProgress], Any]
RateLimitStateGetter = Callable[[], Optional[RateLimitState]]


class IteratorState(Enum):
    PENDING = "pending"
    FETCHING = "fetching"
    DONE = "done"
    ERRORED = "errored"


def notify_progress(observer: Optional[ProgressObserver], progress: SearchProgress) -> None:
    """Deliver a progress snapshot; observer failures are logged, never raised."""
    if observer is None:
        return
    try:
        observer(progress)
    except Exception as e:
        logger.warning(f"Progress observer failed: {e}")


def elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


class PagedSearchIterator:
    """
    Async iterator over result batches of a page-numbered search.

    The iterator fetches one page per step, strictly in increasing order,
    and stops on an empty batch or when the response carries no
    ``next_page``. A failing call is re-raised as ``SearchError`` annotated
    with the page number; batches already yielded stay valid.

    Example:
        async for batch in PagedSearchIterator(search.search_tickets, criteria):
            handle(batch)
    """

    def __init__(
        self,
        search_func: SearchFunc,
        criteria: SearchCriteria,
        progress_observer: Optional[ProgressObserver] = None,
        rate_limit_state: Optional[RateLimitStateGetter] = None,
        rate_limit: Optional[RateLimitConfig] = None,
    ):
        self.search_func = search_func
        self.criteria = criteria
        self.progress_observer = progress_observer
        self.rate_limit_state = rate_limit_state
        self.rate_limit = rate_limit or RateLimitConfig()

        self.state = IteratorState.PENDING
        self.page = criteria.page or 1
        self.pages_fetched = 0
        self.processed_count = 0
        self.last_count: Optional[int] = None

        self._start_time: Optional[datetime.datetime] = None
        self._started: Optional[float] = None
        self._log = get_structured_logger(__name__, {"query": criteria.query})

    def __aiter__(self) -> "PagedSearchIterator":
        if self.state is not IteratorState.PENDING:
            raise RuntimeError("PagedSearchIterator cannot be restarted; create a new one")
        self.state = IteratorState.FETCHING
        self._start_time = datetime.datetime.now()
        self._started = time.monotonic()
        return self

    async def __anext__(self) -> List[Any]:
        if self.state is IteratorState.PENDING:
            self.__aiter__()
        if self.state is not IteratorState.FETCHING:
            raise StopAsyncIteration

        await self._courtesy_pause()

        page = self.page
        self._log.debug(f"Fetching page {page}")
        try:
            response = await self.search_func(self.criteria.with_page(page))
        except SearchError:
            self.state = IteratorState.ERRORED
            raise
        except Exception as e:
            self.state = IteratorState.ERRORED
            raise SearchError(
                f"Search failed on page {page}: {e}",
                self.criteria.query,
                page=page,
                cause=e,
            ) from e

        response = response or {}
        results = list(response.get("results") or [])
        if not results:
            self._log.debug(f"Empty batch on page {page}, done")
            self.state = IteratorState.DONE
            raise StopAsyncIteration

        self.pages_fetched += 1
        self.processed_count += len(results)
        if isinstance(response.get("count"), int):
            self.last_count = response["count"]

        has_more = bool(response.get("next_page"))
        if has_more:
            self.page = page + 1
        else:
            self.state = IteratorState.DONE

        self._emit_progress(page, has_more)
        return results

    async def _courtesy_pause(self) -> None:
        if self.rate_limit_state is None:
            return
        state = self.rate_limit_state()
        if (
            state is not None
            and state.remaining is not None
            and state.remaining <= self.rate_limit.courtesy_threshold
        ):
            self._log.info(
                f"Rate limit approaching ({state.remaining} remaining), "
                f"pausing {self.rate_limit.courtesy_pause}s"
            )
            await asyncio.sleep(self.rate_limit.courtesy_pause)

    def _emit_progress(self, page: int, has_more: bool) -> None:
        if self.progress_observer is None:
            return
        estimated_total = max(self.last_count or 0, self.processed_count)
        notify_progress(
            self.progress_observer,
            SearchProgress(
                total_pages=page + 1 if has_more else page,
                current_page=page,
                processed_count=self.processed_count,
                estimated_total=estimated_total,
                start_time=self._start_time,
                elapsed_ms=elapsed_ms(self._started),
            ),
        )

    async def collect(self) -> List[Any]:
        """Drain the iterator into a single list."""
        items: List[Any] = []
        async for batch in self:
            items.extend(batch)
        return items


def extract_after_cursor(response: Dict[str, Any]) -> Optional[str]:
    """Cursor for the next export batch, from ``meta`` or the top level."""
    meta = response.get("meta") or {}
    return meta.get("after_cursor") or response.get("after_cursor")


def has_more_export(response: Dict[str, Any]) -> bool:
    """Whether the export stream continues after this batch."""
    if response.get("end_of_stream") is True:
        return False
    meta = response.get("meta") or {}
    if meta.get("has_more") is False:
        return False
    return extract_after_cursor(response) is not None


class CursorExportIterator:
    """
    Async iterator over export batches following the opaque cursor.

    Stops when the stream reports ``end_of_stream``, ``meta.has_more`` is
    false, or no cursor is returned. Failures are wrapped in ``SearchError``
    carrying the batch number.
    """

    def __init__(
        self,
        export_func: ExportFunc,
        query: str,
        options: Optional[ExportSearchOptions] = None,
        progress_observer: Optional[ProgressObserver] = None,
    ):
        self.export_func = export_func
        self.query = query
        self.options = options or ExportSearchOptions()
        self.progress_observer = progress_observer

        self.state = IteratorState.PENDING
        self.batch_number = 0
        self.processed_count = 0
        self._start_time: Optional[datetime.datetime] = None
        self._started: Optional[float] = None

    def __aiter__(self) -> "CursorExportIterator":
        if self.state is not IteratorState.PENDING:
            raise RuntimeError("CursorExportIterator cannot be restarted; create a new one")
        self.state = IteratorState.FETCHING
        self._start_time = datetime.datetime.now()
        self._started = time.monotonic()
        return self

    async def __anext__(self) -> List[Any]:
        if self.state is IteratorState.PENDING:
            self.__aiter__()
        if self.state is not IteratorState.FETCHING:
            raise StopAsyncIteration

        batch_number = self.batch_number + 1
        try:
            response = await self.export_func(self.query, self.options)
        except SearchError:
            self.state = IteratorState.ERRORED
            raise
        except Exception as e:
            self.state = IteratorState.ERRORED
            raise SearchError(
                f"Export failed on batch {batch_number}: {e}",
                self.query,
                page=batch_number,
                cause=e,
            ) from e

        response = response or {}
        results = list(response.get("results") or [])
        self.batch_number = batch_number

        if has_more_export(response):
            self.options = self.options.with_cursor(extract_after_cursor(response))
        else:
            self.state = IteratorState.DONE

        if not results:
            self.state = IteratorState.DONE
            raise StopAsyncIteration

        self.processed_count += len(results)
        notify_progress(
            self.progress_observer,
            SearchProgress(
                total_pages=batch_number + (1 if self.state is IteratorState.FETCHING else 0),
                current_page=batch_number,
                processed_count=self.processed_count,
                estimated_total=max(response.get("count") or 0, self.processed_count),
                start_time=self._start_time,
                elapsed_ms=elapsed_ms(self._started),
            ),
        )
        return results
