"""
Search resource.

Single calls against ``/search.json`` and ``/search/export.json`` plus the
lazy drivers for walking every page, every export batch or a whole date
range.
"""

from typing import Any, Dict, Optional

from ...core.config.search import SearchConfig
from ...core.logging import get_logger
from ...core.types import BulkSearchCriteria, ExportSearchOptions, SearchCriteria
from ...utils.network.pagination import (
    CursorExportIterator,
    PagedSearchIterator,
    ProgressObserver,
    SearchFunc,
)
from ...utils.search.partitioner import DateRangePartitioner
from ...utils.search.query import build_export_params, build_params, inject_type_filter
from ..http_client import HttpClient
from .base import BaseResource


logger = get_logger(__name__)


class Search(BaseResource):
    """
    Search endpoints.

    Attributes:
        settings: Page size ceilings and partitioning defaults
    """

    def __init__(self, http: HttpClient, jobs=None, settings: Optional[SearchConfig] = None):
        super().__init__(http, jobs)
        self.settings = settings or SearchConfig()

    async def search(self, criteria: SearchCriteria) -> Dict[str, Any]:
        """Run one search call across all resource types."""
        params = build_params(criteria, self.settings.max_page_size)
        return await self.http.get("/search.json", params)

    async def _search_typed(self, criteria: SearchCriteria, resource_type: str) -> Dict[str, Any]:
        return await self.search(criteria.with_query(inject_type_filter(criteria.query, resource_type)))

    async def search_tickets(self, criteria: SearchCriteria) -> Dict[str, Any]:
        return await self._search_typed(criteria, "ticket")

    async def search_users(self, criteria: SearchCriteria) -> Dict[str, Any]:
        return await self._search_typed(criteria, "user")

    async def search_organizations(self, criteria: SearchCriteria) -> Dict[str, Any]:
        return await self._search_typed(criteria, "organization")

    async def export_search(
        self, query: str, options: Optional[ExportSearchOptions] = None
    ) -> Dict[str, Any]:
        """Fetch one batch from the cursor based export endpoint."""
        params = build_export_params(query, options, self.settings.max_export_page_size)
        return await self.http.get("/search/export.json", params)

    def export_search_all(
        self,
        query: str,
        options: Optional[ExportSearchOptions] = None,
        progress_observer: Optional[ProgressObserver] = None,
    ) -> CursorExportIterator:
        """Stream every export batch by following the cursor."""
        return CursorExportIterator(self.export_search, query, options, progress_observer)

    # ===== Lazy drivers =====

    def search_all(
        self,
        search_func: SearchFunc,
        criteria: SearchCriteria,
        progress_observer: Optional[ProgressObserver] = None,
    ) -> PagedSearchIterator:
        """
        Walk every page of ``search_func`` starting from ``criteria``.

        Args:
            search_func: One of the single-call search methods
            criteria: Initial criteria; ``page`` defaults to 1
            progress_observer: Called with a SearchProgress after every page

        Returns:
            PagedSearchIterator yielding one list of results per page
        """
        return PagedSearchIterator(
            search_func,
            criteria,
            progress_observer=progress_observer,
            rate_limit_state=self.http.get_rate_limit_state,
            rate_limit=self.http.rate_limit,
        )

    def search_all_tickets(
        self, criteria: SearchCriteria, progress_observer: Optional[ProgressObserver] = None
    ) -> PagedSearchIterator:
        return self.search_all(self.search_tickets, criteria, progress_observer)

    def search_all_users(
        self, criteria: SearchCriteria, progress_observer: Optional[ProgressObserver] = None
    ) -> PagedSearchIterator:
        return self.search_all(self.search_users, criteria, progress_observer)

    def search_all_organizations(
        self, criteria: SearchCriteria, progress_observer: Optional[ProgressObserver] = None
    ) -> PagedSearchIterator:
        return self.search_all(self.search_organizations, criteria, progress_observer)

    def search_by_date_range(
        self,
        search_func: SearchFunc,
        criteria: BulkSearchCriteria,
        progress_observer: Optional[ProgressObserver] = None,
        strict: Optional[bool] = None,
    ) -> DateRangePartitioner:
        """
        Walk a date interval partition by partition.

        Args:
            search_func: One of the single-call search methods
            criteria: Query, interval, partition width and optional cap; an unset
                partition width or date field comes from the search settings
            progress_observer: Called with a SearchProgress after every partition
            strict: Raise on the first failed partition instead of skipping it
                (default: settings.strict_partitions)

        Returns:
            DateRangePartitioner yielding lists of results
        """
        if strict is None:
            strict = self.settings.strict_partitions
        criteria = criteria.with_defaults(
            self.settings.default_chunk_days, self.settings.default_date_field
        )
        return DateRangePartitioner(
            search_func,
            criteria,
            progress_observer=progress_observer,
            strict=strict,
            rate_limit_state=self.http.get_rate_limit_state,
            rate_limit=self.http.rate_limit,
        )

    def search_tickets_by_date_range(
        self,
        criteria: BulkSearchCriteria,
        progress_observer: Optional[ProgressObserver] = None,
        strict: Optional[bool] = None,
    ) -> DateRangePartitioner:
        return self.search_by_date_range(self.search_tickets, criteria, progress_observer, strict)
