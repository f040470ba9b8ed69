"""
Core data types for Zendesk API access.

This module defines the value objects that flow through the search,
transport and job handling layers.
"""

import datetime
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from ..utils.date.date_utils import DateLike, parse_date
from .errors import ValidationError


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Union[str, "SortOrder"]) -> "SortOrder":
        if isinstance(value, SortOrder):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unsupported sort order: {value}", {"allowed": "asc,desc"}
            ) from None


class DateField(str, Enum):
    """Search keywords usable for date range partitioning."""

    CREATED = "created"
    UPDATED = "updated"

    @classmethod
    def parse(cls, value: Union[str, "DateField"]) -> "DateField":
        """Accept ``created``/``updated`` as well as ``created_at``/``updated_at``."""
        if isinstance(value, DateField):
            return value
        normalized = str(value).strip().lower()
        if normalized.endswith("_at"):
            normalized = normalized[:-3]
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(
                f"Unsupported date field: {value}", {"allowed": "created,updated"}
            ) from None


class JobState(str, Enum):
    QUEUED = "queued"
    WORKING = "working"
    COMPLETED = "completed"
    FAILED = "failed"
    KILLED = "killed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.COMPLETED, JobState.FAILED, JobState.KILLED)


@dataclass(frozen=True)
class SearchCriteria:
    """
    Parameters for one search call.

    Instances are never mutated; ``with_query`` and ``with_page`` derive
    new criteria.

    Attributes:
        query: Opaque filter expression
        sort_by: Field to sort by
        sort_order: ``asc`` or ``desc``
        page: 1-based page number
        per_page: Page size, clamped to the service ceiling when sent
        include: Related resources to sideload, in order
    """

    query: str
    sort_by: Optional[str] = None
    sort_order: Optional[Union[SortOrder, str]] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    include: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.sort_order is not None:
            object.__setattr__(self, "sort_order", SortOrder.parse(self.sort_order))
        if not isinstance(self.include, tuple):
            object.__setattr__(self, "include", tuple(self.include))

    def with_query(self, query: str) -> "SearchCriteria":
        return replace(self, query=query)

    def with_page(self, page: int) -> "SearchCriteria":
        return replace(self, page=page)


@dataclass(frozen=True)
class BulkSearchCriteria:
    """
    Parameters for a date partitioned search.

    The interval is half open: ``[start_date, end_date)``. Bounds have day
    granularity: datetimes are truncated to their calendar date, so the
    interval must span at least one whole day.

    ``date_field`` and ``chunk_days`` left as None are filled from the
    search settings when the search runs (see ``with_defaults``).

    Attributes:
        query: Opaque filter expression
        start_date: Inclusive lower bound
        end_date: Exclusive upper bound
        date_field: ``created`` or ``updated``
        chunk_days: Partition width in days
        max_results: Global cap across all partitions
        sort_by: Field to sort by
        sort_order: ``asc`` or ``desc``
        per_page: Page size for every partition
        include: Related resources to sideload
    """

    query: str
    start_date: DateLike
    end_date: DateLike
    date_field: Optional[Union[DateField, str]] = None
    chunk_days: Optional[int] = None
    max_results: Optional[int] = None
    sort_by: Optional[str] = None
    sort_order: Optional[Union[SortOrder, str]] = None
    per_page: Optional[int] = None
    include: Tuple[str, ...] = ()

    def __post_init__(self):
        start = parse_date(self.start_date)
        end = parse_date(self.end_date)
        if start >= end:
            raise ValidationError(
                "start_date must fall on an earlier day than end_date",
                {"start_date": start.isoformat(), "end_date": end.isoformat()},
            )
        if self.chunk_days is not None and self.chunk_days <= 0:
            raise ValidationError("chunk_days must be positive", {"chunk_days": self.chunk_days})
        if self.max_results is not None and self.max_results < 0:
            raise ValidationError("max_results cannot be negative", {"max_results": self.max_results})

        object.__setattr__(self, "start_date", start)
        object.__setattr__(self, "end_date", end)
        if self.date_field is not None:
            object.__setattr__(self, "date_field", DateField.parse(self.date_field))
        if self.sort_order is not None:
            object.__setattr__(self, "sort_order", SortOrder.parse(self.sort_order))
        if not isinstance(self.include, tuple):
            object.__setattr__(self, "include", tuple(self.include))

    def with_defaults(
        self, chunk_days: int = 30, date_field: Union[DateField, str] = DateField.CREATED
    ) -> "BulkSearchCriteria":
        """Fill ``chunk_days`` and ``date_field`` where they were left unset."""
        return replace(
            self,
            chunk_days=chunk_days if self.chunk_days is None else self.chunk_days,
            date_field=date_field if self.date_field is None else self.date_field,
        )

    def to_search_criteria(self, query: str) -> SearchCriteria:
        """Build the per-partition criteria for ``query`` starting at page 1."""
        return SearchCriteria(
            query=query,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            page=1,
            per_page=self.per_page,
            include=self.include,
        )


@dataclass(frozen=True)
class ExportSearchOptions:
    """
    Options for the cursor based export endpoint.

    Attributes:
        filter_type: Resource type to export (ticket, user, organization, group)
        page_size: Results per batch, clamped to 1000 when sent
        cursor: Opaque cursor returned by the previous batch
    """

    filter_type: Optional[str] = None
    page_size: Optional[int] = None
    cursor: Optional[str] = None

    def with_cursor(self, cursor: Optional[str]) -> "ExportSearchOptions":
        return replace(self, cursor=cursor)


@dataclass(frozen=True)
class SearchProgress:
    """Snapshot emitted after every page or partition. Purely observational."""

    total_pages: int
    current_page: int
    processed_count: int
    estimated_total: int
    start_time: datetime.datetime
    elapsed_ms: int


@dataclass(frozen=True)
class RateLimitState:
    """
    Last known quota state reported by the API.

    Attributes:
        limit: Requests allowed per window
        remaining: Requests left in the current window
        reset_at: Epoch seconds at which the window resets
    """

    limit: Optional[int] = None
    remaining: Optional[int] = None
    reset_at: Optional[float] = None


@dataclass(frozen=True)
class JobResult:
    """Common fields of one per-item entry in a job status result list."""

    index: Optional[int] = None
    id: Optional[int] = None
    errors: Optional[str] = None
    details: Optional[str] = None
    action: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class FlaggedJobResult(JobResult):
    """Result entry carrying an explicit ``success`` flag."""

    success: bool = False


@dataclass(frozen=True)
class InferredJobResult(JobResult):
    """Result entry without a flag; outcome is inferred from the fields present."""


def parse_job_result(raw: Mapping[str, Any]) -> JobResult:
    """Build the matching result variant for one raw result entry."""
    common = {
        "index": raw.get("index"),
        "id": raw.get("id"),
        "errors": raw.get("errors", raw.get("error")),
        "details": raw.get("details"),
        "action": raw.get("action"),
        "status": raw.get("status"),
    }
    if raw.get("success") is not None:
        return FlaggedJobResult(success=bool(raw["success"]), **common)
    return InferredJobResult(**common)


@dataclass(frozen=True)
class JobHandle:
    """
    State of an asynchronous bulk operation.

    Attributes:
        id: Job identifier
        status: Current job state
        total: Number of items in the job
        progress: Number of items processed
        results: Per-item results, once available
        url: Status URL
        message: Free-form status message
    """

    id: str
    status: JobState
    total: Optional[int] = None
    progress: Optional[int] = None
    results: Tuple[JobResult, ...] = field(default_factory=tuple)
    url: Optional[str] = None
    message: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "JobHandle":
        """
        Build a handle from a job status response.

        Accepts either the full ``{"job_status": {...}}`` envelope or the
        inner object.
        """
        data = payload.get("job_status", payload) if payload else {}
        if not data or "id" not in data:
            raise ValidationError("Response does not contain a job status")

        try:
            status = JobState(str(data.get("status", "queued")).lower())
        except ValueError:
            raise ValidationError(
                f"Unknown job status: {data.get('status')}", {"job_id": data["id"]}
            ) from None

        raw_results: Sequence[Any] = data.get("results") or ()
        results = tuple(parse_job_result(r) for r in raw_results if isinstance(r, Mapping))

        return cls(
            id=str(data["id"]),
            status=status,
            total=data.get("total"),
            progress=data.get("progress"),
            results=results,
            url=data.get("url"),
            message=data.get("message"),
        )

