"""
Query composition for the search endpoints.

Builds flat request parameters from structured search options and derives
type-filtered and date-bounded query strings. Query text is never parsed;
it is treated as an opaque expression.
"""

import datetime
from typing import Any, Dict, Optional

from ...core.types import ExportSearchOptions, SearchCriteria
from ..date.date_utils import format_date_for_query


MAX_PAGE_SIZE = 100
MAX_EXPORT_PAGE_SIZE = 1000

TYPE_TOKEN = "type:"


def build_params(criteria: SearchCriteria, max_page_size: int = MAX_PAGE_SIZE) -> Dict[str, Any]:
    """
    Build the parameter map for one ``/search.json`` call.

    Only fields the caller set are included. ``per_page`` is clamped to
    ``max_page_size`` without complaint.

    Args:
        criteria: Search criteria
        max_page_size: Service page size ceiling

    Returns:
        Flat parameter dictionary
    """
    params: Dict[str, Any] = {"query": criteria.query}

    if criteria.sort_by:
        params["sort_by"] = criteria.sort_by
    if criteria.sort_order:
        params["sort_order"] = criteria.sort_order.value
    if criteria.page:
        params["page"] = criteria.page
    if criteria.per_page:
        params["per_page"] = min(criteria.per_page, max_page_size)
    if criteria.include:
        params["include"] = ",".join(criteria.include)

    return params


def build_export_params(
    query: str,
    options: Optional[ExportSearchOptions] = None,
    max_page_size: int = MAX_EXPORT_PAGE_SIZE,
) -> Dict[str, Any]:
    """
    Build the parameter map for one ``/search/export.json`` call.

    Args:
        query: Search expression
        options: Export options (type filter, page size, cursor)
        max_page_size: Export page size ceiling

    Returns:
        Flat parameter dictionary using the bracketed export keys
    """
    params: Dict[str, Any] = {"query": query}
    if options is None:
        return params

    if options.filter_type:
        params["filter[type]"] = options.filter_type
    if options.page_size:
        params["page[size]"] = min(options.page_size, max_page_size)
    if options.cursor:
        params["page[after]"] = options.cursor

    return params


def inject_type_filter(query: str, resource_type: str) -> str:
    """
    Append ``type:<resource_type>`` unless the query already has a type token.

    The check is a plain substring test, so any occurrence of ``type:``
    (including inside unrelated tokens such as ``ticket_type:``) counts.
    """
    if TYPE_TOKEN in query:
        return query
    return f"{query} {TYPE_TOKEN}{resource_type}"


def date_range_query(
    query: str, field: str, lower: datetime.date, upper: datetime.date
) -> str:
    """Bound ``query`` to ``[lower, upper)`` on ``field``."""
    bounds = f"{field}>={format_date_for_query(lower)} {field}<{format_date_for_query(upper)}"
    query = query.strip()
    return f"{query} {bounds}" if query else bounds
