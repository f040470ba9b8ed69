"""
Search fixtures: page builders and scripted search functions.
"""

from typing import Any, Dict, List, Optional

import pytest

from zendeskapi.core.types import SearchCriteria


def make_page(
    ids: List[int],
    next_page: Optional[str] = None,
    count: Optional[int] = None,
) -> Dict[str, Any]:
    """Build a ``/search.json`` response with one result per id."""
    page: Dict[str, Any] = {
        "results": [{"id": i, "result_type": "ticket"} for i in ids],
        "count": count if count is not None else len(ids),
        "next_page": next_page,
    }
    return page


class ScriptedSearch:
    """
    Async search function double.

    Each call pops the next scripted item; exceptions are raised. Received
    criteria are recorded in ``calls``.
    """

    def __init__(self, *items: Any):
        self.items = list(items)
        self.calls: List[SearchCriteria] = []

    async def __call__(self, criteria: SearchCriteria) -> Dict[str, Any]:
        self.calls.append(criteria)
        if not self.items:
            return make_page([])
        item = self.items.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class QueryRoutedSearch:
    """
    Async search function double answering by query substring.

    ``routes`` maps a substring of the query to a list of responses served
    in order; unmatched queries get an empty page.
    """

    def __init__(self, routes: Dict[str, List[Any]]):
        self.routes = {k: list(v) for k, v in routes.items()}
        self.calls: List[SearchCriteria] = []

    async def __call__(self, criteria: SearchCriteria) -> Dict[str, Any]:
        self.calls.append(criteria)
        for fragment, responses in self.routes.items():
            if fragment in criteria.query and responses:
                item = responses.pop(0)
                if isinstance(item, BaseException):
                    raise item
                return item
        return make_page([])


@pytest.fixture
def search_criteria():
    return SearchCriteria(query="status:open")
