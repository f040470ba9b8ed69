"""
Shared plumbing for resource wrappers.
"""

from typing import Any, Dict, Iterable, List, Optional

from ...core.config.search import JobConfig
from ..http_client import HttpClient


DEFAULT_PER_PAGE = 100
DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "desc"


def join_ids(ids: Iterable[Any]) -> str:
    return ",".join(str(i) for i in ids)


def page_params(
    page: Optional[int] = None,
    per_page: Optional[int] = None,
    sort_by: Optional[str] = DEFAULT_SORT_BY,
    sort_order: Optional[str] = DEFAULT_SORT_ORDER,
) -> Dict[str, Any]:
    """Offset paging parameters with the list defaults filled in."""
    return {
        "page": page or 1,
        "per_page": per_page or DEFAULT_PER_PAGE,
        "sort_by": sort_by,
        "sort_order": sort_order,
    }


def cursor_params(
    page_size: Optional[int] = None,
    cursor: Optional[str] = None,
    sort_by: Optional[str] = DEFAULT_SORT_BY,
    sort_order: Optional[str] = DEFAULT_SORT_ORDER,
) -> Dict[str, Any]:
    """Cursor paging parameters; ``page[after]`` is only sent with a cursor."""
    params: Dict[str, Any] = {
        "page[size]": page_size or DEFAULT_PER_PAGE,
        "sort_by": sort_by,
        "sort_order": sort_order,
    }
    if cursor:
        params["page[after]"] = cursor
    return params


class BaseResource:
    """
    Base class for resource wrappers.

    Attributes:
        http: Shared transport
        jobs: Polling defaults for bulk operations
    """

    def __init__(self, http: HttpClient, jobs: Optional[JobConfig] = None):
        self.http = http
        self.jobs = jobs or JobConfig()


class BusinessRuleResource(BaseResource):
    """
    Common endpoints of triggers, macros and automations.

    Subclasses set ``path`` (collection name) and ``key`` (singular body key).
    Extra keyword arguments on list style calls are sent as query parameters.
    """

    path = ""
    key = ""

    async def list(self, **params: Any) -> Dict[str, Any]:
        return await self.http.get(f"/{self.path}.json", params)

    async def list_active(self, **params: Any) -> Dict[str, Any]:
        return await self.http.get(f"/{self.path}/active.json", params)

    async def search(self, query: str, **params: Any) -> Dict[str, Any]:
        return await self.http.get(f"/{self.path}/search.json", dict(params, query=query))

    async def show(self, rule_id: int) -> Dict[str, Any]:
        return await self.http.get(f"/{self.path}/{rule_id}.json")

    async def create(self, rule: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.post(f"/{self.path}.json", {self.key: rule})

    async def update(self, rule_id: int, rule: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.put(f"/{self.path}/{rule_id}.json", {self.key: rule})

    async def delete(self, rule_id: int) -> None:
        await self.http.delete(f"/{self.path}/{rule_id}.json")

    async def update_many(self, rules: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Update position or active flag of many rules; each item needs an ``id``."""
        return await self.http.put(f"/{self.path}/update_many.json", {self.path: rules})

    async def destroy_many(self, rule_ids: Iterable[int]) -> None:
        await self.http.delete(f"/{self.path}/destroy_many.json", {"ids": join_ids(rule_ids)})
