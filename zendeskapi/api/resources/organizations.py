"""
Organizations resource.
"""

from typing import Any, Dict, Iterable, List, Optional

from ...core.errors import ValidationError
from ...core.types import JobHandle
from .base import cursor_params, join_ids, page_params
from .job_statuses import JobBackedResource


class Organizations(JobBackedResource):
    """Organization CRUD, bulk operations, lookup and memberships."""

    async def list(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = page_params(page, per_page, sort_by or "created_at", sort_order or "desc")
        return await self.http.get("/organizations.json", params)

    async def list_with_cursor(
        self,
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = cursor_params(page_size, cursor, sort_by or "created_at", sort_order or "desc")
        return await self.http.get("/organizations.json", params)

    async def show(self, organization_id: int) -> Dict[str, Any]:
        return await self.http.get(f"/organizations/{organization_id}.json")

    async def show_many(self, organization_ids: Iterable[int]) -> Dict[str, Any]:
        return await self.http.get(
            "/organizations/show_many.json", {"ids": join_ids(organization_ids)}
        )

    async def create(self, organization: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.post("/organizations.json", {"organization": organization})

    async def update(self, organization_id: int, organization: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.put(
            f"/organizations/{organization_id}.json", {"organization": organization}
        )

    async def delete(self, organization_id: int) -> None:
        await self.http.delete(f"/organizations/{organization_id}.json")

    async def create_many(self, organizations: List[Dict[str, Any]]) -> JobHandle:
        response = await self.http.post(
            "/organizations/create_many.json", {"organizations": organizations}
        )
        return self._to_handle(response)

    async def update_many(self, organizations: List[Dict[str, Any]]) -> JobHandle:
        response = await self.http.put(
            "/organizations/update_many.json", {"organizations": organizations}
        )
        return self._to_handle(response)

    async def destroy_many(self, organization_ids: Iterable[int]) -> JobHandle:
        response = await self.http.delete(
            "/organizations/destroy_many.json", {"ids": join_ids(organization_ids)}
        )
        return self._to_handle(response)

    async def search(
        self, name: Optional[str] = None, external_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Look up organizations by exact name or by external id.

        Raises:
            ValidationError: Unless exactly one of name and external_id is given
        """
        if not name and not external_id:
            raise ValidationError("Either name or external_id must be provided")
        if name and external_id:
            raise ValidationError("Cannot search by both name and external_id")

        params = {"name": name} if name else {"external_id": external_id}
        return await self.http.get("/organizations/search.json", params)

    # ===== Memberships =====

    async def list_memberships(
        self, organization_id: int, page: Optional[int] = None, per_page: Optional[int] = None
    ) -> Dict[str, Any]:
        params = page_params(page, per_page, sort_by=None, sort_order=None)
        return await self.http.get(
            f"/organizations/{organization_id}/organization_memberships.json", params
        )

    async def show_membership(self, organization_id: int, membership_id: int) -> Dict[str, Any]:
        return await self.http.get(
            f"/organizations/{organization_id}/organization_memberships/{membership_id}.json"
        )

    async def create_membership(
        self, organization_id: int, user_id: int, default: bool = False
    ) -> Dict[str, Any]:
        return await self.http.post(
            f"/organizations/{organization_id}/organization_memberships.json",
            {"organization_membership": {"user_id": user_id, "default": default}},
        )

    async def delete_membership(self, organization_id: int, membership_id: int) -> None:
        await self.http.delete(
            f"/organizations/{organization_id}/organization_memberships/{membership_id}.json"
        )

    async def set_default_membership(self, organization_id: int, membership_id: int) -> Dict[str, Any]:
        return await self.http.put(
            f"/organizations/{organization_id}/organization_memberships/{membership_id}/make_default.json"
        )
