"""
Users resource.
"""

from typing import Any, Dict, Iterable, List, Optional

from ...core.types import JobHandle
from .base import cursor_params, join_ids, page_params
from .job_statuses import JobBackedResource


class Users(JobBackedResource):
    """User CRUD, bulk operations, search and identities."""

    async def list(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = page_params(page, per_page, sort_by or "created_at", sort_order or "desc")
        return await self.http.get("/users.json", params)

    async def list_with_cursor(
        self,
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = cursor_params(page_size, cursor, sort_by or "created_at", sort_order or "desc")
        return await self.http.get("/users.json", params)

    async def show(self, user_id: int) -> Dict[str, Any]:
        return await self.http.get(f"/users/{user_id}.json")

    async def show_many(self, user_ids: Iterable[int]) -> Dict[str, Any]:
        return await self.http.get("/users/show_many.json", {"ids": join_ids(user_ids)})

    async def create(self, user: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.post("/users.json", {"user": user})

    async def update(self, user_id: int, user: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.put(f"/users/{user_id}.json", {"user": user})

    async def delete(self, user_id: int) -> Dict[str, Any]:
        return await self.http.delete(f"/users/{user_id}.json")

    async def create_many(self, users: List[Dict[str, Any]]) -> JobHandle:
        response = await self.http.post("/users/create_many.json", {"users": users})
        return self._to_handle(response)

    async def update_many(self, users: List[Dict[str, Any]]) -> JobHandle:
        response = await self.http.put("/users/update_many.json", {"users": users})
        return self._to_handle(response)

    async def destroy_many(self, user_ids: Iterable[int]) -> JobHandle:
        response = await self.http.delete("/users/destroy_many.json", {"ids": join_ids(user_ids)})
        return self._to_handle(response)

    async def search(
        self,
        query: str,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = {"query": query}
        params.update(page_params(page, per_page, sort_by or "created_at", sort_order or "desc"))
        return await self.http.get("/users/search.json", params)

    async def me(self) -> Dict[str, Any]:
        return await self.http.get("/users/me.json")

    # ===== Identities =====

    async def list_identities(self, user_id: int) -> Dict[str, Any]:
        return await self.http.get(f"/users/{user_id}/identities.json")

    async def show_identity(self, user_id: int, identity_id: int) -> Dict[str, Any]:
        return await self.http.get(f"/users/{user_id}/identities/{identity_id}.json")

    async def create_identity(self, user_id: int, identity: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.post(f"/users/{user_id}/identities.json", {"identity": identity})

    async def update_identity(
        self, user_id: int, identity_id: int, identity: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self.http.put(
            f"/users/{user_id}/identities/{identity_id}.json", {"identity": identity}
        )

    async def delete_identity(self, user_id: int, identity_id: int) -> None:
        await self.http.delete(f"/users/{user_id}/identities/{identity_id}.json")

    async def make_primary_identity(self, user_id: int, identity_id: int) -> Dict[str, Any]:
        return await self.http.put(f"/users/{user_id}/identities/{identity_id}/make_primary.json")

    async def request_verification(self, user_id: int, identity_id: int) -> None:
        await self.http.put(f"/users/{user_id}/identities/{identity_id}/request_verification.json")

    async def verify_identity(self, user_id: int, identity_id: int) -> Dict[str, Any]:
        return await self.http.put(f"/users/{user_id}/identities/{identity_id}/verify.json")
