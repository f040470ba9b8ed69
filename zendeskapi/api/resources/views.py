"""
Views resource.
"""

from typing import Any, Dict

from .base import BaseResource


class Views(BaseResource):

    async def list(self, **params: Any) -> Dict[str, Any]:
        return await self.http.get("/views.json", params)

    async def count(self) -> Dict[str, Any]:
        return await self.http.get("/views/count.json")

    async def show(self, view_id: int) -> Dict[str, Any]:
        return await self.http.get(f"/views/{view_id}.json")

    async def create(self, view: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.post("/views.json", {"view": view})

    async def update(self, view_id: int, view: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.put(f"/views/{view_id}.json", {"view": view})

    async def delete(self, view_id: int) -> None:
        await self.http.delete(f"/views/{view_id}.json")

    async def execute(self, view_id: int, **params: Any) -> Dict[str, Any]:
        """Rows and columns of a view, as the agent interface renders them."""
        return await self.http.get(f"/views/{view_id}/execute.json", params)

    async def tickets(self, view_id: int, **params: Any) -> Dict[str, Any]:
        return await self.http.get(f"/views/{view_id}/tickets.json", params)

    async def count_tickets(self, view_id: int) -> Dict[str, Any]:
        return await self.http.get(f"/views/{view_id}/count.json")
