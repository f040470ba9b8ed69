"""
Trigger categories resource.
"""

from typing import Any, Dict, List

from .base import BaseResource


class TriggerCategories(BaseResource):

    async def list(self, **params: Any) -> Dict[str, Any]:
        return await self.http.get("/trigger_categories.json", params)

    async def create(self, category: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.post("/trigger_categories.json", {"trigger_category": category})

    async def create_batch_job(self, operations: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Run reorder and recategorize operations in one synchronous job."""
        return await self.http.post(
            "/trigger_categories/jobs.json", {"job": {"action": "patch", "items": operations}}
        )

    async def show(self, category_id: str) -> Dict[str, Any]:
        return await self.http.get(f"/trigger_categories/{category_id}.json")

    async def update(self, category_id: str, category: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.put(
            f"/trigger_categories/{category_id}.json", {"trigger_category": category}
        )

    async def delete(self, category_id: str) -> None:
        await self.http.delete(f"/trigger_categories/{category_id}.json")
