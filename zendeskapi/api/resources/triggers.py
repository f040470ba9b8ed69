"""
Triggers resource.
"""

from typing import Any, Dict, Iterable

from .base import BusinessRuleResource


class Triggers(BusinessRuleResource):
    path = "triggers"
    key = "trigger"

    async def reorder(self, trigger_ids: Iterable[int]) -> Dict[str, Any]:
        return await self.http.put("/triggers/reorder.json", {"trigger_ids": list(trigger_ids)})

    async def definitions(self) -> Dict[str, Any]:
        """Conditions and actions available when building triggers."""
        return await self.http.get("/triggers/definitions.json")

    async def list_revisions(self, trigger_id: int, **params: Any) -> Dict[str, Any]:
        return await self.http.get(f"/triggers/{trigger_id}/revisions.json", params)

    async def show_revision(self, trigger_id: int, revision_id: int) -> Dict[str, Any]:
        return await self.http.get(f"/triggers/{trigger_id}/revisions/{revision_id}.json")
