"""
Macros resource.
"""

from typing import Any, Dict, Optional

from .base import BusinessRuleResource


class Macros(BusinessRuleResource):
    path = "macros"
    key = "macro"

    async def categories(self) -> Dict[str, Any]:
        return await self.http.get("/macros/categories.json")

    async def actions(self) -> Dict[str, Any]:
        return await self.http.get("/macros/actions.json")

    async def apply(self, macro_id: int, ticket_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Preview the changes a macro would make.

        With ``ticket_id`` the macro is applied to that ticket's current
        state; nothing is saved either way.
        """
        if ticket_id is not None:
            return await self.http.get(f"/tickets/{ticket_id}/macros/{macro_id}/apply.json")
        return await self.http.get(f"/macros/{macro_id}/apply.json")
