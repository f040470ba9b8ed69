"""
Tickets resource.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from ...core.errors import ValidationError
from ...core.types import JobHandle, JobResult
from ...utils.data.job_results import failed_results, successful_resource_ids
from .base import cursor_params, join_ids, page_params
from .job_statuses import JobBackedResource


class Tickets(JobBackedResource):
    """Ticket CRUD, bulk operations, comments and imports."""

    async def list(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = page_params(page, per_page, sort_by or "created_at", sort_order or "desc")
        return await self.http.get("/tickets.json", params)

    async def list_with_cursor(
        self,
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = cursor_params(page_size, cursor, sort_by or "created_at", sort_order or "desc")
        return await self.http.get("/tickets.json", params)

    async def show(self, ticket_id: int) -> Dict[str, Any]:
        return await self.http.get(f"/tickets/{ticket_id}.json")

    async def create(self, ticket: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.post("/tickets.json", {"ticket": ticket})

    async def update(self, ticket_id: int, ticket: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.put(f"/tickets/{ticket_id}.json", {"ticket": ticket})

    async def delete(self, ticket_id: int) -> None:
        await self.http.delete(f"/tickets/{ticket_id}.json")

    async def show_many(self, ticket_ids: Iterable[int]) -> Dict[str, Any]:
        return await self.http.get("/tickets/show_many.json", {"ids": join_ids(ticket_ids)})

    async def count(self) -> Dict[str, Any]:
        return await self.http.get("/tickets/count.json")

    async def mark_as_spam(self, ticket_id: int) -> Dict[str, Any]:
        return await self.http.put(f"/tickets/{ticket_id}/mark_as_spam.json")

    # ===== Bulk operations =====

    async def create_many(self, tickets: List[Dict[str, Any]]) -> JobHandle:
        response = await self.http.post("/tickets/create_many.json", {"tickets": tickets})
        return self._to_handle(response)

    async def create_many_and_wait(
        self,
        tickets: List[Dict[str, Any]],
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> JobHandle:
        return await self._wait(await self.create_many(tickets), interval, timeout)

    async def update_many(
        self,
        tickets: Optional[List[Dict[str, Any]]] = None,
        ids: Optional[Iterable[int]] = None,
        ticket: Optional[Dict[str, Any]] = None,
    ) -> JobHandle:
        """
        Update many tickets in one job.

        Either pass ``tickets`` (each with its own ``id``) for individual
        updates, or ``ids`` plus a single ``ticket`` applied to all of them.
        """
        if tickets is not None and ids is None:
            response = await self.http.put("/tickets/update_many.json", {"tickets": tickets})
        elif ids is not None and ticket is not None and tickets is None:
            response = await self.http.put(
                "/tickets/update_many.json", {"ticket": ticket}, params={"ids": join_ids(ids)}
            )
        else:
            raise ValidationError("Pass either tickets, or ids together with ticket")
        return self._to_handle(response)

    async def update_many_and_wait(
        self,
        tickets: Optional[List[Dict[str, Any]]] = None,
        ids: Optional[Iterable[int]] = None,
        ticket: Optional[Dict[str, Any]] = None,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> JobHandle:
        handle = await self.update_many(tickets=tickets, ids=ids, ticket=ticket)
        return await self._wait(handle, interval, timeout)

    async def merge(
        self,
        target_id: int,
        source_ids: Union[int, Iterable[int]],
        target_comment: Optional[str] = None,
        source_comment: Optional[str] = None,
    ) -> JobHandle:
        """Merge ``source_ids`` into the ticket ``target_id``."""
        ids = [source_ids] if isinstance(source_ids, int) else list(source_ids)
        body: Dict[str, Any] = {"ids": ids}
        if target_comment:
            body["target_comment"] = target_comment
        if source_comment:
            body["source_comment"] = source_comment

        response = await self.http.post(f"/tickets/{target_id}/merge.json", body)
        return self._to_handle(response)

    async def merge_and_wait(
        self,
        target_id: int,
        source_ids: Union[int, Iterable[int]],
        target_comment: Optional[str] = None,
        source_comment: Optional[str] = None,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> JobHandle:
        handle = await self.merge(target_id, source_ids, target_comment, source_comment)
        return await self._wait(handle, interval, timeout)

    async def get_job_status(self, job_id: str) -> JobHandle:
        return await self.job_statuses.show(job_id)

    async def wait_for_job_completion(
        self, job_id: str, interval: Optional[float] = None, timeout: Optional[float] = None
    ) -> JobHandle:
        return await self.job_statuses.wait_for_completion(job_id, interval, timeout)

    @staticmethod
    def successful_resource_ids(handle: JobHandle) -> List[Union[int, str]]:
        return successful_resource_ids(handle)

    @staticmethod
    def failed_results(handle: JobHandle) -> List[JobResult]:
        return failed_results(handle)

    # ===== Comments =====

    async def list_comments(
        self,
        ticket_id: int,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = page_params(page, per_page, sort_by=None, sort_order=sort_order or "desc")
        return await self.http.get(f"/tickets/{ticket_id}/comments.json", params)

    async def get_comment(self, ticket_id: int, comment_id: int) -> Dict[str, Any]:
        """
        Find one comment on a ticket.

        There is no single comment endpoint, so the first page of comments
        (oldest first) is searched.

        Raises:
            ValidationError: If the comment is not on that page
        """
        response = await self.list_comments(ticket_id, per_page=100, sort_order="asc")
        for comment in (response or {}).get("comments", []):
            if comment.get("id") == comment_id:
                return {"comment": comment}
        raise ValidationError(
            f"Comment {comment_id} not found in ticket {ticket_id}",
            {"ticket_id": ticket_id, "comment_id": comment_id},
        )

    async def redact_comment(self, ticket_id: int, comment_id: int, text: str) -> Dict[str, Any]:
        """Permanently remove ``text`` from a comment."""
        return await self.http.put(
            f"/tickets/{ticket_id}/comments/{comment_id}/redact.json", {"text": text}
        )

    # ===== Imports =====

    async def import_ticket(self, ticket: Dict[str, Any]) -> Dict[str, Any]:
        return await self.http.post("/imports/tickets.json", {"ticket": ticket})

    async def import_many(self, tickets: List[Dict[str, Any]]) -> JobHandle:
        response = await self.http.post("/imports/tickets/create_many.json", {"tickets": tickets})
        return self._to_handle(response)

    async def import_many_and_wait(
        self,
        tickets: List[Dict[str, Any]],
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> JobHandle:
        return await self._wait(await self.import_many(tickets), interval, timeout)
