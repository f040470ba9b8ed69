"""
Job status resource and completion polling.
"""

from typing import Any, Mapping, Optional

from ...core.errors import TimeoutError
from ...core.logging import get_logger
from ...core.types import JobHandle
from ...utils.async_utils.polling import poll_until
from .base import BaseResource, join_ids


logger = get_logger(__name__)


class JobStatuses(BaseResource):
    """Access to ``/job_statuses`` for bulk operations running server side."""

    async def show(self, job_id: str) -> JobHandle:
        response = await self.http.get(f"/job_statuses/{job_id}.json")
        return JobHandle.from_response(response)

    async def show_many(self, job_ids) -> Any:
        return await self.http.get("/job_statuses/show_many.json", {"ids": join_ids(job_ids)})

    async def wait_for_completion(
        self,
        job_id: str,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> JobHandle:
        """
        Poll a job until it reaches a terminal state.

        A ``failed`` job is returned, not raised. Errors while fetching the
        status propagate immediately.

        Args:
            job_id: Job identifier
            interval: Seconds between checks (default: config poll_interval)
            timeout: Overall deadline in seconds (default: config poll_timeout)

        Returns:
            The terminal JobHandle

        Raises:
            TimeoutError: If the job is not terminal before the deadline
        """
        interval = self.jobs.poll_interval if interval is None else interval
        timeout = self.jobs.poll_timeout if timeout is None else timeout

        logger.debug(f"Waiting for job {job_id} (interval={interval}s, timeout={timeout}s)")
        handle = await poll_until(
            lambda: self.show(job_id),
            lambda h: h.is_terminal,
            interval=interval,
            timeout=timeout,
            on_timeout=lambda: TimeoutError(
                f"Job {job_id} did not complete within {timeout}s",
                job_id=job_id,
                timeout=timeout,
            ),
        )
        logger.info(f"Job {job_id} finished with status {handle.status.value}")
        return handle


class JobBackedResource(BaseResource):
    """Resource whose bulk endpoints answer with a job status."""

    def __init__(self, http, jobs=None, job_statuses: Optional[JobStatuses] = None):
        super().__init__(http, jobs)
        self.job_statuses = job_statuses or JobStatuses(http, self.jobs)

    @staticmethod
    def _to_handle(response: Mapping[str, Any]) -> JobHandle:
        return JobHandle.from_response(response)

    async def _wait(self, handle: JobHandle, interval: Optional[float], timeout: Optional[float]) -> JobHandle:
        if handle.is_terminal:
            return handle
        return await self.job_statuses.wait_for_completion(handle.id, interval, timeout)
