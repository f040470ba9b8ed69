"""
Tests for job status polling.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from zendeskapi.api.resources.job_statuses import JobStatuses
from zendeskapi.api.resources.tickets import Tickets
from zendeskapi.core.config import JobConfig
from zendeskapi.core.errors import NetworkError, TimeoutError
from zendeskapi.core.types import JobState


SLEEP = "zendeskapi.utils.async_utils.polling.asyncio.sleep"


def job(status, results=None):
    payload = {"id": "job-7", "status": status, "total": 2, "progress": 1}
    if results is not None:
        payload["results"] = results
    return {"job_status": payload}


@pytest.fixture
def http():
    mock = MagicMock()
    mock.get = AsyncMock()
    mock.post = AsyncMock()
    return mock


@pytest.mark.asyncio
async def test_show_parses_handle(http):
    http.get.return_value = job("working")
    handle = await JobStatuses(http).show("job-7")

    http.get.assert_awaited_once_with("/job_statuses/job-7.json")
    assert handle.status is JobState.WORKING
    assert not handle.is_terminal


@pytest.mark.asyncio
async def test_waits_until_completed(http):
    http.get.side_effect = [job("working"), job("working"), job("completed", [{"index": 0, "id": 1, "success": True}])]
    with patch(SLEEP, new_callable=AsyncMock) as sleep:
        handle = await JobStatuses(http).wait_for_completion("job-7", interval=2.0, timeout=60.0)

    assert handle.status is JobState.COMPLETED
    assert http.get.await_count == 3
    assert sleep.await_count == 2
    assert sleep.await_args.args[0] == 2.0


@pytest.mark.asyncio
async def test_failed_job_is_returned(http):
    http.get.return_value = job("failed")
    with patch(SLEEP, new_callable=AsyncMock):
        handle = await JobStatuses(http).wait_for_completion("job-7")
    assert handle.status is JobState.FAILED


@pytest.mark.asyncio
async def test_defaults_come_from_job_config(http):
    jobs = JobConfig()
    jobs.poll_interval = 0.5
    http.get.side_effect = [job("queued"), job("completed")]
    with patch(SLEEP, new_callable=AsyncMock) as sleep:
        await JobStatuses(http, jobs).wait_for_completion("job-7")
    sleep.assert_awaited_once_with(0.5)


@pytest.mark.asyncio
async def test_fetch_errors_propagate(http):
    http.get.side_effect = [job("working"), NetworkError("connection reset")]
    with patch(SLEEP, new_callable=AsyncMock):
        with pytest.raises(NetworkError):
            await JobStatuses(http).wait_for_completion("job-7")


@pytest.mark.slow
@pytest.mark.asyncio
async def test_timeout_names_job(http):
    http.get.return_value = job("working")
    with pytest.raises(TimeoutError) as exc_info:
        await JobStatuses(http).wait_for_completion("job-7", interval=0.05, timeout=0.3)

    assert exc_info.value.job_id == "job-7"
    assert exc_info.value.timeout == 0.3
    assert "job-7" in str(exc_info.value)


class TestAndWaitVariants:
    @pytest.mark.asyncio
    async def test_create_many_and_wait(self, http):
        http.post.return_value = job("queued")
        http.get.return_value = job(
            "completed",
            [{"index": 0, "id": 101, "success": True}, {"index": 1, "error": "Invalid", "success": False}],
        )
        tickets = Tickets(http)
        with patch(SLEEP, new_callable=AsyncMock):
            handle = await tickets.create_many_and_wait([{"subject": "a"}, {"subject": "b"}])

        assert handle.status is JobState.COMPLETED
        assert Tickets.successful_resource_ids(handle) == [101]
        assert [r.index for r in Tickets.failed_results(handle)] == [1]

    @pytest.mark.asyncio
    async def test_terminal_handle_skips_polling(self, http):
        http.post.return_value = job("completed")
        handle = await Tickets(http).merge_and_wait(1, [2])
        assert handle.status is JobState.COMPLETED
        http.get.assert_not_awaited()
