"""
Tests for job result classification.
"""

from zendeskapi.core.types import JobHandle
from zendeskapi.utils.data.job_results import failed_results, successful_resource_ids


def _handle(results):
    return JobHandle.from_response({"job_status": {"id": "j1", "status": "completed", "results": results}})


def test_presence_based_results():
    handle = _handle([{"id": 995, "index": 0}, {"id": 994, "index": 1}])
    assert successful_resource_ids(handle) == [995, 994]
    assert failed_results(handle) == []


def test_flag_based_results():
    handle = _handle(
        [
            {"id": 1, "index": 0, "success": True},
            {"index": 1, "success": False, "errors": "Subject missing"},
            {"index": 2, "success": True},
        ]
    )
    assert successful_resource_ids(handle) == [1]
    failed = failed_results(handle)
    assert [r.index for r in failed] == [1]
    assert failed[0].errors == "Subject missing"


def test_presence_based_failure():
    handle = _handle([{"index": 0, "errors": "Invalid"}, {"id": 7, "index": 1}])
    assert successful_resource_ids(handle) == [7]
    assert [r.index for r in failed_results(handle)] == [0]


def test_no_results():
    handle = JobHandle.from_response({"id": "j1", "status": "failed"})
    assert successful_resource_ids(handle) == []
    assert failed_results(handle) == []
