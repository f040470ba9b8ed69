"""
Classification of per-item job results.

Job status results come in two shapes from the same endpoint family: items
carrying an explicit ``success`` flag and items whose outcome is implied by
the presence of ``id`` or ``errors``. Both are modelled as variants of
``JobResult``; these helpers work on an already fetched handle.
"""

from typing import List, Union

from ...core.types import FlaggedJobResult, InferredJobResult, JobHandle, JobResult


def is_successful(result: JobResult) -> bool:
    if isinstance(result, FlaggedJobResult):
        return result.success is True and result.id is not None
    if isinstance(result, InferredJobResult):
        return result.id is not None
    raise TypeError(f"Unknown job result variant: {type(result).__name__}")


def is_failed(result: JobResult) -> bool:
    if isinstance(result, FlaggedJobResult):
        return result.success is False
    if isinstance(result, InferredJobResult):
        return result.errors is not None
    raise TypeError(f"Unknown job result variant: {type(result).__name__}")


def successful_resource_ids(handle: JobHandle) -> List[Union[int, str]]:
    """Ids of the items the job created or updated."""
    return [r.id for r in handle.results if is_successful(r)]


def failed_results(handle: JobHandle) -> List[JobResult]:
    """Items the job reported as failed."""
    return [r for r in handle.results if is_failed(r)]
