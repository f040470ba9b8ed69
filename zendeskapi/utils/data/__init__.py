"""Data helpers for job results."""

from .job_results import failed_results, is_failed, is_successful, successful_resource_ids


__all__ = ["failed_results", "is_failed", "is_successful", "successful_resource_ids"]
