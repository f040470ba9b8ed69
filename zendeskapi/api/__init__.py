"""
API access layer: the rate limited transport and resource wrappers.
"""

from .http_client import HttpClient, prepare_params
from .resources import (
    Automations,
    JobStatuses,
    Macros,
    Organizations,
    Search,
    Tickets,
    TriggerCategories,
    Triggers,
    Users,
    Views,
)


__all__ = [
    "HttpClient",
    "prepare_params",
    "Automations",
    "JobStatuses",
    "Macros",
    "Organizations",
    "Search",
    "Tickets",
    "TriggerCategories",
    "Triggers",
    "Users",
    "Views",
]
