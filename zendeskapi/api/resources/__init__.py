"""
Resource wrappers for the Zendesk API.

Each wrapper translates method calls into requests on the shared transport
and returns the decoded response.
"""

from .automations import Automations
from .job_statuses import JobStatuses
from .macros import Macros
from .organizations import Organizations
from .search import Search
from .tickets import Tickets
from .trigger_categories import TriggerCategories
from .triggers import Triggers
from .users import Users
from .views import Views


__all__ = [
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
