"""
Automations resource.
"""

from .base import BusinessRuleResource


class Automations(BusinessRuleResource):
    path = "automations"
    key = "automation"
