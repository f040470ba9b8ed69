"""
Client facade wiring every resource onto one transport.
"""

from typing import Optional

from .api.http_client import HttpClient
from .api.resources import (
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
from .core.auth import ApiTokenAuth
from .core import config as config_module
from .core.config import BaseConfig, ZendeskCredentials
from .core.errors import ConfigError
from .core.logging import get_logger
from .core.types import RateLimitState


logger = get_logger(__name__)


class ZendeskClient:
    """
    Entry point for the Zendesk API.

    Pass either ``credentials`` or ``subdomain``, ``email`` and ``token``.
    Use as an async context manager, or call ``close()`` when done.

    Example:
        async with ZendeskClient.from_env() as client:
            ticket = await client.tickets.show(1)
    """

    def __init__(
        self,
        credentials: Optional[ZendeskCredentials] = None,
        subdomain: Optional[str] = None,
        email: Optional[str] = None,
        token: Optional[str] = None,
        api_version: str = "v2",
        config: Optional[BaseConfig] = None,
    ):
        if credentials is None:
            if subdomain is None and email is None and token is None:
                raise ConfigError("Pass credentials or subdomain, email and token")
            credentials = ZendeskCredentials(subdomain or "", email or "", token or "", api_version)

        self.credentials = credentials
        self.config = config or config_module.config

        self.auth = ApiTokenAuth(credentials)
        self.http = HttpClient(
            self.auth,
            rate_limit=self.config.rate_limit,
            user_agent=self.config.user_agent,
        )

        jobs = self.config.jobs
        self.job_statuses = JobStatuses(self.http, jobs)
        self.tickets = Tickets(self.http, jobs, self.job_statuses)
        self.users = Users(self.http, jobs, self.job_statuses)
        self.organizations = Organizations(self.http, jobs, self.job_statuses)
        self.search = Search(self.http, jobs, self.config.search)
        self.triggers = Triggers(self.http, jobs)
        self.trigger_categories = TriggerCategories(self.http, jobs)
        self.views = Views(self.http, jobs)
        self.macros = Macros(self.http, jobs)
        self.automations = Automations(self.http, jobs)

        logger.debug(f"Client created for {credentials.subdomain}")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, config: Optional[BaseConfig] = None) -> "ZendeskClient":
        """Build a client from ``ZENDESK_*`` environment variables (and .env)."""
        return cls(ZendeskCredentials.from_env(dotenv_path), config=config)

    @property
    def rate_limit_state(self) -> Optional[RateLimitState]:
        return self.http.get_rate_limit_state()

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "ZendeskClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"ZendeskClient(subdomain={self.credentials.subdomain!r})"
