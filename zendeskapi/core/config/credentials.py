"""
Credential loading for the Zendesk API.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from ..errors import ConfigError


ENV_SUBDOMAIN = "ZENDESK_SUBDOMAIN"
ENV_EMAIL = "ZENDESK_EMAIL"
ENV_TOKEN = "ZENDESK_API_TOKEN"
ENV_API_VERSION = "ZENDESK_API_VERSION"


def _normalize_subdomain(subdomain: str) -> str:
    subdomain = subdomain.strip()
    for prefix in ("https://", "http://"):
        if subdomain.startswith(prefix):
            subdomain = subdomain[len(prefix):]
    subdomain = subdomain.rstrip("/")
    if subdomain.endswith(".zendesk.com"):
        subdomain = subdomain[: -len(".zendesk.com")]
    return subdomain


@dataclass(frozen=True)
class ZendeskCredentials:
    """
    Static API token credentials.

    Attributes:
        subdomain: Account subdomain (``acme`` for acme.zendesk.com)
        email: Agent email the token belongs to
        token: API token
        api_version: API version path segment
    """

    subdomain: str
    email: str
    token: str
    api_version: str = "v2"

    def __post_init__(self):
        missing = [name for name in ("subdomain", "email", "token") if not getattr(self, name)]
        if missing:
            raise ConfigError(
                "Missing required Zendesk credentials",
                {"missing": ",".join(missing)},
            )
        object.__setattr__(self, "subdomain", _normalize_subdomain(self.subdomain))

    def __repr__(self) -> str:
        return (
            f"ZendeskCredentials(subdomain={self.subdomain!r}, email={self.email!r}, "
            f"token='***', api_version={self.api_version!r})"
        )

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "ZendeskCredentials":
        """
        Build credentials from environment variables.

        A ``.env`` file is loaded first when present; variables already set
        in the environment take precedence.

        Args:
            dotenv_path: Optional explicit path to a .env file

        Returns:
            ZendeskCredentials instance

        Raises:
            ConfigError: If a required variable is missing
        """
        load_dotenv(dotenv_path)

        missing = [
            name for name in (ENV_SUBDOMAIN, ENV_EMAIL, ENV_TOKEN) if not os.getenv(name)
        ]
        if missing:
            raise ConfigError(
                "Missing required environment variables",
                {"missing": ",".join(missing)},
            )

        return cls(
            subdomain=os.environ[ENV_SUBDOMAIN],
            email=os.environ[ENV_EMAIL],
            token=os.environ[ENV_TOKEN],
            api_version=os.getenv(ENV_API_VERSION, "v2"),
        )
