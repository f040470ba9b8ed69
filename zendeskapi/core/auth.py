"""
API token request signing.
"""

import base64
from typing import Dict

from .config.credentials import ZendeskCredentials


class ApiTokenAuth:
    """
    Produces auth headers and the base address for API token credentials.

    Zendesk API tokens authenticate with HTTP Basic using
    ``{email}/token:{token}`` as the user part.
    """

    def __init__(self, credentials: ZendeskCredentials):
        self.credentials = credentials

    def get_auth_headers(self) -> Dict[str, str]:
        raw = f"{self.credentials.email}/token:{self.credentials.token}"
        encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        return {
            "Authorization": f"Basic {encoded}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def get_base_url(self) -> str:
        return (
            f"https://{self.credentials.subdomain}.zendesk.com/api/"
            f"{self.credentials.api_version}"
        )

    def __repr__(self) -> str:
        return f"ApiTokenAuth({self.credentials!r})"
