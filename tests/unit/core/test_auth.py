"""
Tests for API token request signing.
"""

import base64

from zendeskapi.core.auth import ApiTokenAuth
from zendeskapi.core.config import ZendeskCredentials


def test_base_url(credentials):
    assert ApiTokenAuth(credentials).get_base_url() == "https://acme.zendesk.com/api/v2"


def test_custom_api_version():
    creds = ZendeskCredentials("acme", "agent@acme.test", "tok", api_version="v3")
    assert ApiTokenAuth(creds).get_base_url() == "https://acme.zendesk.com/api/v3"


def test_auth_headers(credentials):
    headers = ApiTokenAuth(credentials).get_auth_headers()
    expected = base64.b64encode(b"agent@acme.test/token:secret-token").decode("ascii")
    assert headers["Authorization"] == f"Basic {expected}"
    assert headers["Content-Type"] == "application/json"
