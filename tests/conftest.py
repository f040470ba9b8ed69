"""
Global pytest fixtures for zendeskapi tests.

This file contains test fixtures that can be used across all test files.
"""

import pytest

from zendeskapi.core.config import ZendeskCredentials


# Import common fixtures to make them available globally
pytest_plugins = [
    "tests.fixtures.http_fixtures",
    "tests.fixtures.search_fixtures",
]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "slow: mark a test as slow (real sleeps)")


@pytest.fixture
def credentials():
    """Credentials for a fictional account."""
    return ZendeskCredentials(subdomain="acme", email="agent@acme.test", token="secret-token")


@pytest.fixture(autouse=True)
def _clean_zendesk_env(monkeypatch):
    """Keep credentials from the developer's shell out of the tests."""
    for name in ("ZENDESK_SUBDOMAIN", "ZENDESK_EMAIL", "ZENDESK_API_TOKEN", "ZENDESK_API_VERSION"):
        monkeypatch.delenv(name, raising=False)
