"""
Tests for configuration and credential loading.
"""

import os

import pytest

from zendeskapi.core import config as config_module
from zendeskapi.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    RateLimitConfig,
    ZendeskCredentials,
    get_config,
    get_setting,
    update_setting,
)
from zendeskapi.core.errors import ConfigError


ENV_NAMES = ("ZENDESK_SUBDOMAIN", "ZENDESK_EMAIL", "ZENDESK_API_TOKEN", "ZENDESK_API_VERSION")


class TestEnvironmentConfig:
    def test_defaults(self):
        cfg = DevelopmentConfig()
        assert cfg.rate_limit.quota_buffer == 10
        assert cfg.rate_limit.max_retries == 3
        assert cfg.rate_limit.backoff_base == 1.0
        assert cfg.search.max_page_size == 100
        assert cfg.search.default_chunk_days == 30
        assert cfg.search.default_date_field == "created"
        assert cfg.rate_limit.max_total_connections == 5
        assert cfg.rate_limit.max_connections_per_host == 5
        assert cfg.search.max_export_page_size == 1000
        assert cfg.search.strict_partitions is False
        assert cfg.jobs.poll_interval == 1.0
        assert cfg.jobs.poll_timeout == 300.0

    def test_environment_selection(self, monkeypatch):
        monkeypatch.setenv("ZENDESKAPI_ENV", "production")
        assert isinstance(get_config(), ProductionConfig)
        monkeypatch.setenv("ZENDESKAPI_ENV", "development")
        assert isinstance(get_config(), DevelopmentConfig)

    def test_production_profile(self):
        cfg = ProductionConfig()
        assert cfg.rate_limit.api_timeout == 45
        assert cfg.rate_limit.max_total_connections == 50
        assert cfg.to_dict()["ENVIRONMENT"] == "production"
        assert cfg.to_dict()["JOBS"]["POLL_TIMEOUT"] == 300.0

    def test_get_setting_dotted(self):
        assert get_setting("rate_limit.max_retries") == 3
        assert get_setting("search.missing", "fallback") == "fallback"

    def test_update_setting(self, monkeypatch):
        monkeypatch.setattr(config_module, "config", DevelopmentConfig())
        update_setting("rate_limit.max_retries", 5)
        assert config_module.config.rate_limit.max_retries == 5
        with pytest.raises(KeyError):
            update_setting("rate_limit.nonexistent", 1)

    def test_update_setting_refused_in_production(self, monkeypatch):
        monkeypatch.setenv("ZENDESKAPI_ENV", "production")
        with pytest.raises(RuntimeError):
            update_setting("rate_limit.max_retries", 5)

    def test_rate_limit_test_copy(self):
        copy = RateLimitConfig().create_test_copy(max_retries=0)
        assert copy.max_retries == 0
        with pytest.raises(ValueError):
            RateLimitConfig().create_test_copy(not_a_key=1)


class TestCredentials:
    def test_subdomain_normalization(self):
        creds = ZendeskCredentials("https://acme.zendesk.com/", "a@b.c", "t")
        assert creds.subdomain == "acme"

    def test_missing_values(self):
        with pytest.raises(ConfigError) as exc_info:
            ZendeskCredentials("acme", "", "")
        assert "email" in str(exc_info.value)
        assert "token" in str(exc_info.value)

    def test_repr_masks_token(self):
        creds = ZendeskCredentials("acme", "a@b.c", "very-secret")
        assert "very-secret" not in repr(creds)

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ZENDESK_SUBDOMAIN", "acme")
        monkeypatch.setenv("ZENDESK_EMAIL", "agent@acme.test")
        monkeypatch.setenv("ZENDESK_API_TOKEN", "tok")
        creds = ZendeskCredentials.from_env(str(tmp_path / "missing.env"))
        assert creds.subdomain == "acme"
        assert creds.api_version == "v2"

    def test_from_env_reads_dotenv_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "ZENDESK_SUBDOMAIN=dotenv\nZENDESK_EMAIL=d@e.test\nZENDESK_API_TOKEN=x\nZENDESK_API_VERSION=v3\n"
        )
        try:
            creds = ZendeskCredentials.from_env(str(env_file))
        finally:
            for name in ENV_NAMES:
                os.environ.pop(name, None)
        assert creds.subdomain == "dotenv"
        assert creds.api_version == "v3"

    def test_from_env_missing(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            ZendeskCredentials.from_env(str(tmp_path / "missing.env"))
        assert "ZENDESK_SUBDOMAIN" in str(exc_info.value)
