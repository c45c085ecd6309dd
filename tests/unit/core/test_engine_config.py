"""Unit tests for EngineConfig and process defaults."""

import pytest
from pydantic import ValidationError

from laakhay.github.core.config import (
    DEFAULT_ACCEPT,
    DEFAULT_API_VERSION,
    GITHUB_API_HOST,
    EngineConfig,
    ProcessDefaults,
)


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig()
        assert config.api_host == GITHUB_API_HOST
        assert config.default_accept == DEFAULT_ACCEPT
        assert config.api_version == DEFAULT_API_VERSION
        assert config.max_attempts == 4
        assert config.max_pages is None
        assert not config.default_no_status

    def test_trailing_slash_stripped(self):
        assert EngineConfig(api_host="https://ghe.example.com/api/v3/").api_host == (
            "https://ghe.example.com/api/v3"
        )

    def test_non_http_host_rejected(self):
        with pytest.raises(ValidationError):
            EngineConfig(api_host="ftp://example.com")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_attempts": 0},
            {"request_timeout": 0},
            {"backoff_factor": 0.5},
            {"backoff_base": 10, "backoff_max": 5},
            {"max_pages": 0},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ValidationError):
            EngineConfig(**overrides)

    def test_is_frozen(self):
        config = EngineConfig()
        with pytest.raises(ValidationError):
            config.max_attempts = 10  # type: ignore[misc]

    def test_call_timeout_can_be_unbounded(self):
        assert EngineConfig(call_timeout=None).call_timeout is None


class TestForEnterprise:
    def test_enterprise_host(self):
        config = EngineConfig.for_enterprise("github.example.com", max_attempts=2)
        assert config.api_host == "https://github.example.com/api/v3"
        assert config.max_attempts == 2

    def test_scheme_is_ignored(self):
        assert (
            EngineConfig.for_enterprise("https://github.example.com/").api_host
            == "https://github.example.com/api/v3"
        )

    def test_public_github_maps_to_api_host(self):
        assert EngineConfig.for_enterprise("github.com").api_host == GITHUB_API_HOST


class TestProcessDefaults:
    def test_starts_anonymous(self):
        defaults = ProcessDefaults()
        assert defaults.default_access_token() is None
        assert defaults.default_config() == EngineConfig()

    def test_configure_and_clear(self):
        defaults = ProcessDefaults()
        config = EngineConfig(max_attempts=1)
        defaults.configure(access_token="ghp_default", config=config)
        assert defaults.default_access_token() == "ghp_default"
        assert defaults.default_config() is config

        defaults.clear()
        assert defaults.default_access_token() is None
        assert defaults.default_config().max_attempts == 4

    def test_empty_token_means_anonymous(self):
        defaults = ProcessDefaults()
        defaults.configure(access_token="")
        assert defaults.default_access_token() is None

    def test_configure_token_keeps_config(self):
        defaults = ProcessDefaults()
        config = EngineConfig(max_attempts=2)
        defaults.configure(config=config)
        defaults.configure(access_token="ghp_default")
        assert defaults.default_config() is config
