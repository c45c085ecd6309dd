"""Engine configuration and process-wide defaults.

``EngineConfig`` holds every tunable of the engine. ``ProcessDefaults`` is
the in-memory stand-in for the host's configuration store: the host calls
``configure()`` once at start-up, the engine only reads from it.
"""

from __future__ import annotations

import threading
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

GITHUB_API_HOST = "https://api.github.com"
DEFAULT_ACCEPT = "application/vnd.github+json"
DEFAULT_API_VERSION = "2022-11-28"
DEFAULT_USER_AGENT = "laakhay-github"


class EngineConfig(BaseModel):
    """Tunables for the REST invocation engine.

    Attributes:
        api_host: Base URL of the REST API (no trailing slash)
        default_accept: Accept media type when a request does not set one
        api_version: Value of the ``X-GitHub-Api-Version`` header
        user_agent: Value of the ``User-Agent`` header (required by GitHub)
        request_timeout: Timeout of one physical request in seconds
        call_timeout: Deadline for a whole logical call (None = unbounded)
        max_attempts: Maximum physical attempts per request, first one included
        backoff_base: First retry delay in seconds
        backoff_factor: Multiplier applied per further attempt
        backoff_max: Cap on the exponential backoff
        result_not_ready_delay: Wait before re-asking for a 202 result
        progress_interval: Seconds between progress updates in background mode
        default_no_status: Run calls inline unless the caller asks otherwise
        max_pages: Upper bound on pages per paginated call (None = unbounded)
    """

    api_host: str = GITHUB_API_HOST
    default_accept: str = DEFAULT_ACCEPT
    api_version: str | None = DEFAULT_API_VERSION
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = Field(default=30.0, gt=0)
    call_timeout: float | None = Field(default=300.0, gt=0)
    max_attempts: int = Field(default=4, ge=1)
    backoff_base: float = Field(default=1.0, ge=0)
    backoff_factor: float = Field(default=2.0, ge=1)
    backoff_max: float = Field(default=60.0, ge=0)
    result_not_ready_delay: float = Field(default=5.0, ge=0)
    progress_interval: float = Field(default=1.0, gt=0)
    default_no_status: bool = False
    max_pages: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("api_host")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_host must be an http(s) URL")
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_backoff(self) -> EngineConfig:
        if self.backoff_max < self.backoff_base:
            raise ValueError("backoff_max must be >= backoff_base")
        return self

    @classmethod
    def for_enterprise(cls, hostname: str, **overrides) -> EngineConfig:
        """Config for a GitHub Enterprise Server instance.

        Examples:
            >>> EngineConfig.for_enterprise("github.example.com").api_host
            'https://github.example.com/api/v3'
        """
        hostname = hostname.strip().rstrip("/")
        if hostname.startswith(("http://", "https://")):
            hostname = hostname.split("://", 1)[1]
        if hostname in ("github.com", "api.github.com"):
            return cls(**overrides)
        return cls(api_host=f"https://{hostname}/api/v3", **overrides)


class DefaultsProvider(Protocol):
    """Read side of the host's configuration store."""

    def default_access_token(self) -> str | None:
        """Return the configured default token, or None."""
        ...

    def default_config(self) -> EngineConfig:
        """Return the configured engine settings."""
        ...


class ProcessDefaults:
    """Process-wide defaults set once at configuration time."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._token: str | None = None
        self._config = EngineConfig()

    def configure(
        self, *, access_token: str | None = None, config: EngineConfig | None = None
    ) -> None:
        with self._lock:
            self._token = access_token or None
            if config is not None:
                self._config = config

    def clear(self) -> None:
        """Reset to anonymous access and default settings."""
        with self._lock:
            self._token = None
            self._config = EngineConfig()

    def default_access_token(self) -> str | None:
        with self._lock:
            return self._token

    def default_config(self) -> EngineConfig:
        with self._lock:
            return self._config


_process_defaults = ProcessDefaults()


def get_process_defaults() -> ProcessDefaults:
    """Return the process-wide defaults store."""
    return _process_defaults


def configure(*, access_token: str | None = None, config: EngineConfig | None = None) -> None:
    """Set the process-wide default token and engine settings."""
    _process_defaults.configure(access_token=access_token, config=config)
