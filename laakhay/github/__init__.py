"""Laakhay GitHub - REST invocation engine for GitHub API wrappers."""

from .auth import ANONYMOUS, Authenticator, Credential
from .core import (
    AuthFailure,
    Cancelled,
    ConfigurationError,
    EngineConfig,
    ExtendedResult,
    GitHubError,
    HttpFailure,
    HttpMethod,
    NotFound,
    Outcome,
    PaginationAborted,
    RateLimited,
    RequestSpec,
    ResponseEnvelope,
    RestResult,
    ResultNotReady,
    ServerError,
    TransportError,
    ValidationFailure,
    configure,
    get_process_defaults,
)
from .runtime import (
    BackgroundRunner,
    CancellationToken,
    HTTPClient,
    RestRunner,
    RetryPolicy,
)
from .telemetry import (
    InMemoryTelemetrySink,
    LoggingTelemetrySink,
    TelemetryEmitter,
    TelemetryEvent,
)

__version__ = "0.1.0"

__all__ = [
    # Engine
    "RestRunner",
    "RequestSpec",
    "HttpMethod",
    "EngineConfig",
    "configure",
    "get_process_defaults",
    # Results
    "ResponseEnvelope",
    "ExtendedResult",
    "RestResult",
    # Auth
    "ANONYMOUS",
    "Authenticator",
    "Credential",
    # Runtime
    "BackgroundRunner",
    "CancellationToken",
    "HTTPClient",
    "RetryPolicy",
    # Telemetry
    "InMemoryTelemetrySink",
    "LoggingTelemetrySink",
    "Outcome",
    "TelemetryEmitter",
    "TelemetryEvent",
    # Exceptions
    "GitHubError",
    "ConfigurationError",
    "HttpFailure",
    "AuthFailure",
    "NotFound",
    "ValidationFailure",
    "RateLimited",
    "ServerError",
    "ResultNotReady",
    "TransportError",
    "Cancelled",
    "PaginationAborted",
]
