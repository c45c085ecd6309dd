"""Core components."""

from .config import (
    DEFAULT_ACCEPT,
    GITHUB_API_HOST,
    DefaultsProvider,
    EngineConfig,
    ProcessDefaults,
    configure,
    get_process_defaults,
)
from .enums import HttpMethod, Outcome
from .exceptions import (
    AuthFailure,
    Cancelled,
    ConfigurationError,
    GitHubError,
    HttpFailure,
    NotFound,
    PaginationAborted,
    RateLimited,
    ResultNotReady,
    ServerError,
    TransportError,
    ValidationFailure,
)
from .request import PhysicalRequest, RequestSpec
from .response import ExtendedResult, ResponseEnvelope, RestResult, parse_link_header

__all__ = [
    # Config
    "DEFAULT_ACCEPT",
    "GITHUB_API_HOST",
    "DefaultsProvider",
    "EngineConfig",
    "ProcessDefaults",
    "configure",
    "get_process_defaults",
    # Enums
    "HttpMethod",
    "Outcome",
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
    # Models
    "RequestSpec",
    "PhysicalRequest",
    "ResponseEnvelope",
    "ExtendedResult",
    "RestResult",
    "parse_link_header",
]
