"""Runtime orchestration components."""

from .background import (
    BackgroundRunner,
    BackgroundTaskStrategy,
    InlineStrategy,
    ProgressUpdate,
    SchedulingStrategy,
)
from .cancellation import CancellationToken, await_cancellable
from .pagination import Paginator, PaginationResult
from .rest import HTTPClient, RequestBuilder, RestRunner
from .retry import RateLimitBudget, RetryPolicy, RetryState

__all__ = [
    "BackgroundRunner",
    "BackgroundTaskStrategy",
    "CancellationToken",
    "HTTPClient",
    "InlineStrategy",
    "PaginationResult",
    "Paginator",
    "ProgressUpdate",
    "RateLimitBudget",
    "RequestBuilder",
    "RestRunner",
    "RetryPolicy",
    "RetryState",
    "SchedulingStrategy",
    "await_cancellable",
]
