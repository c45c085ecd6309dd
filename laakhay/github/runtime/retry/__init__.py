"""Retry and rate-limit handling."""

from .budget import RateLimitBudget, RateLimitSnapshot
from .hints import is_rate_limit_signal, parse_retry_after, reset_delay, retry_after_hint
from .policy import RetryPolicy, RetryState

__all__ = [
    "RateLimitBudget",
    "RateLimitSnapshot",
    "RetryPolicy",
    "RetryState",
    "is_rate_limit_signal",
    "parse_retry_after",
    "reset_delay",
    "retry_after_hint",
]
