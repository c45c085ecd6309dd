"""Rate-limit header interpretation.

GitHub signals rate limiting in three ways:
    - ``Retry-After`` (seconds, occasionally an HTTP date) on secondary limits
    - ``X-RateLimit-Remaining: 0`` plus ``X-RateLimit-Reset`` (epoch seconds)
      when the primary budget is exhausted
    - a 403 whose message mentions the secondary rate limit
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from email.utils import parsedate_to_datetime
from typing import Any


def parse_retry_after(value: str | None, *, now: float | None = None) -> float | None:
    """Parse a ``Retry-After`` value into seconds from now.

    Examples:
        >>> parse_retry_after("2")
        2.0
        >>> parse_retry_after("soon") is None
        True
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when is None:
        return None
    now = time.time() if now is None else now
    return max(0.0, when.timestamp() - now)


def reset_delay(headers: Mapping[str, str], *, now: float | None = None) -> float | None:
    """Seconds until ``X-RateLimit-Reset`` when the budget is exhausted."""
    if headers.get("X-RateLimit-Remaining") != "0":
        return None
    reset = headers.get("X-RateLimit-Reset")
    if not reset:
        return None
    try:
        reset_at = float(reset)
    except ValueError:
        return None
    now = time.time() if now is None else now
    return max(0.0, reset_at - now)


def retry_after_hint(headers: Mapping[str, str], *, now: float | None = None) -> float | None:
    """Server-provided wait hint in seconds, or None when there is none."""
    hint = parse_retry_after(headers.get("Retry-After"), now=now)
    if hint is not None:
        return hint
    return reset_delay(headers, now=now)


def is_rate_limit_signal(status_code: int, headers: Mapping[str, str], body: Any) -> bool:
    """Whether a 403/429 response is a rate limit rather than a permission error."""
    if status_code == 429:
        return True
    if status_code != 403:
        return False
    if headers.get("Retry-After") is not None:
        return True
    if headers.get("X-RateLimit-Remaining") == "0":
        return True
    message = str(body.get("message") or "") if isinstance(body, dict) else str(body or "")
    return "rate limit" in message.lower()
