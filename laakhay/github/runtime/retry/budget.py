"""Informational rate-limit budget.

The server is the source of truth for limits, so the budget never gates a
request. It only remembers the last ``X-RateLimit-*`` values seen, for
diagnostics and for hosts that want to display them.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import UTC, datetime

from ...core.response import ResponseEnvelope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate-limit headers of one response."""

    limit: int | None = None
    remaining: int | None = None
    used: int | None = None
    reset_at: datetime | None = None
    resource: str | None = None


def _int_or_none(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class RateLimitBudget:
    """Tracks the latest rate-limit snapshot per resource bucket.

    Registered as a response hook on the HTTP client.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshots: dict[str, RateLimitSnapshot] = {}

    def __call__(self, envelope: ResponseEnvelope) -> None:
        self.observe(envelope)

    def observe(self, envelope: ResponseEnvelope) -> RateLimitSnapshot | None:
        headers = envelope.headers
        remaining = _int_or_none(headers.get("X-RateLimit-Remaining"))
        if remaining is None:
            return None

        reset_epoch = _int_or_none(headers.get("X-RateLimit-Reset"))
        snapshot = RateLimitSnapshot(
            limit=_int_or_none(headers.get("X-RateLimit-Limit")),
            remaining=remaining,
            used=_int_or_none(headers.get("X-RateLimit-Used")),
            reset_at=datetime.fromtimestamp(reset_epoch, tz=UTC) if reset_epoch else None,
            resource=headers.get("X-RateLimit-Resource") or "core",
        )
        with self._lock:
            self._snapshots[snapshot.resource or "core"] = snapshot

        if remaining == 0:
            logger.warning(
                f"Rate limit exhausted for '{snapshot.resource}' "
                f"(limit={snapshot.limit}, resets at {snapshot.reset_at})"
            )
        return snapshot

    def snapshot(self, resource: str = "core") -> RateLimitSnapshot | None:
        with self._lock:
            return self._snapshots.get(resource)
