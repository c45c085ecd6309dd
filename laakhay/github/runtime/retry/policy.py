"""Retry policy for transient failures and rate limits.

Architecture:
    ``RetryPolicy.execute`` wraps a zero-argument ``send`` coroutine factory
    (one physical request per call) and re-invokes it on retryable failures.
    The policy is stateless; each ``execute`` call owns a fresh
    ``RetryState`` that is discarded when it returns or raises.

Design Decisions:
    - Wait = max(exponential backoff, server hint): the server hint is a floor,
      never shortened by our own backoff schedule
    - Backoff alone is capped at ``backoff_max``; a server hint is not capped
      but is refused when it would cross the call deadline
    - Sleeping goes through ``await_cancellable`` so a cancelled token aborts
      the wait immediately
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...core.exceptions import GitHubError, ResultNotReady
from ...core.response import ResponseEnvelope
from ..cancellation import CancellationToken, await_cancellable

if TYPE_CHECKING:
    from ...core.config import EngineConfig

logger = logging.getLogger(__name__)


@dataclass
class RetryState:
    """Retry bookkeeping for one request chain.

    Attributes:
        attempt_count: Physical attempts issued so far
        last_status_code: Status of the last failed attempt (None for transport errors)
        next_delay: Wait before the next attempt, in seconds
        deadline: Monotonic-clock deadline of the logical call (None = unbounded)
    """

    attempt_count: int = 0
    last_status_code: int | None = None
    next_delay: float = 0.0
    deadline: float | None = None


class RetryPolicy:
    """Decides whether, and how long to wait before, a failed request is retried."""

    def __init__(
        self,
        *,
        max_attempts: int = 4,
        backoff_base: float = 1.0,
        backoff_factor: float = 2.0,
        backoff_max: float = 60.0,
        result_not_ready_delay: float = 5.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize retry policy.

        Args:
            max_attempts: Maximum physical attempts, the first one included
            backoff_base: Delay before the first retry
            backoff_factor: Multiplier per further retry
            backoff_max: Cap on the exponential backoff
            result_not_ready_delay: Wait hint for 202 "still computing" responses
            sleep: Sleep coroutine (injectable for tests)
            clock: Monotonic clock used for deadlines
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.backoff_base = backoff_base
        self.backoff_factor = backoff_factor
        self.backoff_max = backoff_max
        self.result_not_ready_delay = result_not_ready_delay
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_config(cls, config: EngineConfig, **kwargs) -> RetryPolicy:
        return cls(
            max_attempts=config.max_attempts,
            backoff_base=config.backoff_base,
            backoff_factor=config.backoff_factor,
            backoff_max=config.backoff_max,
            result_not_ready_delay=config.result_not_ready_delay,
            **kwargs,
        )

    def backoff(self, attempt: int) -> float:
        """Exponential backoff after ``attempt`` failed attempts."""
        exponent = max(0, attempt - 1)
        return min(self.backoff_max, self.backoff_base * self.backoff_factor**exponent)

    def compute_delay(self, state: RetryState, failure: GitHubError) -> float:
        """Wait before the next attempt: max(backoff, server hint)."""
        delay = self.backoff(state.attempt_count)
        hint: float | None = getattr(failure, "retry_after", None)
        if isinstance(failure, ResultNotReady):
            hint = max(hint or 0.0, self.result_not_ready_delay)
        if hint is not None:
            delay = max(delay, hint)
        return delay

    async def execute(
        self,
        send: Callable[[], Awaitable[ResponseEnvelope]],
        *,
        deadline: float | None = None,
        cancel_token: CancellationToken | None = None,
        on_retry: Callable[[RetryState, GitHubError], None] | None = None,
        description: str = "",
    ) -> ResponseEnvelope:
        """Run ``send`` until it succeeds or the failure must be surfaced.

        Raises:
            GitHubError: The non-retryable failure, or the last retryable one
                once attempts or the deadline are exhausted
            Cancelled: If ``cancel_token`` fires during a request or a wait
        """
        state = RetryState(deadline=deadline)

        while True:
            state.attempt_count += 1
            try:
                return await send()
            except GitHubError as exc:
                if not exc.retryable:
                    raise
                state.last_status_code = getattr(exc, "status_code", None)

                if state.attempt_count >= self.max_attempts:
                    logger.warning(
                        f"Giving up on {description or 'request'} after "
                        f"{state.attempt_count} attempts: {type(exc).__name__}"
                    )
                    raise

                delay = self.compute_delay(state, exc)
                if deadline is not None and self._clock() + delay >= deadline:
                    logger.warning(
                        f"Not retrying {description or 'request'}: a {delay:.1f}s wait "
                        f"would exceed the call deadline"
                    )
                    raise

                state.next_delay = delay
                logger.warning(
                    "retry_scheduled",
                    extra={
                        "description": description,
                        "attempt": state.attempt_count,
                        "max_attempts": self.max_attempts,
                        "status_code": state.last_status_code,
                        "error_type": type(exc).__name__,
                        "delay_s": delay,
                    },
                )
                if on_retry is not None:
                    on_retry(state, exc)

            await await_cancellable(self._sleep(state.next_delay), cancel_token)
