"""Background execution of long-running calls.

Architecture:
    ``BackgroundRunner.run`` is the single entry point; it delegates to one of
    two interchangeable ``SchedulingStrategy`` implementations:
    - InlineStrategy: awaits the work directly, no progress reporting
    - BackgroundTaskStrategy: runs the work in its own task while the caller
      reports elapsed time at a fixed interval

    Both strategies return the work's value or raise its failure unchanged.
    Cancelling the awaiting caller cancels the work task, which aborts the
    in-flight request.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from time import perf_counter
from typing import Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ProgressUpdate:
    """Progress report for a call running in the background."""

    description: str
    elapsed_s: float


ProgressReporter = Callable[[ProgressUpdate], None]


def log_progress(update: ProgressUpdate) -> None:
    """Default reporter: one INFO line per update."""
    logger.info(f"Executing: {update.description or 'request'} ({update.elapsed_s:.0f}s elapsed)")


class SchedulingStrategy(Protocol):
    """Runs a unit of work and returns its result."""

    async def run(self, work: Callable[[], Awaitable[T]], *, description: str) -> T:
        ...


class InlineStrategy:
    """Runs the work on the calling task."""

    async def run(self, work: Callable[[], Awaitable[T]], *, description: str) -> T:
        return await work()


class BackgroundTaskStrategy:
    """Runs the work in a separate task and reports progress meanwhile."""

    def __init__(
        self, *, interval: float = 1.0, reporter: ProgressReporter | None = None
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self._interval = interval
        self._reporter = reporter or log_progress

    async def run(self, work: Callable[[], Awaitable[T]], *, description: str) -> T:
        started = perf_counter()
        task = asyncio.create_task(work())
        try:
            while True:
                done, _ = await asyncio.wait({task}, timeout=self._interval)
                if done:
                    return task.result()
                self._report(ProgressUpdate(description, perf_counter() - started))
        finally:
            if not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass

    def _report(self, update: ProgressUpdate) -> None:
        try:
            self._reporter(update)
        except Exception as e:
            logger.debug(f"Progress reporter failed: {e}")


class BackgroundRunner:
    """Chooses between inline and background execution per call."""

    def __init__(
        self,
        *,
        inline: SchedulingStrategy | None = None,
        background: SchedulingStrategy | None = None,
    ) -> None:
        self._inline = inline or InlineStrategy()
        self._background = background or BackgroundTaskStrategy()

    @classmethod
    def with_progress(
        cls, *, interval: float = 1.0, reporter: ProgressReporter | None = None
    ) -> BackgroundRunner:
        return cls(background=BackgroundTaskStrategy(interval=interval, reporter=reporter))

    async def run(
        self,
        work: Callable[[], Awaitable[T]],
        *,
        no_status: bool = False,
        description: str = "",
    ) -> T:
        """Run ``work`` inline when ``no_status`` is set, else in the background."""
        strategy = self._inline if no_status else self._background
        return await strategy.run(work, description=description)
