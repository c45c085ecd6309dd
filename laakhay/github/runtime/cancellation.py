"""Cooperative cancellation for logical calls.

A ``CancellationToken`` is shared between the interactive host and one or
more calls. Cancelling it aborts the in-flight physical request or pending
backoff sleep of every call awaiting through ``await_cancellable`` and
surfaces ``Cancelled``, which is distinct from ``TransportError``.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable
from typing import TypeVar

from ..core.exceptions import Cancelled

T = TypeVar("T")


class CancellationToken:
    """One-shot cancellation signal."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason = "cancelled by caller"

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        if reason:
            self._reason = reason
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise Cancelled(self._reason)


async def await_cancellable(aw: Awaitable[T], token: CancellationToken | None) -> T:
    """Await ``aw`` unless ``token`` is cancelled first.

    Raises:
        Cancelled: If the token fires before ``aw`` completes; ``aw`` is
            cancelled and awaited before raising.
    """
    if token is None:
        return await aw

    if token.cancelled:
        if inspect.iscoroutine(aw):
            aw.close()
        raise Cancelled(token.reason)
    work = asyncio.ensure_future(aw)
    waiter = asyncio.create_task(token.wait())
    try:
        await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (work, waiter):
            if not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass

    if work.cancelled():
        raise Cancelled(token.reason)
    return work.result()
