"""Unit tests for cooperative cancellation."""

import asyncio

import pytest

from laakhay.github.core.exceptions import Cancelled, TransportError
from laakhay.github.runtime.cancellation import CancellationToken, await_cancellable


class TestCancellationToken:
    def test_initial_state(self):
        token = CancellationToken()
        assert not token.cancelled
        token.raise_if_cancelled()

    def test_cancel_with_reason(self):
        token = CancellationToken()
        token.cancel("user pressed stop")
        assert token.cancelled
        assert token.reason == "user pressed stop"
        with pytest.raises(Cancelled, match="user pressed stop"):
            token.raise_if_cancelled()

    def test_cancelled_is_not_a_transport_error(self):
        assert not issubclass(Cancelled, TransportError)


class TestAwaitCancellable:
    @pytest.mark.asyncio
    async def test_without_token(self):
        assert await await_cancellable(asyncio.sleep(0, result=5), None) == 5

    @pytest.mark.asyncio
    async def test_completes_before_cancel(self):
        token = CancellationToken()
        assert await await_cancellable(asyncio.sleep(0, result="ok"), token) == "ok"
        assert not token.cancelled

    @pytest.mark.asyncio
    async def test_already_cancelled(self):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(Cancelled):
            await await_cancellable(asyncio.sleep(30), token)

    @pytest.mark.asyncio
    async def test_cancel_aborts_pending_work(self):
        token = CancellationToken()
        aborted = asyncio.Event()

        async def slow():
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                aborted.set()
                raise

        async def cancel_soon():
            await asyncio.sleep(0.01)
            token.cancel("stop")

        canceller = asyncio.ensure_future(cancel_soon())
        with pytest.raises(Cancelled, match="stop"):
            await asyncio.wait_for(await_cancellable(slow(), token), timeout=2.0)
        await canceller
        assert aborted.is_set()

    @pytest.mark.asyncio
    async def test_work_failure_propagates(self):
        async def fail():
            raise TransportError("reset")

        with pytest.raises(TransportError):
            await await_cancellable(fail(), CancellationToken())

    @pytest.mark.asyncio
    async def test_one_token_cancels_many_calls(self):
        token = CancellationToken()
        calls = [
            asyncio.ensure_future(await_cancellable(asyncio.sleep(30), token)) for _ in range(3)
        ]
        await asyncio.sleep(0)
        token.cancel()
        results = await asyncio.gather(*calls, return_exceptions=True)
        assert all(isinstance(r, Cancelled) for r in results)
