"""Unit tests for inline and background execution."""

import asyncio

import pytest

from laakhay.github.runtime.background import (
    BackgroundRunner,
    BackgroundTaskStrategy,
    InlineStrategy,
    ProgressUpdate,
)


async def _value(value, delay=0.0):
    await asyncio.sleep(delay)
    return value


class TestInlineStrategy:
    @pytest.mark.asyncio
    async def test_returns_value(self):
        assert await InlineStrategy().run(lambda: _value(42), description="x") == 42


class TestBackgroundTaskStrategy:
    @pytest.mark.asyncio
    async def test_returns_value(self):
        strategy = BackgroundTaskStrategy(interval=0.01)
        assert await strategy.run(lambda: _value("done"), description="x") == "done"

    @pytest.mark.asyncio
    async def test_reports_progress_while_running(self):
        updates: list[ProgressUpdate] = []
        strategy = BackgroundTaskStrategy(interval=0.01, reporter=updates.append)
        await strategy.run(lambda: _value(None, 0.08), description="Fetching commits")
        assert updates
        assert all(u.description == "Fetching commits" for u in updates)
        assert updates[-1].elapsed_s >= updates[0].elapsed_s

    @pytest.mark.asyncio
    async def test_failure_is_raised_unchanged(self):
        async def fail():
            raise KeyError("boom")

        with pytest.raises(KeyError):
            await BackgroundTaskStrategy(interval=0.01).run(fail, description="x")

    @pytest.mark.asyncio
    async def test_broken_reporter_is_ignored(self):
        def reporter(update):
            raise RuntimeError("display gone")

        strategy = BackgroundTaskStrategy(interval=0.01, reporter=reporter)
        assert await strategy.run(lambda: _value(1, 0.05), description="x") == 1

    @pytest.mark.asyncio
    async def test_cancelling_caller_cancels_work(self):
        started = asyncio.Event()
        work_cancelled = asyncio.Event()

        async def work():
            started.set()
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                work_cancelled.set()
                raise

        strategy = BackgroundTaskStrategy(interval=0.01)
        caller = asyncio.ensure_future(strategy.run(work, description="x"))
        await started.wait()
        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller
        assert work_cancelled.is_set()

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            BackgroundTaskStrategy(interval=0)


class RecordingStrategy:
    def __init__(self) -> None:
        self.descriptions: list[str] = []

    async def run(self, work, *, description):
        self.descriptions.append(description)
        return await work()


class TestBackgroundRunner:
    @pytest.mark.asyncio
    async def test_no_status_runs_inline(self):
        inline, background = RecordingStrategy(), RecordingStrategy()
        runner = BackgroundRunner(inline=inline, background=background)
        assert await runner.run(lambda: _value(1), no_status=True, description="a") == 1
        assert inline.descriptions == ["a"]
        assert background.descriptions == []

    @pytest.mark.asyncio
    async def test_default_runs_in_background(self):
        inline, background = RecordingStrategy(), RecordingStrategy()
        runner = BackgroundRunner(inline=inline, background=background)
        assert await runner.run(lambda: _value(2), description="b") == 2
        assert background.descriptions == ["b"]

    @pytest.mark.asyncio
    async def test_modes_agree(self):
        runner = BackgroundRunner.with_progress(interval=0.01)
        inline = await runner.run(lambda: _value([1, 2]), no_status=True)
        background = await runner.run(lambda: _value([1, 2]), no_status=False)
        assert inline == background
