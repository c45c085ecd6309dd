"""Shared fakes for engine unit tests."""

from __future__ import annotations

import inspect
from typing import Any

import pytest

from laakhay.github.core import EngineConfig, ProcessDefaults
from laakhay.github.core.request import PhysicalRequest
from laakhay.github.core.response import ResponseEnvelope
from laakhay.github.runtime.background import BackgroundRunner
from laakhay.github.runtime.rest.runner import RestRunner
from laakhay.github.runtime.retry.policy import RetryPolicy
from laakhay.github.telemetry import InMemoryTelemetrySink, TelemetryEmitter

API = "https://api.github.com"


def make_envelope(
    status: int = 200,
    body: Any = None,
    headers: dict[str, str] | None = None,
    next_url: str | None = None,
) -> ResponseEnvelope:
    """Build a response envelope; ``next_url`` adds a ``Link: rel="next"`` header."""
    headers = dict(headers or {})
    if next_url:
        headers["Link"] = f'<{next_url}>; rel="next", <{API}/last>; rel="last"'
    return ResponseEnvelope(status_code=status, headers=headers, body=body)


class ScriptedClient:
    """Stands in for HTTPClient; replays a script of envelopes or exceptions.

    Script items may also be callables taking the request (sync or async),
    which lets a test block or inspect individual exchanges.
    """

    def __init__(self, script: list[Any]) -> None:
        self.script = list(script)
        self.requests: list[PhysicalRequest] = []
        self.timeouts: list[float | None] = []
        self.closed = False
        self._hooks: list[Any] = []

    def add_response_hook(self, hook: Any) -> None:
        self._hooks.append(hook)

    async def request(
        self, request: PhysicalRequest, *, timeout: float | None = None
    ) -> ResponseEnvelope:
        self.requests.append(request)
        self.timeouts.append(timeout)
        if not self.script:
            raise AssertionError(f"Unexpected request: {request.method.value} {request.url}")
        item = self.script.pop(0)
        if callable(item) and not isinstance(item, ResponseEnvelope):
            item = item(request)
            if inspect.isawaitable(item):
                item = await item
        if isinstance(item, BaseException):
            raise item
        for hook in self._hooks:
            hook(item)
        return item

    async def close(self) -> None:
        self.closed = True


class SleepRecorder:
    """Records requested backoff delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sink() -> InMemoryTelemetrySink:
    return InMemoryTelemetrySink()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def defaults() -> ProcessDefaults:
    return ProcessDefaults()


@pytest.fixture
def make_runner(sink, sleeper, defaults):
    """Factory for a RestRunner wired to a scripted client."""

    def factory(script: list[Any], **config_overrides: Any) -> tuple[RestRunner, ScriptedClient]:
        config = EngineConfig(**config_overrides)
        client = ScriptedClient(script)
        runner = RestRunner(
            client,  # type: ignore[arg-type]
            config=config,
            defaults=defaults,
            telemetry=TelemetryEmitter([sink]),
            retry_policy=RetryPolicy.from_config(config, sleep=sleeper),
            background=BackgroundRunner.with_progress(interval=config.progress_interval),
        )
        return runner, client

    return factory


@pytest.fixture
def envelope():
    """The ``make_envelope`` helper."""
    return make_envelope


@pytest.fixture
def scripted():
    """The ``ScriptedClient`` class."""
    return ScriptedClient
