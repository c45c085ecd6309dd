"""REST invocation engine.

``RestRunner`` is the single entry point resource wrappers delegate to. One
``invoke`` is one logical call:

    resolve credential -> build request -> send (retried) -> paginate
    -> record one telemetry event -> return body / ExtendedResult

optionally executed in the background with progress reporting.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from time import perf_counter
from typing import Any

from ...auth.credentials import Authenticator, Credential
from ...core.config import DefaultsProvider, EngineConfig, get_process_defaults
from ...core.enums import HttpMethod, Outcome
from ...core.exceptions import Cancelled, GitHubError, PaginationAborted, TransportError
from ...core.request import RequestSpec
from ...core.response import ExtendedResult, ResponseEnvelope, RestResult
from ...telemetry.emitter import TelemetryEmitter
from ...telemetry.events import CallMetrics, TelemetryEvent
from ..background import BackgroundRunner
from ..cancellation import CancellationToken, await_cancellable
from ..pagination.executors import Paginator
from ..retry.budget import RateLimitBudget
from ..retry.policy import RetryPolicy, RetryState
from .executor import Executor
from .http_client import HTTPClient
from .request_builder import RequestBuilder

logger = logging.getLogger(__name__)


class RestRunner:
    """Shared REST invocation engine."""

    def __init__(
        self,
        client: HTTPClient | None = None,
        *,
        config: EngineConfig | None = None,
        defaults: DefaultsProvider | None = None,
        telemetry: TelemetryEmitter | None = None,
        retry_policy: RetryPolicy | None = None,
        background: BackgroundRunner | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the engine.

        Args:
            client: HTTP client (a new one is created when omitted)
            config: Engine settings (process defaults when omitted)
            defaults: Source of the default token and settings
            telemetry: Telemetry emitter (logs events when omitted)
            retry_policy: Retry policy (built from config when omitted)
            background: Background runner (built from config when omitted)
            clock: Monotonic clock for the call deadline
        """
        defaults = defaults or get_process_defaults()
        self._config = config or defaults.default_config()
        self._client = client or HTTPClient(timeout=self._config.request_timeout)
        self._budget = RateLimitBudget()
        self._client.add_response_hook(self._budget)
        self._authenticator = Authenticator(defaults)
        self._builder = RequestBuilder(self._config)
        self._executor = Executor(self._client)
        self._retry = retry_policy or RetryPolicy.from_config(self._config, clock=clock)
        self._telemetry = telemetry or TelemetryEmitter()
        self._background = background or BackgroundRunner.with_progress(
            interval=self._config.progress_interval
        )
        self._clock = clock

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def rate_limit(self) -> RateLimitBudget:
        """Last rate-limit values seen by this engine (informational)."""
        return self._budget

    async def invoke(
        self,
        spec: RequestSpec,
        *,
        no_status: bool | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> Any:
        """Execute one logical call.

        Args:
            spec: Request description
            no_status: Run inline without progress reporting (config default when None)
            cancel_token: Token that aborts the call when cancelled

        Returns:
            Parsed body; the concatenated item list for paginated calls; an
            ``ExtendedResult`` when ``spec.extended_result`` is set

        Raises:
            GitHubError: The typed failure of the call
        """
        if no_status is None:
            no_status = self._config.default_no_status

        metrics = CallMetrics()
        started = perf_counter()
        outcome = Outcome.FAILURE
        error: BaseException | None = None
        try:
            result = await self._background.run(
                lambda: self._execute(spec, metrics, cancel_token),
                no_status=no_status,
                description=spec.description,
            )
            outcome = Outcome.SUCCESS
            return result
        except Cancelled as exc:
            outcome = Outcome.CANCELLED
            error = exc
            raise
        except asyncio.CancelledError:
            outcome = Outcome.CANCELLED
            raise
        except Exception as exc:
            error = exc
            raise
        finally:
            self._record(spec, outcome, perf_counter() - started, metrics, error)

    async def invoke_result(
        self,
        spec: RequestSpec,
        *,
        no_status: bool | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> RestResult[Any]:
        """Like ``invoke`` but returns failures as an explicit ``RestResult``."""
        try:
            value = await self.invoke(spec, no_status=no_status, cancel_token=cancel_token)
        except GitHubError as exc:
            return RestResult(error=exc)
        return RestResult(value=value)

    async def request(
        self,
        uri_fragment: str,
        *,
        method: HttpMethod | str = HttpMethod.GET,
        no_status: bool | None = None,
        cancel_token: CancellationToken | None = None,
        **spec_fields: Any,
    ) -> Any:
        """Build a ``RequestSpec`` from keyword arguments and invoke it."""
        spec = RequestSpec(uri_fragment=uri_fragment, method=method, **spec_fields)
        return await self.invoke(spec, no_status=no_status, cancel_token=cancel_token)

    async def _execute(
        self,
        spec: RequestSpec,
        metrics: CallMetrics,
        cancel_token: CancellationToken | None,
    ) -> Any:
        credential = self._authenticator.resolve(spec.access_token)
        deadline = (
            self._clock() + self._config.call_timeout if self._config.call_timeout else None
        )

        async def fetch(page_spec: RequestSpec) -> ResponseEnvelope:
            return await self._fetch(page_spec, credential, deadline, metrics, cancel_token)

        if spec.expect_multiple_pages:
            paginator = Paginator(
                fetch, self._builder.resolve_url, max_pages=self._config.max_pages
            )
            collected = await paginator.collect_all(spec)
            metrics.pages = collected.pages_used
            if spec.extended_result and collected.last_envelope is not None:
                return ExtendedResult.from_envelope(
                    collected.last_envelope, body=collected.items, pages=collected.pages_used
                )
            return collected.items

        envelope = await fetch(spec)
        metrics.pages = 1
        if spec.extended_result:
            return ExtendedResult.from_envelope(envelope)
        return envelope.body

    async def _fetch(
        self,
        spec: RequestSpec,
        credential: Credential,
        deadline: float | None,
        metrics: CallMetrics,
        cancel_token: CancellationToken | None,
    ) -> ResponseEnvelope:
        request = self._builder.build(spec, credential)

        async def send() -> ResponseEnvelope:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            timeout = self._remaining_timeout(deadline, request.method.value, request.url)
            metrics.physical_requests += 1
            return await await_cancellable(
                self._executor.send(request, timeout=timeout), cancel_token
            )

        def on_retry(state: RetryState, failure: GitHubError) -> None:
            metrics.retries += 1

        return await self._retry.execute(
            send,
            deadline=deadline,
            cancel_token=cancel_token,
            on_retry=on_retry,
            description=spec.description or request.url,
        )

    def _remaining_timeout(self, deadline: float | None, method: str, url: str) -> float:
        if deadline is None:
            return self._config.request_timeout
        remaining = deadline - self._clock()
        if remaining <= 0:
            raise TransportError("Call deadline exceeded", method=method, url=url)
        return min(self._config.request_timeout, remaining)

    def _record(
        self,
        spec: RequestSpec,
        outcome: Outcome,
        duration_s: float,
        metrics: CallMetrics,
        error: BaseException | None,
    ) -> None:
        status_source = error
        if isinstance(error, PaginationAborted) and error.cause is not None:
            status_source = error.cause
        self._telemetry.record(
            TelemetryEvent(
                event_name=spec.event_name,
                outcome=outcome,
                duration_s=duration_s,
                properties=spec.telemetry_properties,
                error_type=type(error).__name__ if error is not None else None,
                error_bucket=spec.telemetry_exception_bucket if error is not None else None,
                status_code=getattr(status_source, "status_code", None),
                physical_requests=metrics.physical_requests,
                retries=metrics.retries,
                pages=metrics.pages,
            )
        )

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> RestRunner:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
