"""Async HTTP client wrapper."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from ...core.exceptions import TransportError
from ...core.request import PhysicalRequest
from ...core.response import ResponseEnvelope

logger = logging.getLogger(__name__)

ResponseHook = Callable[[ResponseEnvelope], Awaitable[None] | None]


def decode_body(raw: bytes, content_type: str | None) -> Any:
    """Decode a response payload: JSON by content type, else text, else bytes.

    A body that claims JSON but does not parse is returned as text (or bytes)
    so the status code still decides how the response is classified.
    """
    if not raw:
        return None
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    if mime == "application/json" or mime.endswith("+json"):
        try:
            return json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug(f"Undecodable JSON payload ({len(raw)} bytes), keeping it as text")
            mime = "text/plain"
    if mime.startswith("text/") or mime in ("", "application/xml"):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return raw
    return raw


class HTTPClient:
    """Async HTTP client wrapper.

    Owns the ``aiohttp`` session and performs exactly one exchange per
    ``request`` call. It does not interpret status codes; network failures
    are translated into ``TransportError``.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a callable invoked with every received envelope."""
        self._response_hooks.append(hook)

    async def request(
        self, request: PhysicalRequest, *, timeout: float | None = None
    ) -> ResponseEnvelope:
        """Perform one physical request.

        Args:
            request: Fully-resolved request
            timeout: Total timeout for this exchange (client default when None)

        Raises:
            TransportError: On timeouts, connection and payload errors
        """
        client_timeout = aiohttp.ClientTimeout(total=timeout) if timeout else self.timeout
        method = request.method.value
        try:
            async with self.session.request(
                method,
                request.url,
                headers=dict(request.headers),
                data=request.data,
                timeout=client_timeout,
            ) as response:
                raw = await response.read()
                envelope = ResponseEnvelope(
                    status_code=response.status,
                    headers=response.headers,
                    body=decode_body(raw, response.headers.get("Content-Type")),
                    url=str(response.url),
                )
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request timed out: {method} {request.url}", method=method, url=request.url
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(
                f"{type(e).__name__}: {e}", method=method, url=request.url
            ) from e

        logger.debug(
            f"{method} {request.url} -> {envelope.status_code} "
            f"(request_id={envelope.request_id})"
        )
        await self._run_hooks(envelope)
        return envelope

    async def _run_hooks(self, envelope: ResponseEnvelope) -> None:
        for hook in self._response_hooks:
            try:
                result = hook(envelope)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.warning(f"Response hook {hook!r} failed: {e}")

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
