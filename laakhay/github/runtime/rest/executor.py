"""Executor: performs one physical request and classifies the HTTP outcome.

Status mapping:
    2xx, 304          -> envelope (202 on GET -> ResultNotReady)
    401               -> AuthFailure
    403               -> RateLimited if it is a rate-limit signal, else AuthFailure
    404               -> NotFound
    422               -> ValidationFailure (server field errors attached)
    429               -> RateLimited
    5xx               -> ServerError
    other             -> HttpFailure
    network failure   -> TransportError (raised by the HTTP client)
"""

from __future__ import annotations

from typing import Any

from ...core.enums import HttpMethod
from ...core.exceptions import (
    AuthFailure,
    HttpFailure,
    NotFound,
    RateLimited,
    ResultNotReady,
    ServerError,
    ValidationFailure,
)
from ...core.request import PhysicalRequest
from ...core.response import ResponseEnvelope
from ..retry.hints import is_rate_limit_signal, retry_after_hint
from .http_client import HTTPClient


def _server_message(body: Any, status_code: int) -> str:
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    if isinstance(body, str) and body.strip():
        return body.strip()[:200]
    return f"HTTP {status_code}"


def raise_for_status(envelope: ResponseEnvelope, request: PhysicalRequest) -> None:
    """Raise the typed failure for ``envelope``, or return if it is a success."""
    status = envelope.status_code
    body = envelope.body

    if status == 202 and request.method is HttpMethod.GET:
        raise ResultNotReady(
            "Result is still being computed",
            method=request.method.value,
            url=request.url,
            request_id=envelope.request_id,
            retry_after=retry_after_hint(envelope.headers),
        )
    if 200 <= status < 300 or status == 304:
        return

    context: dict[str, Any] = {
        "status_code": status,
        "method": request.method.value,
        "url": request.url,
        "request_id": envelope.request_id,
        "documentation_url": body.get("documentation_url") if isinstance(body, dict) else None,
        "body": body,
        "retry_after": retry_after_hint(envelope.headers),
    }
    message = _server_message(body, status)

    if status in (403, 429) and is_rate_limit_signal(status, envelope.headers, body):
        raise RateLimited(message, **context)
    if status in (401, 403):
        raise AuthFailure(message, **context)
    if status == 404:
        raise NotFound(message, **context)
    if status == 422:
        errors = body.get("errors") if isinstance(body, dict) else None
        if not isinstance(errors, list):
            errors = None
        raise ValidationFailure(message, errors=errors, **context)
    if status >= 500:
        raise ServerError(message, **context)
    raise HttpFailure(message, **context)


class Executor:
    """Sends physical requests and translates the outcome."""

    def __init__(self, client: HTTPClient) -> None:
        self._client = client

    async def send(
        self, request: PhysicalRequest, *, timeout: float | None = None
    ) -> ResponseEnvelope:
        envelope = await self._client.request(request, timeout=timeout)
        if envelope.status_code in (204, 304):
            envelope.body = None
        raise_for_status(envelope, request)
        return envelope
