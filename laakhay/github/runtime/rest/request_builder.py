"""Turns a ``RequestSpec`` and a resolved credential into a ``PhysicalRequest``."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from ...auth.credentials import Credential
from ...core.config import EngineConfig
from ...core.exceptions import ConfigurationError
from ...core.request import PhysicalRequest, RequestSpec

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
BINARY_CONTENT_TYPE = "application/octet-stream"


class RequestBuilder:
    """Pure transform from request description to wire request."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()

    def build(self, spec: RequestSpec, credential: Credential) -> PhysicalRequest:
        headers: dict[str, str] = {
            "Accept": spec.accept or self._config.default_accept,
            "User-Agent": self._config.user_agent,
        }
        if self._config.api_version:
            headers["X-GitHub-Api-Version"] = self._config.api_version

        data: bytes | None = None
        if spec.body is not None and spec.method.sends_body:
            data, content_type = self._encode_body(spec.body, spec.content_type)
            headers["Content-Type"] = content_type

        for name, value in spec.extra_headers.items():
            if name.lower() == "authorization":
                continue
            headers[name] = value

        authorization = credential.authorization_header()
        if authorization is not None:
            headers["Authorization"] = authorization

        return PhysicalRequest(
            method=spec.method,
            url=self.resolve_url(spec),
            headers=headers,
            data=data,
        )

    def resolve_url(self, spec: RequestSpec) -> str:
        """Host + fragment; absolute fragments (page cursors) pass through."""
        if spec.is_absolute:
            return spec.uri_fragment
        host = (spec.host or self._config.api_host).rstrip("/")
        if not host.startswith(("http://", "https://")):
            raise ConfigurationError(f"API host must be an http(s) URL, got {host!r}")
        fragment = spec.uri_fragment
        if not fragment.startswith("/"):
            fragment = f"/{fragment}"
        return f"{host}{fragment}"

    @staticmethod
    def _encode_body(body: Any, content_type: str | None) -> tuple[bytes, str]:
        if isinstance(body, bytes | bytearray):
            return bytes(body), content_type or BINARY_CONTENT_TYPE
        if isinstance(body, str):
            return body.encode("utf-8"), content_type or TEXT_CONTENT_TYPE
        if isinstance(body, Mapping | list | tuple):
            payload = json.dumps(body, separators=(",", ":"), ensure_ascii=False)
            return payload.encode("utf-8"), content_type or JSON_CONTENT_TYPE
        raise TypeError(f"Unsupported request body type: {type(body).__name__}")
