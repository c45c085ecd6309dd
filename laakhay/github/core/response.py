"""Response and result models."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from multidict import CIMultiDict, CIMultiDictProxy

from .exceptions import GitHubError

T = TypeVar("T")

_LINK_RE = re.compile(r'<(?P<url>[^>]+)>\s*;\s*rel="(?P<rel>[^"]+)"')


def parse_link_header(value: str | None) -> dict[str, str]:
    """Parse an RFC 8288 ``Link`` header into ``{rel: url}``.

    Examples:
        >>> parse_link_header('<https://api.github.com/x?page=2>; rel="next"')
        {'next': 'https://api.github.com/x?page=2'}
    """
    if not value:
        return {}
    links: dict[str, str] = {}
    for part in value.split(","):
        match = _LINK_RE.search(part)
        if match:
            for rel in match.group("rel").split():
                links.setdefault(rel, match.group("url"))
    return links


@dataclass
class ResponseEnvelope:
    """Raw outcome of one physical request.

    Attributes:
        status_code: HTTP status code
        headers: Response headers (case-insensitive)
        body: Parsed JSON, text, bytes, or None for empty responses
        url: URL the response was received from
        page_index: Zero-based page position when paginated
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    url: str = ""
    page_index: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CIMultiDictProxy):
            self.headers = CIMultiDictProxy(CIMultiDict(self.headers))

    @property
    def request_id(self) -> str | None:
        return self.headers.get("X-GitHub-Request-Id")

    @property
    def links(self) -> dict[str, str]:
        return parse_link_header(self.headers.get("Link"))

    @property
    def oauth_scopes(self) -> list[str]:
        raw = self.headers.get("X-OAuth-Scopes")
        if not raw:
            return []
        return [scope.strip() for scope in raw.split(",") if scope.strip()]


@dataclass(frozen=True)
class ExtendedResult:
    """Body plus transport metadata, returned when ``extended_result`` is set.

    For paginated calls ``body`` is the concatenated item list and the
    status/headers are those of the last page.
    """

    status_code: int
    headers: Mapping[str, str]
    body: Any
    next_link: str | None = None
    request_id: str | None = None
    oauth_scopes: tuple[str, ...] = ()
    pages: int = 1

    @classmethod
    def from_envelope(cls, envelope: ResponseEnvelope, *, body: Any = None, pages: int = 1):
        return cls(
            status_code=envelope.status_code,
            headers=envelope.headers,
            body=envelope.body if body is None else body,
            next_link=envelope.links.get("next"),
            request_id=envelope.request_id,
            oauth_scopes=tuple(envelope.oauth_scopes),
            pages=pages,
        )


@dataclass(frozen=True)
class RestResult(Generic[T]):
    """Explicit success-or-failure value of a logical call.

    Wrappers that treat some failures as a valid answer map them here rather
    than inside the engine, e.g. a permission probe::

        result = await runner.invoke_result(spec)
        has_permission = result.map(lambda _: True).recover(NotFound, False).unwrap()
    """

    value: T | None = None
    error: GitHubError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def map(self, func: Callable[[T], Any]) -> RestResult[Any]:
        if self.error is not None:
            return self
        return RestResult(value=func(self.value))  # type: ignore[arg-type]

    def recover(self, error_type: type[GitHubError], value: Any) -> RestResult[Any]:
        """Turn a failure of ``error_type`` into a successful ``value``."""
        if isinstance(self.error, error_type):
            return RestResult(value=value)
        return self
