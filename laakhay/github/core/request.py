"""Request models for the REST invocation engine.

Architecture:
    A resource wrapper describes one logical call as a ``RequestSpec``. The
    engine resolves the credential for the call and turns the ``RequestSpec`` into one
    or more ``PhysicalRequest`` objects (one per attempt and per page).

Design Decisions:
    - Frozen dataclasses: a spec is built fresh per call and never mutated
    - Read-only mappings: header and telemetry bags are wrapped in
      ``MappingProxyType`` so a caller cannot change them mid-call
    - Page cursors replace ``uri_fragment`` through ``with_cursor`` instead of
      a separate URL field, so retries and pages share one code path
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .enums import HttpMethod

if TYPE_CHECKING:
    from ..runtime.pagination.definitions import PageCursor


@dataclass(frozen=True)
class RequestSpec:
    """Immutable description of one logical REST call.

    Attributes:
        uri_fragment: Path and query (already escaped), or an absolute URL
        method: HTTP method
        body: Optional payload; mappings/lists become JSON, str is UTF-8
        accept: Accept media type (engine default when None)
        extra_headers: Additional request headers
        access_token: Explicit credential override for this call
        description: Human-readable label used for progress and logs
        expect_multiple_pages: Follow ``Link: rel="next"`` and concatenate pages
        extended_result: Return status and headers alongside the body
        content_type: Content-Type for raw ``bytes`` bodies
        host: Per-call API host override
        telemetry_event_name: Event name (defaults to the description)
        telemetry_properties: Caller-scrubbed telemetry properties
        telemetry_exception_bucket: Stable bucket name for failure grouping
    """

    uri_fragment: str
    method: HttpMethod = HttpMethod.GET
    body: Any = None
    accept: str | None = None
    extra_headers: Mapping[str, str] = field(default_factory=dict)
    access_token: str | None = field(default=None, repr=False)
    description: str = ""
    expect_multiple_pages: bool = False
    extended_result: bool = False
    content_type: str | None = None
    host: str | None = None
    telemetry_event_name: str | None = None
    telemetry_properties: Mapping[str, str] = field(default_factory=dict)
    telemetry_exception_bucket: str | None = None

    def __post_init__(self) -> None:
        if not self.uri_fragment:
            raise ValueError("uri_fragment must not be empty")
        if not isinstance(self.method, HttpMethod):
            object.__setattr__(self, "method", HttpMethod(str(self.method).upper()))
        object.__setattr__(self, "extra_headers", MappingProxyType(dict(self.extra_headers)))
        object.__setattr__(
            self, "telemetry_properties", MappingProxyType(dict(self.telemetry_properties))
        )

    @property
    def is_absolute(self) -> bool:
        """Whether ``uri_fragment`` is already a full URL."""
        return self.uri_fragment.startswith(("http://", "https://"))

    @property
    def event_name(self) -> str:
        """Name under which telemetry records this call."""
        return self.telemetry_event_name or self.description or self.method.value

    def with_cursor(self, cursor: PageCursor) -> RequestSpec:
        """Return a copy of this spec that requests the page behind ``cursor``."""
        return replace(self, uri_fragment=cursor.url)


@dataclass(frozen=True)
class PhysicalRequest:
    """A single fully-resolved HTTP request.

    Attributes:
        method: HTTP method
        url: Absolute URL
        headers: Final request headers (including Authorization when present)
        data: Encoded body, or None
    """

    method: HttpMethod
    url: str
    headers: Mapping[str, str] = field(default_factory=dict, repr=False)
    data: bytes | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
