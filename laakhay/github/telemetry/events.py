"""Telemetry event model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..core.enums import Outcome


@dataclass
class CallMetrics:
    """Physical-request counters for one logical call."""

    physical_requests: int = 0
    retries: int = 0
    pages: int = 0


@dataclass(frozen=True)
class TelemetryEvent:
    """One event per logical call.

    Attributes:
        event_name: Name of the operation
        outcome: success, failure or cancelled
        duration_s: Wall-clock duration of the logical call
        properties: Caller-scrubbed properties
        error_type: Exception class name on failure
        error_bucket: Caller-chosen failure bucket
        status_code: HTTP status of the failure, when there is one
        physical_requests: Number of HTTP exchanges issued
        retries: Number of retried attempts
        pages: Number of pages collected
    """

    event_name: str
    outcome: Outcome
    duration_s: float
    properties: Mapping[str, str] = field(default_factory=dict)
    error_type: str | None = None
    error_bucket: str | None = None
    status_code: int | None = None
    physical_requests: int = 0
    retries: int = 0
    pages: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
