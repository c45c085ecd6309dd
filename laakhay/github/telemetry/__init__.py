"""Per-call telemetry."""

from .emitter import (
    InMemoryTelemetrySink,
    LoggingTelemetrySink,
    TelemetryEmitter,
    TelemetrySink,
)
from .events import CallMetrics, TelemetryEvent

__all__ = [
    "CallMetrics",
    "InMemoryTelemetrySink",
    "LoggingTelemetrySink",
    "TelemetryEmitter",
    "TelemetryEvent",
    "TelemetrySink",
]
