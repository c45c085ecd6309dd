"""Telemetry emission.

The emitter fans each event out to its sinks. Recording is fire-and-forget:
a failing sink is logged and skipped, it never fails or delays the call that
produced the event.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .events import TelemetryEvent

logger = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Protocol for telemetry backends."""

    def emit(self, event: TelemetryEvent) -> None:
        """Deliver one event."""
        ...


class LoggingTelemetrySink:
    """Writes each event as a structured log record."""

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level

    def emit(self, event: TelemetryEvent) -> None:
        logger.log(
            self._level,
            "rest_invocation",
            extra={
                "event_name": event.event_name,
                "outcome": event.outcome.value,
                "duration_s": round(event.duration_s, 3),
                "error_type": event.error_type,
                "error_bucket": event.error_bucket,
                "status_code": event.status_code,
                "physical_requests": event.physical_requests,
                "retries": event.retries,
                "pages": event.pages,
                "properties": dict(event.properties),
            },
        )


class InMemoryTelemetrySink:
    """Keeps events in a list."""

    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def emit(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()


class TelemetryEmitter:
    """Records one event per logical call to every registered sink."""

    def __init__(self, sinks: list[TelemetrySink] | None = None) -> None:
        self._sinks: list[TelemetrySink] = (
            list(sinks) if sinks is not None else [LoggingTelemetrySink()]
        )

    def add_sink(self, sink: TelemetrySink) -> None:
        self._sinks.append(sink)
        logger.debug(f"Added telemetry sink: {sink.__class__.__name__}")

    def remove_sink(self, sink: TelemetrySink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def record(self, event: TelemetryEvent) -> None:
        for sink in self._sinks:
            try:
                sink.emit(event)
            except Exception as e:
                logger.warning(
                    f"Telemetry sink {sink.__class__.__name__} failed: {e}", exc_info=True
                )
