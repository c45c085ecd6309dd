"""Core enumerations shared across the engine."""

from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods accepted by the engine."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def sends_body(self) -> bool:
        """Whether a request body is serialized for this method."""
        return self is not HttpMethod.GET


class Outcome(str, Enum):
    """Outcome of a logical call as recorded in telemetry."""

    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"
