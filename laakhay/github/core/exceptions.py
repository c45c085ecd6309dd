"""Custom exception hierarchy.

Every failure the engine can surface is a subclass of ``GitHubError``. HTTP
failures carry the status code and the diagnostic fields GitHub returns with
an error body, so wrappers can decide whether a failure becomes a raised
error, a ``False`` or an empty collection.
"""

from __future__ import annotations

from typing import Any


class GitHubError(Exception):
    """Base exception for all engine errors."""

    retryable: bool = False


class ConfigurationError(GitHubError):
    """Engine was configured with inconsistent settings."""

    pass


class HttpFailure(GitHubError):
    """Error response returned by the GitHub API.

    ``retry_after`` is the server's wait hint in seconds (``Retry-After`` or
    the rate-limit reset), or None when the response carried no usable hint.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        method: str | None = None,
        url: str | None = None,
        request_id: str | None = None,
        documentation_url: str | None = None,
        body: Any = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url
        self.request_id = request_id
        self.documentation_url = documentation_url
        self.body = body
        self.retry_after = retry_after

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.method and self.url:
            parts.append(f"{self.method} {self.url}")
        if self.request_id:
            parts.append(f"request_id={self.request_id}")
        if self.documentation_url:
            parts.append(f"docs={self.documentation_url}")
        return " | ".join(parts)


class AuthFailure(HttpFailure):
    """Credential rejected (401) or lacking the required scope (403)."""

    pass


class NotFound(HttpFailure):
    """Resource does not exist or is hidden from the caller (404)."""

    pass


class ValidationFailure(HttpFailure):
    """Server rejected the request payload (422).

    ``errors`` holds the field errors reported by the server, e.g.
    ``[{"resource": "Issue", "field": "title", "code": "missing_field"}]``.
    """

    def __init__(
        self, message: str, errors: list[dict[str, Any]] | None = None, **kwargs: Any
    ) -> None:
        kwargs.setdefault("status_code", 422)
        super().__init__(message, **kwargs)
        self.errors = errors or []


class RateLimited(HttpFailure):
    """Primary or secondary rate limit exceeded."""

    retryable = True

    def __init__(self, message: str, retry_after: float | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("status_code", 429)
        super().__init__(message, retry_after=retry_after, **kwargs)


class ServerError(HttpFailure):
    """GitHub returned a 5xx response."""

    retryable = True


class ResultNotReady(HttpFailure):
    """GitHub accepted the request (202) but is still computing the result."""

    retryable = True

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("status_code", 202)
        super().__init__(message, **kwargs)


class TransportError(GitHubError):
    """Network-level failure: timeout, connection reset, malformed payload."""

    retryable = True

    def __init__(self, message: str, *, method: str | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class Cancelled(GitHubError):
    """Caller cancelled the logical call before it completed."""

    pass


class PaginationAborted(GitHubError):
    """A page fetch failed after pagination started.

    Pages collected before the failure are discarded; ``cause`` holds the
    failure that stopped collection (None when pagination stopped on an
    unusable cursor) and ``pages_fetched`` how many pages had completed.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: GitHubError | None = None,
        pages_fetched: int = 0,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.pages_fetched = pages_fetched
