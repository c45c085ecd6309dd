"""Unit tests for the exception hierarchy."""

import pytest

from laakhay.github.core.exceptions import (
    AuthFailure,
    Cancelled,
    ConfigurationError,
    GitHubError,
    HttpFailure,
    NotFound,
    PaginationAborted,
    RateLimited,
    ResultNotReady,
    ServerError,
    TransportError,
    ValidationFailure,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [
            ConfigurationError,
            HttpFailure,
            AuthFailure,
            NotFound,
            ValidationFailure,
            RateLimited,
            ServerError,
            ResultNotReady,
            TransportError,
            Cancelled,
            PaginationAborted,
        ],
    )
    def test_all_errors_derive_from_github_error(self, exc_type):
        assert issubclass(exc_type, GitHubError)

    def test_http_failures_share_a_base(self):
        for exc_type in (AuthFailure, NotFound, ValidationFailure, RateLimited, ServerError):
            assert issubclass(exc_type, HttpFailure)

    def test_transport_and_cancelled_are_not_http_failures(self):
        assert not issubclass(TransportError, HttpFailure)
        assert not issubclass(Cancelled, HttpFailure)
        assert not issubclass(Cancelled, TransportError)


class TestRetryability:
    def test_transient_failures_are_retryable(self):
        assert RateLimited("slow down").retryable
        assert ServerError("boom", 502).retryable
        assert TransportError("reset").retryable
        assert ResultNotReady("computing").retryable

    def test_permanent_failures_are_not_retryable(self):
        assert not AuthFailure("bad credentials", 401).retryable
        assert not NotFound("missing", 404).retryable
        assert not ValidationFailure("invalid").retryable
        assert not HttpFailure("conflict", 409).retryable
        assert not Cancelled("stop").retryable
        assert not PaginationAborted("aborted").retryable


class TestHttpFailure:
    def test_carries_diagnostics(self):
        exc = HttpFailure(
            "Conflict",
            409,
            method="PUT",
            url="https://api.github.com/repos/o/r/merge",
            request_id="ABCD:1234",
            documentation_url="https://docs.github.com/rest",
            body={"message": "Conflict"},
        )
        assert exc.status_code == 409
        assert exc.request_id == "ABCD:1234"
        assert exc.body == {"message": "Conflict"}

    def test_str_includes_context(self):
        exc = NotFound(
            "Not Found",
            404,
            method="GET",
            url="https://api.github.com/repos/o/missing",
            request_id="ABCD:1234",
        )
        text = str(exc)
        assert text.startswith("Not Found")
        assert "status=404" in text
        assert "GET https://api.github.com/repos/o/missing" in text
        assert "request_id=ABCD:1234" in text

    def test_str_without_context_is_the_message(self):
        assert str(HttpFailure("plain")) == "plain"


class TestSubclassDefaults:
    def test_validation_failure_defaults(self):
        exc = ValidationFailure(
            "Validation Failed",
            errors=[{"resource": "Issue", "field": "title", "code": "missing_field"}],
        )
        assert exc.status_code == 422
        assert exc.errors[0]["field"] == "title"
        assert ValidationFailure("Validation Failed").errors == []

    def test_rate_limited_defaults(self):
        exc = RateLimited("secondary rate limit", retry_after=60.0)
        assert exc.status_code == 429
        assert exc.retry_after == 60.0
        assert RateLimited("limit", status_code=403).status_code == 403

    def test_result_not_ready_defaults_to_202(self):
        assert ResultNotReady("computing").status_code == 202

    def test_pagination_aborted_keeps_cause(self):
        cause = ServerError("boom", 500)
        exc = PaginationAborted("aborted", cause=cause, pages_fetched=2)
        assert exc.cause is cause
        assert exc.pages_fetched == 2
