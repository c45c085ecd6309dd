"""REST runtime abstractions."""

from .executor import Executor, raise_for_status
from .http_client import HTTPClient, decode_body
from .request_builder import RequestBuilder
from .runner import RestRunner

__all__ = [
    "Executor",
    "HTTPClient",
    "RequestBuilder",
    "RestRunner",
    "decode_body",
    "raise_for_status",
]
