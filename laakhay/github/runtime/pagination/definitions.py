"""Pagination data structures.

This module defines the cursor, page and result types used by the paginator,
and the rules for extracting items and cursors from a response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from ...core.response import ResponseEnvelope


def origin_of(url: str) -> str:
    """Scheme and host of ``url``, lower-cased."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}".lower()


@dataclass(frozen=True)
class PageCursor:
    """Opaque reference to the next page.

    Attributes:
        url: Absolute URL of the ``rel="next"`` link
    """

    url: str

    @property
    def origin(self) -> str:
        return origin_of(self.url)


@dataclass
class Page:
    """One fetched page.

    Attributes:
        index: Zero-based position in the sequence
        envelope: Response the page was read from
        items: Items contributed by this page
    """

    index: int
    envelope: ResponseEnvelope
    items: list[Any] = field(default_factory=list)


@dataclass
class PaginationResult:
    """Result of a complete paginated call.

    Attributes:
        items: Concatenated items of every page, in server order
        pages_used: Number of pages fetched
        last_envelope: Response of the final page
    """

    items: list[Any]
    pages_used: int
    last_envelope: ResponseEnvelope | None = None

    @property
    def total_items(self) -> int:
        return len(self.items)


def extract_items(body: Any) -> list[Any]:
    """Extract the list of items carried by one page body.

    A JSON list is used as is; search responses wrap results in an object
    with an ``items`` list; an empty body contributes nothing; any other
    object is a single item.
    """
    if body is None:
        return []
    if isinstance(body, list):
        return body
    if isinstance(body, dict) and isinstance(body.get("items"), list):
        return body["items"]
    return [body]


def next_cursor(envelope: ResponseEnvelope) -> PageCursor | None:
    """Return the cursor of the next page, or None on the last page."""
    url = envelope.links.get("next")
    if not url:
        return None
    return PageCursor(url=url)

