"""Pagination across multi-page collections.

Architecture:
    - definitions.py: Cursor, page and result structures, item extraction
    - executors.py: Paginator (lazy page iteration and all-or-nothing collection)
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .definitions import (
    Page,
    PageCursor,
    PaginationResult,
    extract_items,
    next_cursor,
    origin_of,
)
from .executors import Paginator

__all__ = [
    "Page",
    "PageCursor",
    "PaginationResult",
    "Paginator",
    "extract_items",
    "next_cursor",
    "origin_of",
]
