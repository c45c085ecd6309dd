"""Structured logging for pagination.

This module provides telemetry hooks for paginated calls, emitting
structured logs for observability.
"""

from __future__ import annotations

import logging

from .definitions import PaginationResult

logger = logging.getLogger(__name__)


def log_page_completed(
    *,
    description: str,
    page_index: int,
    items: int,
    latency_ms: float | None = None,
    request_id: str | None = None,
) -> None:
    """Log completion of a single page.

    Args:
        description: Label of the logical call
        page_index: Zero-based index of the page
        items: Number of items contributed by this page
        latency_ms: Latency including retries, in milliseconds
        request_id: GitHub request id of the page response
    """
    logger.debug(
        "page_completed",
        extra={
            "description": description,
            "page_index": page_index,
            "items": items,
            "latency_ms": latency_ms,
            "request_id": request_id,
        },
    )


def log_pagination_complete(
    *,
    description: str,
    result: PaginationResult,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a paginated call."""
    logger.info(
        "pagination_complete",
        extra={
            "description": description,
            "pages_used": result.pages_used,
            "total_items": result.total_items,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_pagination_error(
    *,
    description: str,
    page_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failure that aborted pagination.

    Args:
        description: Label of the logical call
        page_index: Zero-based index of the page that failed
        error_type: Exception class name
        error_message: Error message
    """
    logger.error(
        "pagination_error",
        extra={
            "description": description,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_cursor_repeated(*, description: str, page_index: int, url: str) -> None:
    """Log a server-returned cursor that was already visited."""
    logger.warning(
        "pagination_cursor_repeated",
        extra={"description": description, "page_index": page_index, "url": url},
    )
