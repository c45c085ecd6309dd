"""Page collection for multi-page collections.

The paginator follows ``Link: rel="next"`` cursors strictly in sequence (a
cursor is only valid relative to the page that returned it) and concatenates
page items in server order. A paginated call is all-or-nothing: once a page
has been collected, a later failure raises ``PaginationAborted`` and the
collected pages are dropped.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from time import perf_counter

from ...core.exceptions import Cancelled, GitHubError, PaginationAborted
from ...core.request import RequestSpec
from ...core.response import ResponseEnvelope
from .definitions import Page, PaginationResult, extract_items, next_cursor, origin_of
from .telemetry import (
    log_cursor_repeated,
    log_page_completed,
    log_pagination_complete,
    log_pagination_error,
)


class Paginator:
    """Fetches every page of a collection.

    ``fetch_page`` is the retried executor for a single page; ``resolve_url``
    turns a spec into the absolute URL it will request.
    """

    def __init__(
        self,
        fetch_page: Callable[[RequestSpec], Awaitable[ResponseEnvelope]],
        resolve_url: Callable[[RequestSpec], str],
        *,
        max_pages: int | None = None,
    ) -> None:
        """Initialize paginator.

        Args:
            fetch_page: Coroutine fetching one page (retries included)
            resolve_url: Maps a spec to its absolute URL
            max_pages: Abort when a collection has more pages than this
        """
        self._fetch_page = fetch_page
        self._resolve_url = resolve_url
        self._max_pages = max_pages

    async def iter_pages(self, spec: RequestSpec) -> AsyncIterator[Page]:
        """Yield pages lazily, in server order.

        The iterator is finite and not restartable; iterate a fresh call to
        enumerate the collection again.

        Raises:
            GitHubError: Whatever failure the page fetch surfaced
            PaginationAborted: On a cursor to a foreign host or too many pages
        """
        first_url = self._resolve_url(spec)
        origin = origin_of(first_url)
        seen = {first_url}
        description = spec.description or first_url
        current = spec
        index = 0

        while True:
            started = perf_counter()
            envelope = await self._fetch_page(current)
            envelope.page_index = index
            items = extract_items(envelope.body)
            log_page_completed(
                description=description,
                page_index=index,
                items=len(items),
                latency_ms=(perf_counter() - started) * 1000.0,
                request_id=envelope.request_id,
            )
            yield Page(index=index, envelope=envelope, items=items)

            cursor = next_cursor(envelope)
            if cursor is None:
                return
            if cursor.url in seen:
                log_cursor_repeated(description=description, page_index=index, url=cursor.url)
                return
            if cursor.origin != origin:
                raise PaginationAborted(
                    f"Refusing to follow next-page link to {cursor.origin} "
                    f"(call was made against {origin})",
                    pages_fetched=index + 1,
                )
            if self._max_pages is not None and index + 1 >= self._max_pages:
                raise PaginationAborted(
                    f"Collection has more than {self._max_pages} pages",
                    pages_fetched=index + 1,
                )

            seen.add(cursor.url)
            current = spec.with_cursor(cursor)
            index += 1

    async def collect_all(self, spec: RequestSpec) -> PaginationResult:
        """Fetch every page and concatenate the items.

        Raises:
            PaginationAborted: A page after the first failed; partial pages
                are discarded
            GitHubError: The first page failed (nothing was collected)
            Cancelled: The call was cancelled
        """
        started = perf_counter()
        description = spec.description or spec.uri_fragment
        items: list = []
        pages = 0
        last: ResponseEnvelope | None = None

        try:
            async for page in self.iter_pages(spec):
                items.extend(page.items)
                pages += 1
                last = page.envelope
        except (Cancelled, PaginationAborted):
            raise
        except GitHubError as exc:
            if pages == 0:
                raise
            log_pagination_error(
                description=description,
                page_index=pages,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            raise PaginationAborted(
                f"Pagination of {description} aborted after {pages} page(s): "
                f"{type(exc).__name__}",
                cause=exc,
                pages_fetched=pages,
            ) from exc

        result = PaginationResult(items=items, pages_used=pages, last_envelope=last)
        log_pagination_complete(
            description=description,
            result=result,
            total_latency_ms=(perf_counter() - started) * 1000.0,
        )
        return result
