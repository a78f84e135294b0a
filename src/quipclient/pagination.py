# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Cursor-based pagination assembly.

Drives a single-page fetch primitive through the cursor contract until the
server returns an empty cursor, concatenating page content in the exact order
received. Each call starts from the first page; cursors are never reused
across calls since they expire server-side.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from .exceptions import PaginationLimitError
from .protocols.page import PageProtocol

logger = logging.getLogger(__name__)

PageFetcher = Callable[[str, str | None, int | None], PageProtocol]
AsyncPageFetcher = Callable[[str, str | None, int | None], Awaitable[PageProtocol]]


class PaginatedFetcher:
    """
    Assembles the full content of a paginated resource.

    The fetch primitive is called as ``fetch_page(resource_key, cursor, limit)``
    and is expected to route through the request executor. Termination relies
    on the server eventually returning an empty cursor; pass ``max_pages`` to
    bound a misbehaving server.

    Pages of one logical document are fetched strictly in sequence; ordering is
    cursor-chained, so the same document must not be paginated concurrently.

    Example:
        >>> fetcher = PaginatedFetcher(threads.get_thread_html_v2)
        >>> html = fetcher.fetch_all(thread_id, page_size_hint=100)
    """

    def __init__(self, fetch_page: PageFetcher):
        self._fetch_page = fetch_page

    def fetch_all(
        self,
        resource_key: str,
        page_size_hint: int | None = None,
        max_pages: int | None = None,
    ) -> str:
        """
        Fetch every page and join the content fragments.

        Args:
            resource_key: Identifier of the resource being assembled
            page_size_hint: Optional ``limit`` forwarded with every page request
            max_pages: Optional cap on the number of pages

        Returns:
            Concatenated content in server order

        Raises:
            PaginationLimitError: If ``max_pages`` pages were fetched and the
                server still returned a cursor
        """
        fragments: list[str] = []
        cursor: str | None = None

        while True:
            _check_page_cap(resource_key, len(fragments), max_pages)
            page = self._fetch_page(resource_key, cursor, page_size_hint)
            fragments.append(page.content or "")
            cursor = page.next_cursor
            logger.debug(
                f"Fetched page {len(fragments)} of {resource_key} "
                f"({len(page.content or '')} chars, more={bool(cursor)})"
            )
            if not cursor:
                break

        return "".join(fragments)


class AsyncPaginatedFetcher:
    """Asynchronous counterpart of PaginatedFetcher."""

    def __init__(self, fetch_page: AsyncPageFetcher):
        self._fetch_page = fetch_page

    async def fetch_all(
        self,
        resource_key: str,
        page_size_hint: int | None = None,
        max_pages: int | None = None,
    ) -> str:
        fragments: list[str] = []
        cursor: str | None = None

        while True:
            _check_page_cap(resource_key, len(fragments), max_pages)
            page = await self._fetch_page(resource_key, cursor, page_size_hint)
            fragments.append(page.content or "")
            cursor = page.next_cursor
            if not cursor:
                break

        return "".join(fragments)


def _check_page_cap(resource_key: str, fetched: int, max_pages: int | None) -> None:
    if max_pages is not None and fetched >= max_pages:
        raise PaginationLimitError(resource_key, max_pages)


__all__ = ["AsyncPaginatedFetcher", "PaginatedFetcher"]
