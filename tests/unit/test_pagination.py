# SPDX-License-Identifier: Apache-2.0
"""Unit tests for cursor pagination assembly."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from quipclient.exceptions import PaginationLimitError
from quipclient.pagination import AsyncPaginatedFetcher, PaginatedFetcher


@dataclass
class Page:
    content: str
    next_cursor: str | None


class ScriptedPages:
    """Serves pages keyed by the cursor they are requested with."""

    def __init__(self, pages: dict[str | None, Page]):
        self.pages = pages
        self.calls: list[tuple[str, str | None, int | None]] = []

    def __call__(self, resource_key, cursor, limit):
        self.calls.append((resource_key, cursor, limit))
        return self.pages[cursor]


THREE_PAGES = {
    None: Page("<h1>A</h1>", "c1"),
    "c1": Page("<p>B</p>", "c2"),
    "c2": Page("<p>C</p>", ""),
}


class TestPaginatedFetcher:
    """Tests for PaginatedFetcher."""

    def test_concatenates_in_call_order(self):
        """Three pages chained null -> c1 -> c2 -> '' are joined in order."""
        fetch = ScriptedPages(THREE_PAGES)

        html = PaginatedFetcher(fetch).fetch_all("T1")

        assert html == "<h1>A</h1><p>B</p><p>C</p>"
        assert [c[1] for c in fetch.calls] == [None, "c1", "c2"]

    def test_single_page(self):
        """A missing cursor on the first page stops immediately."""
        fetch = ScriptedPages({None: Page("only", None)})
        assert PaginatedFetcher(fetch).fetch_all("T1") == "only"
        assert len(fetch.calls) == 1

    def test_page_size_hint_forwarded(self):
        """The limit hint is passed with every page request."""
        fetch = ScriptedPages(THREE_PAGES)
        PaginatedFetcher(fetch).fetch_all("T1", page_size_hint=25)
        assert {c[2] for c in fetch.calls} == {25}

    def test_empty_content_kept_in_place(self):
        """Empty fragments do not disturb ordering."""
        fetch = ScriptedPages(
            {None: Page("a", "c1"), "c1": Page("", "c2"), "c2": Page("b", None)}
        )
        assert PaginatedFetcher(fetch).fetch_all("T1") == "ab"

    def test_each_call_restarts_from_first_page(self):
        """No cursor is reused across fetch_all calls."""
        fetch = ScriptedPages(THREE_PAGES)
        fetcher = PaginatedFetcher(fetch)

        fetcher.fetch_all("T1")
        fetcher.fetch_all("T1")

        assert [c[1] for c in fetch.calls] == [None, "c1", "c2", None, "c1", "c2"]

    def test_max_pages_enforced(self):
        """A server that keeps returning cursors trips the page cap."""

        def endless(resource_key, cursor, limit):
            return Page("x", f"{cursor or 0}+")

        with pytest.raises(PaginationLimitError) as exc_info:
            PaginatedFetcher(endless).fetch_all("T1", max_pages=4)
        assert exc_info.value.max_pages == 4

    def test_max_pages_exactly_enough(self):
        """A cap equal to the page count is not an error."""
        fetch = ScriptedPages(THREE_PAGES)
        assert PaginatedFetcher(fetch).fetch_all("T1", max_pages=3).endswith("C</p>")

    def test_fetch_errors_propagate(self):
        """Errors from the fetch primitive surface unchanged."""

        def failing(resource_key, cursor, limit):
            if cursor == "c1":
                raise RuntimeError("expired cursor")
            return Page("a", "c1")

        with pytest.raises(RuntimeError, match="expired cursor"):
            PaginatedFetcher(failing).fetch_all("T1")


class TestAsyncPaginatedFetcher:
    """Tests for AsyncPaginatedFetcher."""

    @pytest.mark.asyncio
    async def test_concatenates_in_order(self):
        """The async fetcher follows the same cursor chain."""
        sync_fetch = ScriptedPages(THREE_PAGES)

        async def fetch(resource_key, cursor, limit):
            return sync_fetch(resource_key, cursor, limit)

        html = await AsyncPaginatedFetcher(fetch).fetch_all("T1", page_size_hint=10)

        assert html == "<h1>A</h1><p>B</p><p>C</p>"
        assert len(sync_fetch.calls) == 3

    @pytest.mark.asyncio
    async def test_max_pages(self):
        """The async fetcher honours the page cap."""

        async def endless(resource_key, cursor, limit):
            return Page("x", "more")

        with pytest.raises(PaginationLimitError):
            await AsyncPaginatedFetcher(endless).fetch_all("T1", max_pages=2)
