# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for one page of cursor-paginated content."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PageProtocol(Protocol):
    """
    One page returned by a single-page fetch.

    An empty or missing ``next_cursor`` signals the last page.
    """

    @property
    def content(self) -> str:
        """Content fragment carried by this page."""
        ...

    @property
    def next_cursor(self) -> str | None:
        """Cursor for the following page."""
        ...
