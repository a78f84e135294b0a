# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Thread and document operations.

v1 operations use the client's configured API version prefix; the v2
operations always address the ``2/`` endpoints.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..executor import ApiRequest, RequestExecutor
from ..identifiers import validate_thread_identifier
from ..models.threads import (
    Document,
    DocumentFormat,
    DocumentLocation,
    DocumentType,
    ThreadHtmlPage,
    ThreadResponseV2,
    ThreadV2,
)
from ..pagination import PaginatedFetcher
from .paths import api_path

logger = logging.getLogger(__name__)


class ThreadsResource:
    """
    Operations on threads (documents, spreadsheets and chats).

    Example:
        >>> html = client.threads.get_complete_thread_html_v2("AbCdEfGhIjKl")
    """

    def __init__(self, executor: RequestExecutor, api_version: int = 1):
        self._executor = executor
        self._version = api_version
        self._html_fetcher = PaginatedFetcher(self.get_thread_html_v2)

    def get_recent(self, count: int = 10) -> dict[str, Document]:
        """Most recent threads to have received messages, keyed by thread id."""
        data = self._executor.execute(
            ApiRequest.get(api_path(self._version, "threads", "recent"), count=count)
        )
        return {key: Document.model_validate(doc) for key, doc in (data or {}).items()}

    def get_recent_by_members(
        self, member_ids: Sequence[str], count: int = 10
    ) -> dict[str, Document]:
        """Most recent threads involving every given member."""
        data = self._executor.execute(
            ApiRequest.get(
                api_path(self._version, "threads", "recent"),
                count=count,
                member_ids=",".join(member_ids),
            )
        )
        return {key: Document.model_validate(doc) for key, doc in (data or {}).items()}

    def get_thread(self, thread_id: str) -> Document:
        """Fetch a thread with its members and full HTML (v1)."""
        data = self._executor.execute(
            ApiRequest.get(api_path(self._version, "threads", thread_id))
        )
        return Document.model_validate(data)

    def get_thread_v2(self, identifier: str) -> ThreadV2:
        """
        Fetch v2 thread metadata by id or secret path.

        Raises:
            InvalidIdentifierError: Before any request, for malformed ids
        """
        identifier = validate_thread_identifier(identifier)
        data = self._executor.execute(
            ApiRequest.get(api_path(2, "threads", identifier))
        )
        return ThreadResponseV2.model_validate(data).thread

    def get_thread_html_v2(
        self,
        identifier: str,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> ThreadHtmlPage:
        """
        Fetch one page of a thread's HTML.

        Args:
            identifier: Thread id or secret path
            cursor: Continuation token from the previous page; omit for the first
            limit: Optional page-size hint
        """
        identifier = validate_thread_identifier(identifier)
        if limit is not None and limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        data = self._executor.execute(
            ApiRequest.get(
                api_path(2, "threads", identifier, "html"),
                cursor=cursor or None,
                limit=limit,
            )
        )
        return ThreadHtmlPage.model_validate(data or {})

    def get_complete_thread_html_v2(
        self,
        identifier: str,
        limit: int | None = None,
        max_pages: int | None = None,
    ) -> str:
        """
        Fetch every HTML page of a thread and join them in server order.

        Raises:
            PaginationLimitError: If ``max_pages`` is exceeded
        """
        identifier = validate_thread_identifier(identifier)
        html = self._html_fetcher.fetch_all(
            identifier, page_size_hint=limit, max_pages=max_pages
        )
        logger.debug(f"Assembled {len(html)} chars of HTML for {identifier}")
        return html

    def new_document(
        self,
        title: str | None,
        content: str | None,
        member_ids: Sequence[str] | None = None,
        type: DocumentType = DocumentType.DOCUMENT,
        format: DocumentFormat = DocumentFormat.HTML,
    ) -> Document:
        """
        Create a document or spreadsheet.

        Args:
            title: Document title; derived from the content when omitted
            content: Initial HTML or Markdown body
            member_ids: Folders or users to share with
            type: Document or spreadsheet
            format: Content format
        """
        data = self._executor.execute(
            ApiRequest.post(
                api_path(self._version, "threads", "new-document"),
                content=content,
                type=DocumentType(type).value,
                format=DocumentFormat(format).value,
                title=title,
                member_ids=",".join(member_ids) if member_ids else None,
            )
        )
        return Document.model_validate(data)

    def edit_document(
        self,
        thread_id: str,
        content: str,
        section_id: str | None = None,
        format: DocumentFormat = DocumentFormat.MARKDOWN,
        location: DocumentLocation = DocumentLocation.APPEND,
    ) -> Document:
        """Insert, replace or delete content in an existing document."""
        location = DocumentLocation(location)
        if location >= DocumentLocation.AFTER_SECTION and not section_id:
            raise ValueError(f"{location.name} requires a section_id")
        data = self._executor.execute(
            ApiRequest.post(
                api_path(self._version, "threads", "edit-document"),
                thread_id=thread_id,
                content=content,
                format=DocumentFormat(format).value,
                section_id=section_id,
                location=int(location),
            )
        )
        return Document.model_validate(data)


__all__ = ["ThreadsResource"]
