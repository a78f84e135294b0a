# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Thread models.

Covers the v1 thread/document payloads, the v2 thread payload and the v2
paginated HTML page.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum, IntEnum

from pydantic import Field

from .base import QuipModel


def usec_to_datetime(usec: int | None) -> datetime | None:
    """Convert the API's Unix microseconds to an aware UTC datetime."""
    if usec is None:
        return None
    return datetime.fromtimestamp(usec / 1_000_000, tz=timezone.utc)


class DocumentType(str, Enum):
    """Kinds of document the new-document endpoint can create."""

    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"


class DocumentFormat(str, Enum):
    """Content formats accepted when creating or editing documents."""

    HTML = "html"
    MARKDOWN = "markdown"


class DocumentLocation(IntEnum):
    """Where edit-document places new content."""

    APPEND = 0
    PREPEND = 1
    AFTER_SECTION = 2
    BEFORE_SECTION = 3
    REPLACE_SECTION = 4
    DELETE_SECTION = 5


class ThreadTypeV2(str, Enum):
    """Thread kinds reported by the v2 API."""

    DOCUMENT = "DOCUMENT"
    SPREADSHEET = "SPREADSHEET"
    SLIDES = "SLIDES"
    CHAT = "CHAT"


class Sharing(QuipModel):
    company_id: str | None = None
    company_mode: str | None = None


class Thread(QuipModel):
    """v1 thread metadata."""

    id: str
    title: str | None = None
    author_id: str | None = None
    thread_class: str | None = None
    created_usec: int | None = None
    updated_usec: int | None = None
    sharing: Sharing | None = None
    link: str | None = None
    type: str | None = None

    @property
    def created_at(self) -> datetime | None:
        return usec_to_datetime(self.created_usec)

    @property
    def updated_at(self) -> datetime | None:
        return usec_to_datetime(self.updated_usec)


class Document(QuipModel):
    """v1 thread with its members and full HTML."""

    thread: Thread
    user_ids: list[str] = Field(default_factory=list)
    shared_folder_ids: list[str] = Field(default_factory=list)
    expanded_user_ids: list[str] = Field(default_factory=list)
    invited_user_emails: list[str] = Field(default_factory=list)
    html: str | None = None


class ThreadV2(QuipModel):
    """v2 thread metadata."""

    id: str
    title: str | None = None
    type: ThreadTypeV2 | str | None = None
    author_id: str | None = None
    is_template: bool = False
    secret_path: str | None = None
    link: str | None = None
    owning_company_id: str | None = None
    created_usec: int | None = None
    updated_usec: int | None = None
    sharing: Sharing | None = None

    @property
    def created_at(self) -> datetime | None:
        return usec_to_datetime(self.created_usec)

    @property
    def updated_at(self) -> datetime | None:
        return usec_to_datetime(self.updated_usec)


class ThreadResponseV2(QuipModel):
    thread: ThreadV2


class ResponseMetadata(QuipModel):
    next_cursor: str | None = None


class ThreadHtmlPage(QuipModel):
    """One page of a thread's HTML from the v2 API."""

    html: str = ""
    response_metadata: ResponseMetadata | None = None

    @property
    def content(self) -> str:
        return self.html

    @property
    def next_cursor(self) -> str | None:
        if self.response_metadata is None:
            return None
        return self.response_metadata.next_cursor or None


__all__ = [
    "Document",
    "DocumentFormat",
    "DocumentLocation",
    "DocumentType",
    "ResponseMetadata",
    "Sharing",
    "Thread",
    "ThreadHtmlPage",
    "ThreadResponseV2",
    "ThreadTypeV2",
    "ThreadV2",
    "usec_to_datetime",
]
