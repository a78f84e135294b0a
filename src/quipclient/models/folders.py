# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Folder models."""

from pydantic import Field

from .base import QuipModel


class Folder(QuipModel):
    id: str
    title: str | None = None
    creator_id: str | None = None
    parent_id: str | None = None
    color: str | None = None
    created_usec: int | None = None
    updated_usec: int | None = None


class FolderChild(QuipModel):
    """A folder entry: exactly one of thread_id / folder_id is set."""

    thread_id: str | None = None
    folder_id: str | None = None

    @property
    def is_folder(self) -> bool:
        return self.folder_id is not None


class FolderResponse(QuipModel):
    folder: Folder
    member_ids: list[str] = Field(default_factory=list)
    children: list[FolderChild] = Field(default_factory=list)

    @property
    def thread_ids(self) -> list[str]:
        return [c.thread_id for c in self.children if c.thread_id]

    @property
    def subfolder_ids(self) -> list[str]:
        return [c.folder_id for c in self.children if c.folder_id]


__all__ = ["Folder", "FolderChild", "FolderResponse"]
