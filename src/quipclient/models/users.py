# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""User models."""

from pydantic import Field

from .base import QuipModel


class User(QuipModel):
    id: str
    name: str | None = None
    affinity: float | None = None
    desktop_folder_id: str | None = None
    archive_folder_id: str | None = None
    starred_folder_id: str | None = None
    private_folder_id: str | None = None
    shared_folder_ids: list[str] = Field(default_factory=list)
    group_folder_ids: list[str] = Field(default_factory=list)
    profile_picture_url: str | None = None


__all__ = ["User"]
