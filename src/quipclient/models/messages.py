# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Message models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import QuipModel
from .threads import usec_to_datetime


class MessageFrame(str, Enum):
    """Display frame of a new message."""

    BUBBLE = "bubble"
    CARD = "card"
    LINE = "line"


class Annotation(QuipModel):
    id: str | None = None
    highlight_section_ids: list[str] = Field(default_factory=list)


class Message(QuipModel):
    id: str
    author_id: str | None = None
    author_name: str | None = None
    created_usec: int | None = None
    text: str | None = None
    annotation: Annotation | None = None
    mention_user_ids: list[str] = Field(default_factory=list)

    @property
    def created_at(self) -> datetime | None:
        return usec_to_datetime(self.created_usec)


__all__ = ["Annotation", "Message", "MessageFrame"]
