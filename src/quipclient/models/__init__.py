# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Response models for the Quip API."""

from .base import QuipModel
from .folders import Folder, FolderChild, FolderResponse
from .messages import Annotation, Message, MessageFrame
from .threads import (
    Document,
    DocumentFormat,
    DocumentLocation,
    DocumentType,
    ResponseMetadata,
    Sharing,
    Thread,
    ThreadHtmlPage,
    ThreadResponseV2,
    ThreadTypeV2,
    ThreadV2,
    usec_to_datetime,
)
from .users import User

__all__ = [
    "Annotation",
    "Document",
    "DocumentFormat",
    "DocumentLocation",
    "DocumentType",
    "Folder",
    "FolderChild",
    "FolderResponse",
    "Message",
    "MessageFrame",
    "QuipModel",
    "ResponseMetadata",
    "Sharing",
    "Thread",
    "ThreadHtmlPage",
    "ThreadResponseV2",
    "ThreadTypeV2",
    "ThreadV2",
    "User",
    "usec_to_datetime",
]
