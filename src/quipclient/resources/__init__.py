# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Resource wrappers.

Each wrapper holds the client's RequestExecutor by composition; none of them
talks to the transport directly.
"""

from .folders import FoldersResource
from .messages import MessagesResource
from .threads import ThreadsResource
from .users import UsersResource

__all__ = [
    "FoldersResource",
    "MessagesResource",
    "ThreadsResource",
    "UsersResource",
]
