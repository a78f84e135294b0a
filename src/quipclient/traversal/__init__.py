# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Folder traversal with checkpointed progress."""

from .folder_walker import FolderWalker, WalkSummary, safe_filename
from .progress import FolderProgress, ProgressCheckpoint, ThreadProgress

__all__ = [
    "FolderProgress",
    "FolderWalker",
    "ProgressCheckpoint",
    "ThreadProgress",
    "WalkSummary",
    "safe_filename",
]
