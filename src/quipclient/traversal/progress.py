# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Progress checkpoint for folder traversal.

The checkpoint is a JSON document with camelCase keys::

    {
      "threads": {"<thread id>": {"isRecent": false,
                                  "lastChecked": "2026-01-01T00:00:00Z",
                                  "downloaded": true}},
      "folders": {"<folder id>": {"lastProcessed": "2026-01-01T00:00:00Z",
                                  "childCount": 12, "subfolderCount": 2,
                                  "isLeaf": false, "fullyProcessed": true}}
    }

The rate limiting core knows nothing about this file; only the folder walker
reads it, to decide which items it can skip.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Naive timestamps in older checkpoint files are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class ThreadProgress(_CamelModel):
    """
    What the walker knows about one thread.

    Attributes:
        is_recent: Thread was updated recently and may still change
        last_checked: When the walker last looked at the thread
        downloaded: Full HTML has been written to disk
    """

    is_recent: bool = False
    last_checked: UtcDatetime | None = None
    downloaded: bool = False

    def can_skip(self, now: datetime, recheck_interval: timedelta) -> bool:
        """
        Downloaded, settled threads are skipped; recent ones are re-checked
        once ``recheck_interval`` has passed since the last look.
        """
        if not self.downloaded:
            return False
        if not self.is_recent:
            return True
        return self.last_checked is not None and (
            now - self.last_checked < recheck_interval
        )


class FolderProgress(_CamelModel):
    """
    What the walker knows about one folder.

    Attributes:
        last_processed: When the folder was last walked
        child_count: Number of thread children
        subfolder_count: Number of folder children
        is_leaf: Folder has no subfolders
        fully_processed: Every child of the subtree was handled without failure
    """

    last_processed: UtcDatetime | None = None
    child_count: int = 0
    subfolder_count: int = 0
    is_leaf: bool = False
    fully_processed: bool = False

    def can_skip(self, now: datetime, recheck_interval: timedelta) -> bool:
        return (
            self.fully_processed
            and self.last_processed is not None
            and now - self.last_processed < recheck_interval
        )


class ProgressCheckpoint(_CamelModel):
    """Persistent traversal progress keyed by thread and folder id."""

    threads: dict[str, ThreadProgress] = Field(default_factory=dict)
    folders: dict[str, FolderProgress] = Field(default_factory=dict)

    @classmethod
    def load(cls, path: str | Path) -> ProgressCheckpoint:
        """
        Load a checkpoint file; a missing file yields an empty checkpoint.

        Raises:
            pydantic.ValidationError: If the file is not a valid checkpoint
        """
        path = Path(path)
        if not path.exists():
            logger.info(f"No checkpoint at {path}; starting fresh")
            return cls()
        checkpoint = cls.model_validate_json(path.read_text(encoding="utf-8"))
        logger.info(
            f"Loaded checkpoint {path}: {len(checkpoint.threads)} threads, "
            f"{len(checkpoint.folders)} folders"
        )
        return checkpoint

    def save(self, path: str | Path) -> None:
        """Write the checkpoint atomically (temp file, then rename)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = self.model_dump_json(by_alias=True, indent=2)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            os.unlink(tmp_name)
            raise


__all__ = ["FolderProgress", "ProgressCheckpoint", "ThreadProgress"]
