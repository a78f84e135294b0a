# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Recursive folder download.

Walks a folder tree depth-first and writes the complete HTML of every
document to disk. Each API call is wrapped in a RetryDriver so that a long
walk survives hitting the hard rate limit wall; the coordinator's proactive
smoothing still applies underneath every call.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ..exceptions import QuipClientError
from ..models.threads import ThreadTypeV2
from ..retry import RetryDriver
from .progress import FolderProgress, ProgressCheckpoint, ThreadProgress

if TYPE_CHECKING:
    from ..client import QuipClient
    from ..models.folders import FolderResponse

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^\w.-]+")
MAX_NAME_LENGTH = 80


def safe_filename(name: str | None, fallback: str) -> str:
    """Reduce a title to something usable as a file or directory name."""
    cleaned = _UNSAFE_CHARS.sub("_", name or "").strip("._")
    return cleaned[:MAX_NAME_LENGTH] or fallback


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class WalkSummary:
    """
    Outcome counters of one walk.

    Attributes:
        folders_visited: Folders whose children were listed
        folders_skipped: Folders skipped as fully processed
        threads_downloaded: Documents written to disk
        threads_skipped: Threads skipped per the checkpoint or by type
        failed_threads: Thread ids that gave up or failed
        failed_folders: Folder ids that could not be listed
    """

    folders_visited: int = 0
    folders_skipped: int = 0
    threads_downloaded: int = 0
    threads_skipped: int = 0
    failed_threads: list[str] = field(default_factory=list)
    failed_folders: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed_threads and not self.failed_folders


class FolderWalker:
    """
    Depth-first folder walker that downloads every document.

    Example:
        >>> walker = FolderWalker(client, "out/", checkpoint_path="progress.json")
        >>> summary = walker.walk(folder_id)
    """

    def __init__(
        self,
        client: QuipClient,
        output_dir: str | Path,
        checkpoint_path: str | Path | None = None,
        retry: RetryDriver | None = None,
        page_size: int | None = None,
        recent_window: timedelta = timedelta(days=7),
        recheck_interval: timedelta = timedelta(hours=1),
        folder_recheck_interval: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the walker.

        Args:
            client: Client whose resources are used for every call
            output_dir: Root directory for downloaded HTML
            checkpoint_path: Progress file to consult and update, if any
            retry: Retry driver for rate-limit failures (60 x 60s by default)
            page_size: Page-size hint for HTML pagination
            recent_window: A thread updated within this window counts as recent
            recheck_interval: Minimum gap before a recent thread is re-checked
            folder_recheck_interval: How long a fully processed folder is skipped
            clock: Source of the current UTC time
        """
        self.client = client
        self.output_dir = Path(output_dir)
        self.checkpoint_path = Path(checkpoint_path) if checkpoint_path else None
        self.checkpoint = (
            ProgressCheckpoint.load(self.checkpoint_path)
            if self.checkpoint_path
            else ProgressCheckpoint()
        )
        self.retry = retry or RetryDriver()
        self.page_size = page_size
        self.recent_window = recent_window
        self.recheck_interval = recheck_interval
        self.folder_recheck_interval = folder_recheck_interval
        self._clock = clock

    def walk(self, folder_id: str) -> WalkSummary:
        """
        Walk ``folder_id`` and everything beneath it.

        Failures below the root, including payloads that do not validate, are
        logged, recorded in the summary and skipped; failure to list the root
        folder itself is raised. The checkpoint is written after each folder
        and after each failed item.

        Raises:
            RetryExhaustedError: Root folder stayed rate limited
            QuipApiError: Root folder could not be read
            pydantic.ValidationError: Root folder payload was malformed
        """
        summary = WalkSummary()
        root = self._fetch_folder(folder_id)
        self._walk_folder(root, self.output_dir, summary, visited=set())
        logger.info(
            f"Walk of {folder_id} finished: {summary.threads_downloaded} downloaded, "
            f"{summary.threads_skipped} skipped, {len(summary.failed_threads)} "
            f"threads and {len(summary.failed_folders)} folders failed"
        )
        return summary

    def _fetch_folder(self, folder_id: str) -> FolderResponse:
        return self.retry.run(
            lambda: self.client.folders.get_folder(folder_id),
            description=f"folder {folder_id}",
        )

    def _walk_folder(
        self,
        folder: FolderResponse,
        directory: Path,
        summary: WalkSummary,
        visited: set[str],
    ) -> bool:
        """Process one listed folder; returns True if the subtree completed."""
        folder_id = folder.folder.id
        visited.add(folder_id)
        summary.folders_visited += 1
        target = directory / safe_filename(folder.folder.title, folder_id)
        logger.info(f"Walking folder {folder_id} ({folder.folder.title or 'untitled'})")

        complete = True
        for thread_id in folder.thread_ids:
            if not self._process_thread(thread_id, target, summary):
                complete = False

        for subfolder_id in folder.subfolder_ids:
            if subfolder_id in visited:
                continue
            if not self._process_subfolder(subfolder_id, target, summary, visited):
                complete = False

        self.checkpoint.folders[folder_id] = FolderProgress(
            last_processed=self._clock(),
            child_count=len(folder.thread_ids),
            subfolder_count=len(folder.subfolder_ids),
            is_leaf=not folder.subfolder_ids,
            fully_processed=complete,
        )
        self._save_checkpoint()
        return complete

    def _process_subfolder(
        self,
        folder_id: str,
        directory: Path,
        summary: WalkSummary,
        visited: set[str],
    ) -> bool:
        progress = self.checkpoint.folders.get(folder_id)
        if progress and progress.can_skip(self._clock(), self.folder_recheck_interval):
            logger.debug(f"Skipping fully processed folder {folder_id}")
            summary.folders_skipped += 1
            return True

        try:
            folder = self._fetch_folder(folder_id)
        except (QuipClientError, ValidationError) as e:
            logger.error(f"Skipping folder {folder_id}: {e}")
            summary.failed_folders.append(folder_id)
            self._save_checkpoint()
            return False
        return self._walk_folder(folder, directory, summary, visited)

    def _process_thread(
        self, thread_id: str, directory: Path, summary: WalkSummary
    ) -> bool:
        """Download one thread unless the checkpoint says it is settled."""
        now = self._clock()
        progress = self.checkpoint.threads.get(thread_id)
        if progress and progress.can_skip(now, self.recheck_interval):
            logger.debug(f"Skipping downloaded thread {thread_id}")
            summary.threads_skipped += 1
            return True

        try:
            thread = self.retry.run(
                lambda: self.client.threads.get_thread_v2(thread_id),
                description=f"thread {thread_id}",
            )
            updated_at = thread.updated_at
            is_recent = updated_at is not None and now - updated_at < self.recent_window

            if thread.type == ThreadTypeV2.CHAT:
                logger.debug(f"Skipping chat thread {thread_id}")
                summary.threads_skipped += 1
                self._record_thread(thread_id, is_recent, downloaded=True)
                return True

            html = self.retry.run(
                lambda: self.client.threads.get_complete_thread_html_v2(
                    thread_id, limit=self.page_size
                ),
                description=f"HTML of thread {thread_id}",
            )
        except (QuipClientError, ValidationError) as e:
            logger.error(f"Skipping thread {thread_id}: {e}")
            summary.failed_threads.append(thread_id)
            self._record_thread(thread_id, is_recent=False, downloaded=False)
            self._save_checkpoint()
            return False

        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{safe_filename(thread.title, thread_id)}-{thread_id}.html"
        path.write_text(html, encoding="utf-8")
        logger.info(f"Downloaded {thread_id} to {path}")
        summary.threads_downloaded += 1
        self._record_thread(thread_id, is_recent, downloaded=True)
        return True

    def _record_thread(self, thread_id: str, is_recent: bool, downloaded: bool) -> None:
        self.checkpoint.threads[thread_id] = ThreadProgress(
            is_recent=is_recent, last_checked=self._clock(), downloaded=downloaded
        )

    def _save_checkpoint(self) -> None:
        if self.checkpoint_path is not None:
            self.checkpoint.save(self.checkpoint_path)


__all__ = ["FolderWalker", "WalkSummary", "safe_filename"]
