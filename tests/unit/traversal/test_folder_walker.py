# SPDX-License-Identifier: Apache-2.0
"""
Unit tests for FolderWalker.

The walker runs against the fake API through a real client; cooldown
sleeps are injected so rate-limited scenarios run instantly.
"""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest

from quipclient.exceptions import QuipApiError
from quipclient.retry import RetryDriver
from quipclient.traversal import FolderWalker, ProgressCheckpoint, safe_filename

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
OLD_USEC = 1_700_000_100_000_000
RECENT_USEC = int((NOW - timedelta(hours=3)).timestamp() * 1_000_000)

DOC_A = "ThreadAAAA01"
DOC_B = "ThreadBBBB02"
CHAT = "ThreadCHAT03"


def html_page(html, cursor=""):
    return {"html": html, "response_metadata": {"next_cursor": cursor}}


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def make_walker(client, tmp_path, sleep):
    def build(**kwargs):
        kwargs.setdefault("retry", RetryDriver(max_attempts=3, cooldown=60.0, sleep=sleep))
        kwargs.setdefault("clock", lambda: NOW)
        return FolderWalker(client, tmp_path / "out", **kwargs)

    return build


@pytest.fixture
def tree(fake_api, payloads):
    """F1 'Team Docs' holds DOC_A and subfolder F2 'Archive' with DOC_B and a chat."""
    fake_api.add("GET", "1/folders/F1", json=payloads.folder("F1", "Team Docs", [DOC_A], ["F2"]))
    fake_api.add("GET", "1/folders/F2", json=payloads.folder("F2", "Archive", [DOC_B, CHAT]))
    fake_api.add("GET", f"2/threads/{DOC_A}", json=payloads.thread_v2(DOC_A, "Q1 Plan", updated_usec=OLD_USEC))
    fake_api.add("GET", f"2/threads/{DOC_B}", json=payloads.thread_v2(DOC_B, "Notes", updated_usec=RECENT_USEC))
    fake_api.add("GET", f"2/threads/{CHAT}", json=payloads.thread_v2(CHAT, "Chat", thread_type="CHAT"))
    fake_api.add("GET", f"2/threads/{DOC_A}/html", json=html_page("<h1>Q1</h1>", "c1"))
    fake_api.add("GET", f"2/threads/{DOC_A}/html", json=html_page("<p>more</p>"))
    fake_api.add("GET", f"2/threads/{DOC_B}/html", json=html_page("<p>notes</p>"))
    return fake_api


def thread_requests(fake_api):
    return [p for p in fake_api.paths() if p.startswith("/2/threads/")]


class TestSafeFilename:
    """Tests for safe_filename."""

    def test_replaces_unsafe_characters(self):
        """Separators and spaces become underscores."""
        assert safe_filename("Q1 / Q2: plan", "x") == "Q1_Q2_plan"

    def test_fallback(self):
        """Empty or unusable titles fall back to the id."""
        assert safe_filename(None, "F1") == "F1"
        assert safe_filename("///", "F1") == "F1"

    def test_truncated(self):
        """Long titles are shortened."""
        assert len(safe_filename("a" * 200, "x")) == 80


class TestWalk:
    """Tests for a full walk."""

    def test_downloads_tree(self, make_walker, tree, tmp_path):
        """Documents land in directories mirroring the folder tree."""
        summary = make_walker().walk("F1")

        root = tmp_path / "out" / "Team_Docs"
        assert (root / f"Q1_Plan-{DOC_A}.html").read_text() == "<h1>Q1</h1><p>more</p>"
        assert (root / "Archive" / f"Notes-{DOC_B}.html").read_text() == "<p>notes</p>"
        assert summary.threads_downloaded == 2
        assert summary.folders_visited == 2
        assert summary.ok

    def test_chat_threads_skipped(self, make_walker, tree, tmp_path):
        """Chat threads are recorded but not downloaded."""
        walker = make_walker()
        summary = walker.walk("F1")

        assert summary.threads_skipped == 1
        assert f"/2/threads/{CHAT}/html" not in tree.paths()
        assert walker.checkpoint.threads[CHAT].downloaded is True

    def test_recent_flag_recorded(self, make_walker, tree):
        """Threads updated within the recent window are flagged."""
        walker = make_walker()
        walker.walk("F1")

        assert walker.checkpoint.threads[DOC_A].is_recent is False
        assert walker.checkpoint.threads[DOC_B].is_recent is True

    def test_root_failure_raises(self, make_walker, fake_api):
        """Failing to list the root folder is fatal."""
        with pytest.raises(QuipApiError):
            make_walker().walk("missing")

    def test_cycles_visited_once(self, make_walker, fake_api, payloads):
        """A folder reachable twice is walked once."""
        fake_api.add("GET", "1/folders/F1", json=payloads.folder("F1", "One", [], ["F2"]))
        fake_api.add("GET", "1/folders/F2", json=payloads.folder("F2", "Two", [], ["F1"]))

        summary = make_walker().walk("F1")

        assert summary.folders_visited == 2
        assert fake_api.paths().count("/1/folders/F1") == 1


class TestWalkFailures:
    """Tests for retries and per-item failures."""

    def test_rate_limited_thread_recovers(self, make_walker, tree, sleep, tmp_path):
        """A rate-limited call cools down and is retried."""
        tree.routes[("GET", f"/2/threads/{DOC_A}")].insert(
            0,
            (503, {"error": "Over Rate Limit", "error_code": 503,
                   "error_description": "Over Rate Limit"}, {}),
        )

        summary = make_walker().walk("F1")

        assert summary.ok
        sleep.assert_called_once_with(60.0)
        assert (tmp_path / "out" / "Team_Docs" / f"Q1_Plan-{DOC_A}.html").exists()

    def test_exhausted_thread_skipped(self, make_walker, tree, sleep):
        """A thread that stays rate limited is recorded as failed; the walk goes on."""
        tree.routes[("GET", f"/2/threads/{DOC_A}")] = [
            (503, {"error": "Over Rate Limit", "error_code": 503,
                   "error_description": "Over Rate Limit"}, {})
        ]

        walker = make_walker()
        summary = walker.walk("F1")

        assert summary.failed_threads == [DOC_A]
        assert summary.threads_downloaded == 1
        assert sleep.call_count == 2
        assert walker.checkpoint.threads[DOC_A].downloaded is False
        assert walker.checkpoint.folders["F1"].fully_processed is False
        assert not summary.ok

    def test_missing_thread_not_retried(self, make_walker, tree, sleep):
        """Non rate-limit errors fail the thread without a cooldown."""
        del tree.routes[("GET", f"/2/threads/{DOC_B}")]

        summary = make_walker().walk("F1")

        assert summary.failed_threads == [DOC_B]
        sleep.assert_not_called()
        assert summary.failed_folders == []

    def test_subfolder_failure_recorded(self, make_walker, tree):
        """An unreadable subfolder is recorded and its parent left incomplete."""
        del tree.routes[("GET", "/1/folders/F2")]

        walker = make_walker()
        summary = walker.walk("F1")

        assert summary.failed_folders == ["F2"]
        assert summary.threads_downloaded == 1
        assert walker.checkpoint.folders["F1"].fully_processed is False

    def test_malformed_thread_payload_skipped(self, make_walker, tree, sleep):
        """A thread payload that does not validate fails only that thread."""
        tree.routes[("GET", f"/2/threads/{DOC_A}")] = [(200, {"unexpected": True}, {})]

        walker = make_walker()
        summary = walker.walk("F1")

        assert summary.failed_threads == [DOC_A]
        assert summary.threads_downloaded == 1
        assert f"/2/threads/{DOC_B}/html" in tree.paths()
        sleep.assert_not_called()
        assert walker.checkpoint.threads[DOC_A].downloaded is False

    def test_empty_thread_body_skipped(self, make_walker, tree):
        """An empty success body fails the thread without aborting the walk."""
        tree.routes[("GET", f"/2/threads/{DOC_B}")] = [(200, None, {})]

        summary = make_walker().walk("F1")

        assert summary.failed_threads == [DOC_B]
        assert summary.threads_downloaded == 1

    def test_malformed_subfolder_payload_recorded(self, make_walker, tree):
        """A subfolder payload that does not validate is recorded as failed."""
        tree.routes[("GET", "/1/folders/F2")] = [(200, {"children": "nope"}, {})]

        summary = make_walker().walk("F1")

        assert summary.failed_folders == ["F2"]
        assert summary.threads_downloaded == 1


class TestCheckpointResume:
    """Tests for resuming from a checkpoint file."""

    def test_checkpoint_written(self, make_walker, tree, tmp_path):
        """The checkpoint file records every thread and folder."""
        path = tmp_path / "progress.json"
        make_walker(checkpoint_path=path).walk("F1")

        data = json.loads(path.read_text())
        assert set(data["threads"]) == {DOC_A, DOC_B, CHAT}
        assert data["folders"]["F2"]["isLeaf"] is True
        assert data["folders"]["F1"]["fullyProcessed"] is True

    def test_second_walk_skips_settled_work(self, make_walker, tree, tmp_path):
        """A resumed walk skips settled threads and complete subfolders."""
        path = tmp_path / "progress.json"
        make_walker(checkpoint_path=path).walk("F1")
        tree.requests.clear()

        summary = make_walker(checkpoint_path=path).walk("F1")

        assert thread_requests(tree) == []
        assert tree.paths() == ["/1/folders/F1"]
        assert summary.threads_skipped == 1
        assert summary.folders_skipped == 1
        assert summary.threads_downloaded == 0

    def test_recent_thread_rechecked_later(self, make_walker, tree, tmp_path):
        """Recent threads are fetched again once the recheck interval passes."""
        path = tmp_path / "progress.json"
        make_walker(checkpoint_path=path).walk("F1")
        tree.requests.clear()

        later = NOW + timedelta(hours=2)
        make_walker(
            checkpoint_path=path,
            clock=lambda: later,
            folder_recheck_interval=timedelta(minutes=30),
        ).walk("F1")

        assert f"/2/threads/{DOC_B}" in thread_requests(tree)
        assert f"/2/threads/{DOC_A}" not in thread_requests(tree)

    def test_checkpoint_written_per_folder(self, make_walker, tree, tmp_path):
        """Successful threads do not rewrite the file; each finished folder does."""
        with patch.object(ProgressCheckpoint, "save", autospec=True) as save:
            make_walker(checkpoint_path=tmp_path / "progress.json").walk("F1")

        assert save.call_count == 2

    def test_checkpoint_written_on_failure(self, make_walker, tree, tmp_path):
        """A failed thread is persisted right away."""
        del tree.routes[("GET", f"/2/threads/{DOC_B}")]

        with patch.object(ProgressCheckpoint, "save", autospec=True) as save:
            make_walker(checkpoint_path=tmp_path / "progress.json").walk("F1")

        assert save.call_count == 3
