# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Terminal rendering of API objects."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.rule import Rule

from ..models import FolderResponse, Message, Thread, ThreadV2, User
from ..traversal import WalkSummary

console = Console()


def _line(text: str = "") -> None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def format_time(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%S UTC")


def print_thread(thread: Thread | ThreadV2) -> None:
    _line(thread.title or "(untitled)")
    _line(f"Created: {format_time(thread.created_at)}")
    _line(f"Modified: {format_time(thread.updated_at)}")
    _line(f"Id: {thread.id}")
    if isinstance(thread, ThreadV2) and thread.type:
        kind = getattr(thread.type, "value", thread.type)
        _line(f"Type: {kind}")
    _line(f"Link: {thread.link or '-'}")
    console.print(Rule())


def print_message(message: Message) -> None:
    _line(f"Message from: {message.author_name or message.author_id or '-'}")
    _line(f"Created: {format_time(message.created_at)}")
    _line(f"Id: {message.id}")
    _line(message.text or "")
    console.print(Rule(characters="*"))


def print_folder(response: FolderResponse, show_children: bool = True) -> None:
    folder = response.folder
    _line(f"Folder: {folder.title or '(untitled)'}")
    _line(f"Id: {folder.id}")
    if not show_children:
        return
    _line(f"Members: {len(response.member_ids)}")
    for folder_id in response.subfolder_ids:
        _line(f"  folder  {folder_id}")
    for thread_id in response.thread_ids:
        _line(f"  thread  {thread_id}")


def print_user(user: User) -> None:
    _line(f"{user.name or '(unnamed)'} ({user.id})")
    if user.desktop_folder_id:
        _line(f"  Desktop folder: {user.desktop_folder_id}")
    if user.private_folder_id:
        _line(f"  Private folder: {user.private_folder_id}")


def print_walk_summary(summary: WalkSummary) -> None:
    _line(
        f"Folders: {summary.folders_visited} visited, {summary.folders_skipped} skipped"
    )
    _line(
        f"Threads: {summary.threads_downloaded} downloaded, "
        f"{summary.threads_skipped} skipped, {len(summary.failed_threads)} failed"
    )
    for thread_id in summary.failed_threads:
        _line(f"  failed thread {thread_id}")
    for folder_id in summary.failed_folders:
        _line(f"  failed folder {folder_id}")


def print_text(text: str) -> None:
    _line(text)
