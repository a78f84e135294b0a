# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Helpers for building versioned API paths."""

from urllib.parse import quote


def api_path(version: int, *segments: str) -> str:
    """
    Join path segments under a version prefix.

    Segments are percent-encoded individually so identifiers such as user
    emails cannot escape their path position.

    Example:
        >>> api_path(2, "threads", "AbCdEfGhIjKl", "html")
        '2/threads/AbCdEfGhIjKl/html'
    """
    return "/".join([str(version), *(quote(s, safe="@-") for s in segments)])
