# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Window classification for observed rate limit headers.

The API sends a single ``X-Ratelimit-*`` header triple and does not say which
window it describes. Every observed triple is treated as the per-minute
window by default. Whether the API ever reports the hourly window through
these headers has not been verified against live traffic, so the decision is
a hook: pass a different classifier to the coordinator to change it.
"""

from collections.abc import Mapping

from ..types.rate_limit import RateLimitWindow

LIMIT_HEADER = "x-ratelimit-limit"
REMAINING_HEADER = "x-ratelimit-remaining"
RESET_HEADER = "x-ratelimit-reset"


def minute_window(headers: Mapping[str, str]) -> RateLimitWindow:
    """Tag every observed header triple as the per-minute window."""
    return RateLimitWindow.MINUTE


def fixed_window(window: RateLimitWindow):
    """Build a classifier that always reports ``window``."""

    def classify(headers: Mapping[str, str]) -> RateLimitWindow:
        return window

    classify.__name__ = f"{window.value}_window"
    return classify


def extract_rate_limit_headers(
    headers: Mapping[str, str],
) -> tuple[str | None, str | None, str | None]:
    """
    Pull the limit/remaining/reset triple out of response headers.

    Header names are matched case-insensitively.
    """
    normalized = {str(k).lower(): v for k, v in headers.items()}
    return (
        normalized.get(LIMIT_HEADER),
        normalized.get(REMAINING_HEADER),
        normalized.get(RESET_HEADER),
    )


__all__ = [
    "LIMIT_HEADER",
    "REMAINING_HEADER",
    "RESET_HEADER",
    "extract_rate_limit_headers",
    "fixed_window",
    "minute_window",
]
