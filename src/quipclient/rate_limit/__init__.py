# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client-side rate limiting.

Provides:
- RateLimitCoordinator: per-client window tracking and delay application
- Window classification hooks for observed rate limit headers
"""

from .coordinator import RateLimitCoordinator, RateLimitEvent, RateLimitListener
from .windows import extract_rate_limit_headers, fixed_window, minute_window

__all__ = [
    "RateLimitCoordinator",
    "RateLimitEvent",
    "RateLimitListener",
    "extract_rate_limit_headers",
    "fixed_window",
    "minute_window",
]
