# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions and constants."""

from .rate_limit import (
    DelayApplied,
    DelayReason,
    RateLimitSnapshot,
    RateLimitUpdate,
    RateLimitWindow,
)

__all__ = [
    # Notifications
    "DelayApplied",
    "DelayReason",
    # Rate limit types
    "RateLimitSnapshot",
    "RateLimitUpdate",
    "RateLimitWindow",
]
