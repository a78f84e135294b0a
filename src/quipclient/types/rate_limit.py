# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Rate limit types.

This module defines the rate limit window enum, the immutable per-window
snapshot with its delay policy, and the notification records emitted by
the coordinator.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from ..config import DEFAULT_POLICY, RateLimitPolicy


class RateLimitWindow(Enum):
    """
    Time buckets over which a request quota is tracked.

    Window Types:
        * **MINUTE**: Short-term quota, the window every observed header updates
        * **HOUR**: Long-term quota, tracked when a classifier reports it
    """

    MINUTE = "minute"
    HOUR = "hour"


class DelayReason:
    """Human-readable reasons attached to applied delays, in priority order."""

    EXCEEDED = "Rate limit exceeded"
    NEARLY_EXHAUSTED = "Rate limit nearly exhausted"
    APPROACHING = "Approaching rate limit"
    PROACTIVE = "Proactive rate limiting"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_int(value: str | int | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _parse_epoch(value: str | int | float | None) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        epoch = float(str(value).strip())
    except ValueError:
        return None
    # Rejects nan and inf
    if epoch != epoch or epoch in (float("inf"), float("-inf")):
        return None
    return epoch


@dataclass(frozen=True)
class RateLimitSnapshot:
    """
    Quota state of one window at the moment it was observed.

    Snapshots are created fresh from every response carrying rate limit
    headers and are superseded, never mutated, by the next one.

    Attributes:
        limit: Maximum requests per window (positive)
        remaining: Requests left in the current window
        reset_at: Absolute UTC time when the window resets
        policy: Tier thresholds used to compute the recommended delay
    """

    limit: int
    remaining: int
    reset_at: datetime
    policy: RateLimitPolicy = DEFAULT_POLICY

    @classmethod
    def from_headers(
        cls,
        limit: str | int | None,
        remaining: str | int | None,
        reset: str | int | float | None,
        policy: RateLimitPolicy = DEFAULT_POLICY,
    ) -> RateLimitSnapshot | None:
        """
        Build a snapshot from raw header values.

        Fails softly: returns None if any value is missing or non-numeric,
        if the limit is not positive or if remaining is negative.

        Args:
            limit: X-Ratelimit-Limit value
            remaining: X-Ratelimit-Remaining value
            reset: X-Ratelimit-Reset value (Unix seconds)
            policy: Tier thresholds for the resulting snapshot

        Returns:
            RateLimitSnapshot, or None if the headers are unusable
        """
        parsed_limit = _parse_int(limit)
        parsed_remaining = _parse_int(remaining)
        reset_epoch = _parse_epoch(reset)

        if parsed_limit is None or parsed_remaining is None or reset_epoch is None:
            return None
        if parsed_limit <= 0 or parsed_remaining < 0:
            return None

        try:
            reset_at = datetime.fromtimestamp(reset_epoch, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

        return cls(
            limit=parsed_limit,
            remaining=parsed_remaining,
            reset_at=reset_at,
            policy=policy,
        )

    def time_until_reset(self, now: datetime | None = None) -> float:
        """Seconds until the window resets (negative once it has passed)."""
        return (self.reset_at - (now or _utcnow())).total_seconds()

    @property
    def fraction_remaining(self) -> float:
        """Fraction of the window's quota still available."""
        return self.remaining / self.limit

    @property
    def is_exhausted(self) -> bool:
        return self.remaining <= 0

    @property
    def is_nearly_exhausted(self) -> bool:
        return self.remaining < self.limit * self.policy.nearly_exhausted_ratio

    @property
    def is_approaching_limit(self) -> bool:
        return self.remaining < self.limit * self.policy.approaching_ratio

    def recommended_delay(self, now: datetime | None = None) -> float:
        """
        Recommended wait in seconds before the next call.

        Tiers:
            - exhausted: wait out the window plus a margin (at least the margin,
              even when the reset time is already in the past)
            - nearly exhausted: spread the remaining quota evenly over the
              remaining time
            - approaching: fixed light delay
            - otherwise: no delay
        """
        if self.is_exhausted:
            margin = self.policy.exhausted_margin
            return max(self.time_until_reset(now) + margin, margin)

        if self.is_nearly_exhausted:
            per_request = self.time_until_reset(now) / max(self.remaining, 1)
            return max(per_request, 0.0)

        if self.is_approaching_limit:
            return self.policy.approaching_delay

        return 0.0

    def delay_reason(self) -> str | None:
        """Reason string for this snapshot's tier, or None outside all tiers."""
        if self.is_exhausted:
            return DelayReason.EXCEEDED
        if self.is_nearly_exhausted:
            return DelayReason.NEARLY_EXHAUSTED
        if self.is_approaching_limit:
            return DelayReason.APPROACHING
        return None

    def __str__(self) -> str:
        return (
            f"Limit: {self.limit}, Remaining: {self.remaining}, "
            f"Reset: {self.reset_at:%Y-%m-%d %H:%M:%S} UTC"
        )


@dataclass(frozen=True)
class RateLimitUpdate:
    """Notification emitted when a window's snapshot is replaced."""

    snapshot: RateLimitSnapshot
    window: RateLimitWindow


@dataclass(frozen=True)
class DelayApplied:
    """Notification emitted before the coordinator suspends a caller."""

    delay: float
    reason: str


__all__ = [
    "DelayApplied",
    "DelayReason",
    "RateLimitSnapshot",
    "RateLimitUpdate",
    "RateLimitWindow",
]
