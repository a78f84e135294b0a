# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Rate limit coordinator.

Owns the per-minute and per-hour window snapshots of one client and turns
them into a single delay that respects both windows at once.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Union

from ..config import DEFAULT_POLICY, RateLimitPolicy
from ..types.rate_limit import (
    DelayApplied,
    DelayReason,
    RateLimitSnapshot,
    RateLimitUpdate,
    RateLimitWindow,
)
from .windows import extract_rate_limit_headers, minute_window

if TYPE_CHECKING:
    from ..protocols.classifier import WindowClassifierProtocol

logger = logging.getLogger(__name__)

RateLimitEvent = Union[RateLimitUpdate, DelayApplied]
RateLimitListener = Callable[[RateLimitEvent], None]


class RateLimitCoordinator:
    """
    Tracks rate limit windows and computes the governing delay.

    Responsibilities:
    - Keep at most one current snapshot per window (minute, hour)
    - Compute the required delay as the maximum over both windows
    - Suspend callers for that delay, blocking or asynchronously
    - Notify subscribers about snapshot updates and applied delays

    Both snapshot slots are read and written under a single lock. Snapshots
    are immutable, so readers never observe a partially updated window.
    Listeners are invoked outside the lock.

    One coordinator belongs to one logical client; separate tokens must not
    share quota bookkeeping.

    Example:
        >>> coordinator = RateLimitCoordinator()
        >>> unsubscribe = coordinator.subscribe(print)
        >>> coordinator.update("100", "3", "1700000000")
        >>> coordinator.apply_delay()
        >>> unsubscribe()
    """

    def __init__(
        self,
        policy: RateLimitPolicy = DEFAULT_POLICY,
        window_classifier: WindowClassifierProtocol | None = None,
    ):
        """
        Initialize the coordinator.

        Args:
            policy: Tier thresholds applied to every snapshot
            window_classifier: Decides which window observed headers describe.
                Defaults to tagging everything as the per-minute window.
        """
        self.policy = policy
        self._window_classifier = window_classifier or minute_window

        self._lock = threading.Lock()
        self._snapshots: dict[RateLimitWindow, RateLimitSnapshot] = {}

        self._listeners_lock = threading.Lock()
        self._listeners: list[RateLimitListener] = []

    # ===== STATE =====

    @property
    def minute(self) -> RateLimitSnapshot | None:
        """Current per-minute snapshot, None until first observed."""
        return self.snapshot(RateLimitWindow.MINUTE)

    @property
    def hour(self) -> RateLimitSnapshot | None:
        """Current per-hour snapshot, None until first observed."""
        return self.snapshot(RateLimitWindow.HOUR)

    def snapshot(self, window: RateLimitWindow) -> RateLimitSnapshot | None:
        with self._lock:
            return self._snapshots.get(window)

    def update(
        self,
        limit: str | int | None,
        remaining: str | int | None,
        reset: str | int | float | None,
        window: RateLimitWindow = RateLimitWindow.MINUTE,
    ) -> RateLimitSnapshot | None:
        """
        Replace the snapshot for ``window`` from raw header values.

        Missing or malformed values leave the state untouched and return None;
        a bad header never fails the request path.

        Returns:
            The stored snapshot, or None if the values were unusable
        """
        snapshot = RateLimitSnapshot.from_headers(
            limit, remaining, reset, policy=self.policy
        )
        if snapshot is None:
            logger.debug(
                f"Ignoring unusable rate limit values for {window.value} window: "
                f"limit={limit!r} remaining={remaining!r} reset={reset!r}"
            )
            return None

        with self._lock:
            self._snapshots[window] = snapshot

        logger.debug(f"Rate limit updated ({window.value}): {snapshot}")
        self._notify(RateLimitUpdate(snapshot=snapshot, window=window))
        return snapshot

    def update_from_headers(
        self, headers: Mapping[str, str]
    ) -> RateLimitSnapshot | None:
        """
        Feed response headers into the coordinator.

        Header names are matched case-insensitively; the window classifier
        decides which slot the values land in.
        """
        normalized = {str(k).lower(): v for k, v in headers.items()}
        limit, remaining, reset = extract_rate_limit_headers(normalized)
        if limit is None and remaining is None and reset is None:
            return None
        window = self._window_classifier(normalized)
        return self.update(limit, remaining, reset, window=window)

    def reset(self) -> None:
        """Forget both windows."""
        with self._lock:
            self._snapshots.clear()

    # ===== DELAY COMPUTATION =====

    def required_delay(self, now: datetime | None = None) -> float:
        """
        Delay in seconds that respects both windows.

        Absent windows contribute zero; the tighter constraint governs.
        """
        return self._plan_delay(now)[0]

    def delay_reason(self) -> str:
        """Reason for the current delay, highest-priority tier first."""
        return self._plan_delay()[1]

    def is_exhausted(self) -> bool:
        """True if either tracked window reports no remaining requests."""
        with self._lock:
            return any(s.is_exhausted for s in self._snapshots.values())

    def _plan_delay(self, now: datetime | None = None) -> tuple[float, str]:
        with self._lock:
            snapshots = [
                s
                for s in (
                    self._snapshots.get(RateLimitWindow.MINUTE),
                    self._snapshots.get(RateLimitWindow.HOUR),
                )
                if s is not None
            ]

        delay = max((s.recommended_delay(now) for s in snapshots), default=0.0)

        reasons = {s.delay_reason() for s in snapshots}
        for reason in (
            DelayReason.EXCEEDED,
            DelayReason.NEARLY_EXHAUSTED,
            DelayReason.APPROACHING,
        ):
            if reason in reasons:
                return delay, reason
        return delay, DelayReason.PROACTIVE

    # ===== DELAY APPLICATION =====

    def apply_delay(self) -> float:
        """
        Block the calling thread for the required delay.

        A zero delay returns immediately. The blocking form cannot be
        cancelled.

        Returns:
            The delay applied, in seconds
        """
        delay, reason = self._plan_delay()
        if delay <= 0:
            return 0.0

        self._announce_delay(delay, reason)
        time.sleep(delay)
        return delay

    async def apply_delay_async(
        self, cancel_event: asyncio.Event | None = None
    ) -> float:
        """
        Suspend the calling task for the required delay.

        Cancelling the task, or setting ``cancel_event``, aborts the wait with
        asyncio.CancelledError so the caller never performs the network call
        it was waiting for.

        Args:
            cancel_event: Optional external cancellation signal

        Returns:
            The delay applied, in seconds

        Raises:
            asyncio.CancelledError: If the wait was cancelled
        """
        if cancel_event is not None and cancel_event.is_set():
            raise asyncio.CancelledError("Rate limit delay cancelled")

        delay, reason = self._plan_delay()
        if delay <= 0:
            return 0.0

        self._announce_delay(delay, reason)

        if cancel_event is None:
            await asyncio.sleep(delay)
            return delay

        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return delay
        raise asyncio.CancelledError("Rate limit delay cancelled")

    def _announce_delay(self, delay: float, reason: str) -> None:
        logger.info(f"Rate limit delay applied: {delay:.2f}s - {reason}")
        self._notify(DelayApplied(delay=delay, reason=reason))

    # ===== NOTIFICATIONS =====

    def subscribe(self, handler: RateLimitListener) -> Callable[[], None]:
        """
        Register a listener for update and delay notifications.

        Returns:
            A callable that removes the listener; calling it twice is harmless
        """
        with self._listeners_lock:
            self._listeners.append(handler)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if handler in self._listeners:
                    self._listeners.remove(handler)

        return unsubscribe

    def _notify(self, event: RateLimitEvent) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                logger.warning(
                    f"Rate limit listener {listener!r} failed on "
                    f"{type(event).__name__}: {e}"
                )

    # ===== REPORTING =====

    def status(self) -> str:
        """Multi-line summary of both windows."""
        with self._lock:
            minute = self._snapshots.get(RateLimitWindow.MINUTE)
            hour = self._snapshots.get(RateLimitWindow.HOUR)

        lines = [
            "Rate Limit Status:",
            f"Per Minute: {minute if minute is not None else 'Unknown'}",
            f"Per Hour: {hour if hour is not None else 'Unknown'}",
        ]
        return "\n".join(lines)


__all__ = ["RateLimitCoordinator", "RateLimitEvent", "RateLimitListener"]
