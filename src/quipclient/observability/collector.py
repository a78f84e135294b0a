# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Rate limit metrics collected from coordinator notifications.

The collector is a plain listener: attach it to a coordinator and it counts
snapshot updates per window, delays per reason, and total delayed seconds.
When prometheus_client is installed the same numbers can be exported as
Prometheus metrics.

Usage:
    >>> collector = RateLimitMetricsCollector()
    >>> detach = collector.attach(client.coordinator)
    >>> collector.get_metrics()["delays_total"]

Thread Safety:
    Counters are updated under a lock; notifications may arrive from any
    thread that executes requests.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..types.rate_limit import DelayApplied, RateLimitUpdate
from .constants import DELAY_SECONDS_TOTAL, DELAYS_TOTAL, REMAINING, UPDATES_TOTAL

if TYPE_CHECKING:
    from prometheus_client import Counter as CounterType, Gauge as GaugeType

    from ..rate_limit.coordinator import RateLimitCoordinator, RateLimitEvent
else:
    CounterType = object
    GaugeType = object

logger = logging.getLogger(__name__)

try:
    from prometheus_client import Counter as _Counter, Gauge as _Gauge

    Counter: type[CounterType] | None = _Counter
    Gauge: type[GaugeType] | None = _Gauge
    PROMETHEUS_AVAILABLE = True
except ImportError:
    Counter = None
    Gauge = None
    PROMETHEUS_AVAILABLE = False


class PrometheusRateLimitMetrics:
    """
    Prometheus counterparts of the collector's counters.

    Raises:
        ImportError: If prometheus_client is not available.
    """

    def __init__(self, registry: Any | None = None) -> None:
        if not PROMETHEUS_AVAILABLE or Counter is None or Gauge is None:
            raise ImportError(
                "prometheus_client is not available. "
                "Install with: pip install quipclient[prometheus]"
            )
        kwargs = {"registry": registry} if registry is not None else {}

        self.updates = Counter(
            UPDATES_TOTAL, "Rate limit snapshots observed", ["window"], **kwargs
        )
        self.delays = Counter(
            DELAYS_TOTAL, "Rate limit delays applied", ["reason"], **kwargs
        )
        self.delay_seconds = Counter(
            DELAY_SECONDS_TOTAL, "Seconds spent waiting on rate limits", **kwargs
        )
        self.remaining = Gauge(
            REMAINING, "Requests remaining in the window", ["window"], **kwargs
        )
        logger.info("Prometheus rate limit metrics initialized")


class RateLimitMetricsCollector:
    """
    Counts rate limit activity reported by a coordinator.

    Args:
        enable_prometheus: Also export to Prometheus (requires prometheus_client)
        registry: Prometheus registry; the default registry when omitted
    """

    def __init__(self, enable_prometheus: bool = False, registry: Any | None = None):
        self._lock = threading.Lock()
        self._updates: defaultdict[str, int] = defaultdict(int)
        self._delays: defaultdict[str, int] = defaultdict(int)
        self._delay_seconds = 0.0
        self._remaining: dict[str, int] = {}
        self._prometheus = (
            PrometheusRateLimitMetrics(registry) if enable_prometheus else None
        )

    def attach(self, coordinator: RateLimitCoordinator) -> Callable[[], None]:
        """Subscribe to ``coordinator``; returns the unsubscribe handle."""
        return coordinator.subscribe(self)

    def __call__(self, event: RateLimitEvent) -> None:
        if isinstance(event, RateLimitUpdate):
            self._record_update(event)
        elif isinstance(event, DelayApplied):
            self._record_delay(event)

    def _record_update(self, event: RateLimitUpdate) -> None:
        window = event.window.value
        with self._lock:
            self._updates[window] += 1
            self._remaining[window] = event.snapshot.remaining
        if self._prometheus is not None:
            self._prometheus.updates.labels(window=window).inc()
            self._prometheus.remaining.labels(window=window).set(
                event.snapshot.remaining
            )

    def _record_delay(self, event: DelayApplied) -> None:
        with self._lock:
            self._delays[event.reason] += 1
            self._delay_seconds += event.delay
        if self._prometheus is not None:
            self._prometheus.delays.labels(reason=event.reason).inc()
            self._prometheus.delay_seconds.inc(event.delay)

    def get_metrics(self) -> dict[str, Any]:
        """Snapshot of all counters as plain data."""
        with self._lock:
            return {
                "updates_total": dict(self._updates),
                "delays_total": dict(self._delays),
                "delay_seconds_total": self._delay_seconds,
                "remaining": dict(self._remaining),
            }

    def reset(self) -> None:
        """Clear the in-process counters (Prometheus counters are monotonic)."""
        with self._lock:
            self._updates.clear()
            self._delays.clear()
            self._delay_seconds = 0.0
            self._remaining.clear()


__all__ = [
    "PROMETHEUS_AVAILABLE",
    "PrometheusRateLimitMetrics",
    "RateLimitMetricsCollector",
]
