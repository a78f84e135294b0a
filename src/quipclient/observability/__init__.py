# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for client-side rate limiting.

Attributes:
    PROMETHEUS_AVAILABLE: Whether prometheus_client is available.
"""

from .collector import (
    PROMETHEUS_AVAILABLE,
    PrometheusRateLimitMetrics,
    RateLimitMetricsCollector,
)
from .constants import (
    DELAY_SECONDS_TOTAL,
    DELAYS_TOTAL,
    METRIC_PREFIX,
    REMAINING,
    UPDATES_TOTAL,
)

__all__ = [
    "DELAYS_TOTAL",
    "DELAY_SECONDS_TOTAL",
    "METRIC_PREFIX",
    "PROMETHEUS_AVAILABLE",
    "REMAINING",
    "UPDATES_TOTAL",
    "PrometheusRateLimitMetrics",
    "RateLimitMetricsCollector",
]
