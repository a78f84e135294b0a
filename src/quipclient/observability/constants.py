# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

Labels are limited to ``window`` (minute, hour) and ``reason`` (the four
delay reason strings), so cardinality stays fixed.
"""

METRIC_PREFIX = "quip_rate_limit"
"""Prefix for all Prometheus metrics in this library."""

UPDATES_TOTAL = f"{METRIC_PREFIX}_updates_total"
"""Snapshots stored by the coordinator, by window."""

DELAYS_TOTAL = f"{METRIC_PREFIX}_delays_total"
"""Non-zero delays applied before a request, by reason."""

DELAY_SECONDS_TOTAL = f"{METRIC_PREFIX}_delay_seconds_total"
"""Total time spent waiting on rate limits."""

REMAINING = f"{METRIC_PREFIX}_remaining"
"""Requests remaining in the most recently observed window."""

__all__ = [
    "DELAYS_TOTAL",
    "DELAY_SECONDS_TOTAL",
    "METRIC_PREFIX",
    "REMAINING",
    "UPDATES_TOTAL",
]
