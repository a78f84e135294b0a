# SPDX-License-Identifier: Apache-2.0
"""Unit tests for window classification helpers."""

from quipclient.rate_limit import extract_rate_limit_headers, fixed_window, minute_window
from quipclient.types import RateLimitWindow


class TestExtractRateLimitHeaders:
    """Tests for extract_rate_limit_headers."""

    def test_mixed_case_names(self):
        """Test that header names match case-insensitively."""
        headers = {
            "X-RateLimit-Limit": "50",
            "x-ratelimit-remaining": "7",
            "X-RATELIMIT-RESET": "1767268800",
        }
        assert extract_rate_limit_headers(headers) == ("50", "7", "1767268800")

    def test_missing_headers(self):
        """Test that missing headers come back as None."""
        assert extract_rate_limit_headers({"X-Ratelimit-Limit": "50"}) == (
            "50",
            None,
            None,
        )


class TestClassifiers:
    """Tests for the built-in classifiers."""

    def test_minute_window_default(self):
        """Test that the default classifier always reports the minute window."""
        assert minute_window({}) is RateLimitWindow.MINUTE

    def test_fixed_window(self):
        """Test a fixed classifier."""
        classify = fixed_window(RateLimitWindow.HOUR)
        assert classify({"x-ratelimit-limit": "1"}) is RateLimitWindow.HOUR
        assert classify.__name__ == "hour_window"
