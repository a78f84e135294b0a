# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""quipclient - Quip API client with adaptive rate limiting.

Every request goes through a per-client rate limit coordinator that reads the
X-Ratelimit-* response headers and smooths request pacing before the quota
runs out. Long traversals add a retry layer for the rare hard wall.

Key Features:
    - Tiered proactive delays (approaching, nearly exhausted, exhausted)
    - Minute and hour window tracking with a pluggable window classifier
    - Cursor pagination assembly for large documents
    - Rate-limit-aware retry and checkpointed folder download
    - Typed pydantic models and a ``quip`` command line tool

Quick Start:
    >>> from quipclient import QuipClient
    >>>
    >>> with QuipClient(token, api_version=2) as client:
    ...     html = client.threads.get_complete_thread_html_v2("AbCdEfGhIjKl")
    ...     print(client.coordinator.status())

Main Exports:
    - QuipClient: Composition root owning the coordinator and executor
    - RateLimitCoordinator, RateLimitSnapshot: Rate limit state and policy
    - RequestExecutor, PaginatedFetcher, RetryDriver: Core call paths
    - QuipSettings, RateLimitPolicy, RetryConfig: Configuration

Note: Prometheus export requires the 'prometheus' extra. Install with:
    pip install quipclient[prometheus]

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import QuipClient
from .config import QuipSettings, RateLimitPolicy, RetryConfig
from .exceptions import (
    ConfigurationError,
    InvalidIdentifierError,
    PaginationLimitError,
    QuipApiError,
    QuipClientError,
    RateLimitExceededError,
    RetryExhaustedError,
)
from .executor import ApiRequest, AsyncRequestExecutor, RequestExecutor
from .pagination import AsyncPaginatedFetcher, PaginatedFetcher
from .rate_limit import RateLimitCoordinator
from .retry import RetryDriver, RetryOutcome, RetryState
from .transport import AsyncHttpxTransport, HttpxTransport, TransportResponse
from .types import (
    DelayApplied,
    DelayReason,
    RateLimitSnapshot,
    RateLimitUpdate,
    RateLimitWindow,
)

__all__ = [
    # Core
    "ApiRequest",
    "AsyncHttpxTransport",
    "AsyncPaginatedFetcher",
    "AsyncRequestExecutor",
    # Exceptions
    "ConfigurationError",
    "DelayApplied",
    "DelayReason",
    "HttpxTransport",
    "InvalidIdentifierError",
    "PaginatedFetcher",
    "PaginationLimitError",
    "QuipApiError",
    # Client
    "QuipClient",
    "QuipClientError",
    "QuipSettings",
    "RateLimitCoordinator",
    "RateLimitExceededError",
    "RateLimitPolicy",
    "RateLimitSnapshot",
    "RateLimitUpdate",
    "RateLimitWindow",
    "RequestExecutor",
    "RetryConfig",
    "RetryDriver",
    "RetryExhaustedError",
    "RetryOutcome",
    "RetryState",
    "TransportResponse",
]
