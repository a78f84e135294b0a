# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the Quip client library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from QuipClientError, making it easy to catch
all client-related exceptions with a single except clause.
"""

from __future__ import annotations

import json
from typing import Any

RATE_LIMIT_MARKER = "rate limit"
"""Case-insensitive marker the API puts in rate-limit error bodies."""


class QuipClientError(Exception):
    """Base exception for all Quip client errors.

    Example:
        try:
            client.threads.get_thread_v2(thread_id)
        except QuipClientError as e:
            logger.error(f"Quip client error: {e}")
    """

    pass


class QuipApiError(QuipClientError):
    """Raised when the API answers with a non-success status.

    Carries the structured error body returned by the API. When the body is
    absent or is not the expected JSON object, ``error`` is empty,
    ``error_code`` is 0 and ``error_description`` is empty; the HTTP status
    is always kept.

    Attributes:
        status_code: HTTP status code of the response.
        error: Short machine-readable error string (e.g. "Over Rate Limit").
        error_code: Numeric error code from the body.
        error_description: Human readable description.

    Example:
        try:
            client.folders.get_folder(folder_id)
        except QuipApiError as e:
            print(f"An error occurred ({e.error}, code: {e.error_code}): "
                  f"{e.error_description}")
    """

    def __init__(
        self,
        status_code: int,
        error: str = "",
        error_code: int = 0,
        error_description: str = "",
    ):
        super().__init__(error_description)
        self.status_code = status_code
        self.error = error
        self.error_code = error_code
        self.error_description = error_description

    @property
    def is_rate_limited(self) -> bool:
        """True when the error carries the rate-limit marker or a 429 status."""
        if self.status_code == 429:
            return True
        text = f"{self.error} {self.error_description}".lower()
        return RATE_LIMIT_MARKER in text

    @classmethod
    def from_response(
        cls, status_code: int, body: str | bytes | None
    ) -> QuipApiError:
        """Build a typed error from a raw response body.

        Returns a RateLimitExceededError when the body or status indicates
        quota exhaustion, a plain QuipApiError otherwise. Never raises.
        """
        fields = _parse_error_body(body)
        error = cls(status_code, **fields)
        if error.is_rate_limited and not isinstance(error, RateLimitExceededError):
            return RateLimitExceededError(status_code, **fields)
        return error

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code}, "
            f"error={self.error!r}, error_code={self.error_code}, "
            f"error_description={self.error_description!r})"
        )


class RateLimitExceededError(QuipApiError):
    """Raised when a response indicates the request quota is exhausted.

    Recoverable: traversal callers wrap calls in a RetryDriver, which cools
    down and retries when it sees this error.
    """

    pass


class InvalidIdentifierError(QuipClientError, ValueError):
    """Raised when an identifier is rejected before any network call.

    Empty identifiers, identifiers of the wrong length and URLs that do not
    contain a usable identifier all raise this error. It is never retried.
    """

    pass


class ConfigurationError(QuipClientError, ValueError):
    """Raised when client or policy configuration is invalid.

    Common causes include:
    - Missing API token
    - Unsupported API version (only 1 and 2 exist)
    - Out-of-range rate limit policy thresholds
    """

    pass


class PaginationLimitError(QuipClientError):
    """Raised when a paginated fetch exceeds the caller-imposed page cap.

    Attributes:
        resource_key: Resource being assembled.
        max_pages: The cap that was exceeded.
    """

    def __init__(self, resource_key: str, max_pages: int):
        super().__init__(
            f"Pagination of {resource_key} exceeded {max_pages} pages "
            "without an empty cursor"
        )
        self.resource_key = resource_key
        self.max_pages = max_pages


class RetryExhaustedError(QuipClientError):
    """Raised when a RetryDriver gives up after repeated rate-limit errors.

    Attributes:
        attempts: Number of attempts performed.
        last_error: The rate-limit error seen on the final attempt.
        state: Final retry bookkeeping (a RetryState), when available.
    """

    def __init__(
        self,
        message: str,
        attempts: int,
        last_error: BaseException | None = None,
        state: Any = None,
    ):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error
        self.state = state


def _parse_error_body(body: str | bytes | None) -> dict[str, Any]:
    """Extract error fields from a JSON body, tolerating anything else."""
    fields: dict[str, Any] = {"error": "", "error_code": 0, "error_description": ""}
    if not body:
        return fields

    try:
        data = json.loads(body)
    except (ValueError, TypeError):
        return fields

    if not isinstance(data, dict):
        return fields

    error = data.get("error")
    if isinstance(error, str):
        fields["error"] = error

    error_code = data.get("error_code")
    if isinstance(error_code, int) and not isinstance(error_code, bool):
        fields["error_code"] = error_code
    elif isinstance(error_code, str) and error_code.strip().lstrip("-").isdigit():
        fields["error_code"] = int(error_code)

    description = data.get("error_description")
    if isinstance(description, str):
        fields["error_description"] = description

    return fields
