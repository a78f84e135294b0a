# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Thread identifier validation.

Malformed identifiers are rejected before any request is built, so a typo
never costs a unit of rate limit quota.
"""

from __future__ import annotations

from urllib.parse import urlparse

from .exceptions import InvalidIdentifierError

MIN_IDENTIFIER_LENGTH = 10
MAX_IDENTIFIER_LENGTH = 32


def validate_thread_identifier(identifier: str | None) -> str:
    """
    Validate a v2 thread id or secret path.

    Returns:
        The identifier with surrounding whitespace removed

    Raises:
        InvalidIdentifierError: If empty or not 10-32 characters long
    """
    value = (identifier or "").strip()
    if not value:
        raise InvalidIdentifierError("Thread identifier must not be empty")
    if not MIN_IDENTIFIER_LENGTH <= len(value) <= MAX_IDENTIFIER_LENGTH:
        raise InvalidIdentifierError(
            f"Thread identifier '{value}' must be between "
            f"{MIN_IDENTIFIER_LENGTH} and {MAX_IDENTIFIER_LENGTH} characters "
            f"(got {len(value)})"
        )
    return value


def extract_identifier_from_url(url: str) -> str:
    """
    Reduce a thread URL to its identifier.

    ``https://quip.com/AbCdEfGhIjKl/Some-Title`` yields ``AbCdEfGhIjKl``.

    Raises:
        InvalidIdentifierError: If the URL has no path or the first path
            segment is not a valid identifier
    """
    parsed = urlparse(url.strip())
    segments = [s for s in parsed.path.split("/") if s]
    if not parsed.netloc or not segments:
        raise InvalidIdentifierError(f"'{url}' is not a thread URL")
    return validate_thread_identifier(segments[0])


def resolve_thread_identifier(value: str) -> str:
    """Accept either a bare identifier or a thread URL."""
    if "://" in value:
        return extract_identifier_from_url(value)
    return validate_thread_identifier(value)


__all__ = [
    "MAX_IDENTIFIER_LENGTH",
    "MIN_IDENTIFIER_LENGTH",
    "extract_identifier_from_url",
    "resolve_thread_identifier",
    "validate_thread_identifier",
]
