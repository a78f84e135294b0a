# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for deciding which rate limit window a response describes."""

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from ..types.rate_limit import RateLimitWindow


@runtime_checkable
class WindowClassifierProtocol(Protocol):
    """
    Protocol for tagging observed rate limit headers with a window kind.

    Receives the response headers with lower-cased names.
    """

    def __call__(self, headers: Mapping[str, str]) -> RateLimitWindow:
        """Return the window the headers describe."""
        ...
