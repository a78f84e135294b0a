# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Rate-limit-aware retry for long-running traversal callers.

This is a fallback behind the coordinator's proactive smoothing: even with
smoothing, a traversal can race other processes sharing the same quota and
hit the hard wall. The driver retries only rate-limit failures, after a fixed
cooldown, and gives up after a bounded number of attempts. Every other error
fails immediately.

State machine:
    Attempting -> Done                     (success)
    Attempting -> Cooldown -> Attempting   (rate limited, attempts < max)
    Attempting -> GivenUp                  (rate limited, attempts >= max)
    Attempting -> Failed                   (any other error, no retry)
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from .config import RetryConfig
from .exceptions import RATE_LIMIT_MARKER, QuipApiError, RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryOutcome(Enum):
    """Terminal states of one retried operation."""

    DONE = "done"
    GIVEN_UP = "given_up"
    FAILED = "failed"


@dataclass
class RetryState:
    """
    Ephemeral retry bookkeeping for a single logical operation.

    Attributes:
        max_attempts: Bound on total attempts
        cooldown: Fixed wait between attempts in seconds
        attempts: Attempts performed so far
        cooldowns: Cooldown sleeps performed so far
        outcome: Terminal state, None while still attempting
    """

    max_attempts: int
    cooldown: float
    attempts: int = 0
    cooldowns: int = 0
    outcome: RetryOutcome | None = None

    @property
    def can_retry(self) -> bool:
        return self.attempts < self.max_attempts


def is_rate_limit_error(error: BaseException) -> bool:
    """
    Check if an exception represents rate-limit exhaustion.

    Recognizes typed API errors carrying the rate-limit marker, exceptions
    whose class name mentions a rate limit, a 429 ``status_code`` attribute,
    and any exception whose message contains the marker.
    """
    if isinstance(error, QuipApiError):
        return error.is_rate_limited

    error_name = type(error).__name__.lower()
    if "ratelimit" in error_name:
        return True

    if getattr(error, "status_code", None) == 429:
        return True

    return RATE_LIMIT_MARKER in str(error).lower()


class RetryDriver:
    """
    Retries an operation through rate-limit failures with a fixed cooldown.

    Attributes:
        max_attempts: Total attempts before giving up (default: 60)
        cooldown: Seconds between attempts (default: 60.0)
        last_state: RetryState of the most recent run. Only meaningful when a
            single caller uses the driver; concurrent runs overwrite it, so
            read the state from RetryExhaustedError.state instead

    Example:
        >>> driver = RetryDriver(max_attempts=60, cooldown=60.0)
        >>> folder = driver.run(lambda: client.folders.get_folder(folder_id))
    """

    def __init__(
        self,
        max_attempts: int = 60,
        cooldown: float = 60.0,
        sleep: Callable[[float], Any] = time.sleep,
        async_sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize the driver.

        Args:
            max_attempts: Bound on total attempts, first call included
            cooldown: Fixed cooldown in seconds
            sleep: Blocking sleep used by ``run``
            async_sleep: Awaitable sleep used by ``run_async``
        """
        config = RetryConfig(max_attempts=max_attempts, cooldown=cooldown)
        self.max_attempts = config.max_attempts
        self.cooldown = config.cooldown
        self._sleep = sleep
        self._async_sleep = async_sleep
        self.last_state: RetryState | None = None

    @classmethod
    def from_config(cls, config: RetryConfig, **kwargs: Any) -> RetryDriver:
        return cls(max_attempts=config.max_attempts, cooldown=config.cooldown, **kwargs)

    def _new_state(self) -> RetryState:
        state = RetryState(max_attempts=self.max_attempts, cooldown=self.cooldown)
        self.last_state = state
        return state

    def _on_error(self, state: RetryState, error: Exception, description: str) -> None:
        """Classify a failed attempt; raises unless a cooldown should follow."""
        if not is_rate_limit_error(error):
            state.outcome = RetryOutcome.FAILED
            raise error

        if not state.can_retry:
            state.outcome = RetryOutcome.GIVEN_UP
            logger.error(
                f"Giving up on {description} after {state.attempts} "
                f"rate-limited attempts"
            )
            raise RetryExhaustedError(
                f"Rate limit persisted for {description} after "
                f"{state.attempts} attempts",
                attempts=state.attempts,
                last_error=error,
                state=state,
            ) from error

        state.cooldowns += 1
        logger.warning(
            f"Rate limited on {description} (attempt {state.attempts}/"
            f"{state.max_attempts}); cooling down for {state.cooldown:.0f}s"
        )

    def run(self, operation: Callable[[], T], description: str = "operation") -> T:
        """
        Run ``operation`` until it succeeds, fails, or the driver gives up.

        Raises:
            RetryExhaustedError: Rate-limited on every allowed attempt
            Exception: Any non-rate-limit error from ``operation``, unchanged
        """
        state = self._new_state()
        while True:
            state.attempts += 1
            try:
                result = operation()
            except Exception as e:
                self._on_error(state, e, description)
                self._sleep(state.cooldown)
                continue
            state.outcome = RetryOutcome.DONE
            return result

    async def run_async(
        self,
        operation: Callable[[], Awaitable[T]],
        description: str = "operation",
    ) -> T:
        """Asynchronous counterpart of ``run``; cooldowns do not block the loop."""
        state = self._new_state()
        while True:
            state.attempts += 1
            try:
                result = await operation()
            except Exception as e:
                self._on_error(state, e, description)
                await self._async_sleep(state.cooldown)
                continue
            state.outcome = RetryOutcome.DONE
            return result


__all__ = [
    "RetryDriver",
    "RetryOutcome",
    "RetryState",
    "is_rate_limit_error",
]
