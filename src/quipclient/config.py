# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Configuration for the Quip client.

This module provides the library-level policy dataclasses (rate limit tiers,
traversal retry) and the process-level settings loaded from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://platform.quip.com/"
SUPPORTED_API_VERSIONS = (1, 2)


@dataclass(frozen=True)
class RateLimitPolicy:
    """
    Tier thresholds that turn a window's quota state into a delay.

    The thresholds and constants are policy knobs, not derived values.
    """

    approaching_ratio: float = 0.2
    """Below this fraction of the limit, apply a fixed light delay."""

    nearly_exhausted_ratio: float = 0.05
    """Below this fraction, spread the remaining quota over the remaining time."""

    approaching_delay: float = 0.5
    """Fixed delay in seconds for the approaching tier."""

    exhausted_margin: float = 1.0
    """Seconds added to the time until reset when the window is exhausted."""

    def __post_init__(self) -> None:
        """Validate policy after initialization."""
        if not 0 < self.nearly_exhausted_ratio <= self.approaching_ratio <= 1.0:
            raise ConfigurationError(
                "ratios must satisfy 0 < nearly_exhausted_ratio "
                "<= approaching_ratio <= 1.0"
            )
        if self.approaching_delay < 0:
            raise ConfigurationError("approaching_delay must be non-negative")
        if self.exhausted_margin < 0:
            raise ConfigurationError("exhausted_margin must be non-negative")


DEFAULT_POLICY = RateLimitPolicy()


@dataclass
class RetryConfig:
    """
    Configuration for rate-limit retries in traversal callers.

    The cooldown is fixed rather than derived from the window reset time.
    """

    max_attempts: int = 60
    """Total attempts (first call included) before giving up."""

    cooldown: float = 60.0
    """Seconds to wait after a rate-limit error before the next attempt."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")
        if self.cooldown < 0:
            raise ConfigurationError("cooldown must be non-negative")


class QuipSettings(BaseSettings):
    """Process settings loaded from environment variables or a .env file.

    The token is read from ``QUIP_TOKEN``, falling back to ``QuipApiKey``,
    the variable used by the shell front end.
    """

    token: str = Field(
        default="",
        validation_alias=AliasChoices("QUIP_TOKEN", "QuipApiKey"),
    )
    api_version: int = 1
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    auto_rate_limit: bool = True
    my_email: str | None = None

    retry_max_attempts: int = 60
    retry_cooldown: float = 60.0

    model_config = SettingsConfigDict(
        env_prefix="QUIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("api_version")
    @classmethod
    def _validate_api_version(cls, value: int) -> int:
        if value not in SUPPORTED_API_VERSIONS:
            raise ValueError(f"api_version must be one of {SUPPORTED_API_VERSIONS}")
        return value

    @field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        return value if value.endswith("/") else value + "/"

    def retry_config(self) -> RetryConfig:
        """Build the traversal retry configuration from these settings."""
        return RetryConfig(
            max_attempts=self.retry_max_attempts, cooldown=self.retry_cooldown
        )


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_POLICY",
    "SUPPORTED_API_VERSIONS",
    "QuipSettings",
    "RateLimitPolicy",
    "RetryConfig",
]
