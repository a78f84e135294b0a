# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Quip API client.

The client is the composition root: it owns exactly one RateLimitCoordinator
and one RequestExecutor, and every resource wrapper shares them. Two clients
never share quota bookkeeping, so multiple tokens can be used side by side.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from typing_extensions import Self

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_POLICY,
    SUPPORTED_API_VERSIONS,
    QuipSettings,
    RateLimitPolicy,
)
from .exceptions import ConfigurationError
from .executor import RequestExecutor
from .rate_limit.coordinator import RateLimitCoordinator
from .resources import FoldersResource, MessagesResource, ThreadsResource, UsersResource
from .transport import DEFAULT_TIMEOUT, HttpxTransport

if TYPE_CHECKING:
    from .protocols.classifier import WindowClassifierProtocol
    from .protocols.transport import TransportProtocol

logger = logging.getLogger(__name__)


class QuipClient:
    """
    Entry point for the Quip API.

    Attributes:
        coordinator: Rate limit state for this client's token
        threads: Thread and document operations
        folders: Folder operations
        users: User operations
        messages: Message operations

    Example:
        >>> with QuipClient(token, api_version=2) as client:
        ...     me = client.users.get_current_user()
        ...     print(client.coordinator.status())
    """

    def __init__(
        self,
        token: str,
        api_version: int = 1,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        auto_rate_limit: bool = True,
        transport: TransportProtocol | None = None,
        policy: RateLimitPolicy = DEFAULT_POLICY,
        window_classifier: WindowClassifierProtocol | None = None,
    ):
        """
        Initialize the client.

        Args:
            token: Personal access token, sent as a bearer token
            api_version: Version prefix for version-agnostic endpoints (1 or 2)
            base_url: API root
            timeout: Request timeout in seconds for the default transport
            auto_rate_limit: Apply the coordinator's delay before each call
            transport: Custom transport; an HttpxTransport is built otherwise
            policy: Delay tier thresholds
            window_classifier: Decides which window observed headers describe

        Raises:
            ConfigurationError: Missing token or unsupported API version
        """
        if not token:
            raise ConfigurationError("An API token is required")
        if api_version not in SUPPORTED_API_VERSIONS:
            raise ConfigurationError(
                f"Unsupported API version {api_version}; "
                f"expected one of {SUPPORTED_API_VERSIONS}"
            )

        self.api_version = api_version
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._owned_transport: HttpxTransport | None = None
        if transport is None:
            transport = self._owned_transport = HttpxTransport(self.base_url, timeout)
        self.transport = transport

        self.coordinator = RateLimitCoordinator(
            policy=policy, window_classifier=window_classifier
        )
        self.executor = RequestExecutor(
            self.transport, token, self.coordinator, auto_rate_limit
        )

        self.threads = ThreadsResource(self.executor, api_version)
        self.folders = FoldersResource(self.executor, api_version)
        self.users = UsersResource(self.executor, api_version)
        self.messages = MessagesResource(self.executor, api_version)

        logger.debug(f"Created Quip client for {self.base_url} (API v{api_version})")

    @classmethod
    def from_settings(
        cls, settings: QuipSettings | None = None, **kwargs: Any
    ) -> QuipClient:
        """Build a client from environment-backed settings."""
        settings = settings or QuipSettings()
        return cls(
            token=settings.token,
            api_version=settings.api_version,
            base_url=settings.base_url,
            timeout=settings.timeout,
            auto_rate_limit=settings.auto_rate_limit,
            **kwargs,
        )

    @property
    def auto_rate_limit(self) -> bool:
        return self.executor.auto_rate_limit

    @auto_rate_limit.setter
    def auto_rate_limit(self, enabled: bool) -> None:
        self.executor.auto_rate_limit = enabled

    def api_info(self) -> str:
        """Describe the endpoint this client talks to."""
        return f"Quip API v{self.api_version} at {self.base_url}{self.api_version}/"

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owned_transport is not None:
            self._owned_transport.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["QuipClient"]
