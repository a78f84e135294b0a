# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request execution for the Quip client.

The executors are the only call path to the network. Every call goes through
rate limit enforcement before dispatch, feeds the response headers back into
the coordinator (success or failure), and translates non-success responses
into typed API errors. Resource wrappers hold an executor by composition.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .exceptions import ConfigurationError, QuipApiError, QuipClientError
from .rate_limit.coordinator import RateLimitCoordinator

if TYPE_CHECKING:
    from .protocols.transport import AsyncTransportProtocol, TransportProtocol
    from .transport import TransportResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiRequest:
    """
    One outbound API call.

    Attributes:
        method: HTTP method
        path: Path relative to the API root, version prefix included
            (e.g. "2/threads/abc/html")
        params: Query (GET) or form (POST) parameters; None values are dropped
    """

    method: str
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def get(cls, path: str, **params: Any) -> ApiRequest:
        return cls("GET", path, params)

    @classmethod
    def post(cls, path: str, **params: Any) -> ApiRequest:
        return cls("POST", path, params)


class _ExecutorBase:
    """State and response handling shared by the blocking and async executors."""

    def __init__(
        self,
        token: str,
        coordinator: RateLimitCoordinator | None = None,
        auto_rate_limit: bool = True,
    ):
        if not token:
            raise ConfigurationError("An API token is required")
        self._token = token
        self.coordinator = coordinator or RateLimitCoordinator()
        self.auto_rate_limit = auto_rate_limit

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
        }

    def _handle_response(
        self, request: ApiRequest, response: TransportResponse
    ) -> Any:
        # Failures carry rate limit headers too
        self.coordinator.update_from_headers(response.headers)

        if not response.is_success:
            error = QuipApiError.from_response(response.status_code, response.body)
            logger.warning(
                f"{request.method} {request.path} failed with "
                f"{response.status_code}: {error!r}"
            )
            raise error

        if not response.body:
            return None
        try:
            return json.loads(response.body)
        except ValueError as e:
            raise QuipClientError(
                f"{request.method} {request.path} returned a non-JSON body"
            ) from e


class RequestExecutor(_ExecutorBase):
    """
    Blocking executor: delay, dispatch, observe, translate.

    When auto rate limiting is disabled the caller is responsible for calling
    ``coordinator.apply_delay()`` itself.

    Example:
        >>> executor = RequestExecutor(HttpxTransport(), token)
        >>> user = executor.execute(ApiRequest.get("1/users/current"))
    """

    def __init__(
        self,
        transport: TransportProtocol,
        token: str,
        coordinator: RateLimitCoordinator | None = None,
        auto_rate_limit: bool = True,
    ):
        """
        Initialize the executor.

        Args:
            transport: Blocking transport capability
            token: Bearer token attached to every request
            coordinator: Shared coordinator; a fresh one is created if omitted
            auto_rate_limit: Apply the coordinator's delay before every call
        """
        super().__init__(token, coordinator, auto_rate_limit)
        self.transport = transport

    def execute(self, request: ApiRequest) -> Any:
        """
        Execute one request.

        Returns:
            Decoded JSON payload (None for an empty body)

        Raises:
            QuipApiError: Non-success status (RateLimitExceededError when the
                quota is exhausted)
            httpx.TransportError: Network-level failure, propagated unchanged
        """
        if self.auto_rate_limit:
            self.coordinator.apply_delay()

        response = self.transport.send(
            request.method, request.path, self._headers(), request.params
        )
        return self._handle_response(request, response)


class AsyncRequestExecutor(_ExecutorBase):
    """
    Asynchronous executor.

    The pre-call delay honors task cancellation and an optional cancel event;
    a cancelled wait never reaches the transport.
    """

    def __init__(
        self,
        transport: AsyncTransportProtocol,
        token: str,
        coordinator: RateLimitCoordinator | None = None,
        auto_rate_limit: bool = True,
    ):
        super().__init__(token, coordinator, auto_rate_limit)
        self.transport = transport

    async def execute(
        self, request: ApiRequest, cancel_event: asyncio.Event | None = None
    ) -> Any:
        """
        Execute one request.

        Raises:
            asyncio.CancelledError: If the rate limit wait was cancelled
            QuipApiError: Non-success status
        """
        if self.auto_rate_limit:
            await self.coordinator.apply_delay_async(cancel_event)

        response = await self.transport.send(
            request.method, request.path, self._headers(), request.params
        )
        return self._handle_response(request, response)


__all__ = ["ApiRequest", "AsyncRequestExecutor", "RequestExecutor"]
