# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
HTTP transports built on httpx.

Both transports satisfy the transport call contract: send a method, a path
relative to the API base URL, headers and parameters; hand back status code,
headers and raw body. Parameters travel in the query string for GET requests
and as a form body otherwise. Network failures (httpx.TransportError) are
not caught here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
from typing_extensions import Self

from .config import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class TransportResponse:
    """
    Raw result of one transport call.

    Attributes:
        status_code: HTTP status code
        headers: Response headers (names as sent by the server)
        body: Raw response body
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> TransportResponse:
        return cls(
            status_code=response.status_code,
            headers=dict(response.headers.items()),
            body=response.content,
        )


def _clean_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop parameters whose value is None."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None}


def _request_kwargs(method: str, params: Mapping[str, Any] | None) -> dict[str, Any]:
    cleaned = _clean_params(params)
    if not cleaned:
        return {}
    if method.upper() == "GET":
        return {"params": cleaned}
    return {"data": cleaned}


class HttpxTransport:
    """
    Blocking transport on top of httpx.Client.

    Example:
        >>> with HttpxTransport() as transport:
        ...     response = transport.send("GET", "1/users/current", headers)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: API root, e.g. "https://platform.quip.com/"
            timeout: Request timeout in seconds
            client: Pre-built httpx.Client (e.g. with a MockTransport); when
                given, base_url and timeout are ignored and the caller owns it
        """
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    def send(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        params: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        response = self._client.request(
            method, path, headers=dict(headers), **_request_kwargs(method, params)
        )
        logger.debug(f"{method} {path} -> {response.status_code}")
        return TransportResponse.from_httpx(response)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AsyncHttpxTransport:
    """Non-blocking transport on top of httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def send(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        params: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        response = await self._client.request(
            method, path, headers=dict(headers), **_request_kwargs(method, params)
        )
        logger.debug(f"{method} {path} -> {response.status_code}")
        return TransportResponse.from_httpx(response)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["AsyncHttpxTransport", "HttpxTransport", "TransportResponse"]
