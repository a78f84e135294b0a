# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocols for the HTTP transport capability."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..transport import TransportResponse


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Minimal protocol for the blocking HTTP call.

    The core treats the transport as an opaque capability: any HTTP client
    that can send a request and hand back status, headers and raw body works.
    Network failures propagate from ``send`` unchanged.
    """

    def send(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        params: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        """Send one request; ``params`` go to the query (GET) or form body."""
        ...


@runtime_checkable
class AsyncTransportProtocol(Protocol):
    """Asynchronous counterpart of TransportProtocol."""

    async def send(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        params: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        """Send one request without blocking the event loop."""
        ...
