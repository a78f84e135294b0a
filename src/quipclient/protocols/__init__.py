# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable client components.

Available protocols:
- TransportProtocol / AsyncTransportProtocol: the HTTP call capability
- WindowClassifierProtocol: tags rate limit headers with a window kind
- PageProtocol: one page of cursor-paginated content
"""

from .classifier import WindowClassifierProtocol
from .page import PageProtocol
from .transport import AsyncTransportProtocol, TransportProtocol

__all__ = [
    "AsyncTransportProtocol",
    "PageProtocol",
    "TransportProtocol",
    "WindowClassifierProtocol",
]
