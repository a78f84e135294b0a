# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures.

FakeQuipApi is an httpx.MockTransport handler that serves canned JSON per
(method, path) and records every request, so resource, client, traversal and
CLI tests exercise the real transport and executor code paths.
"""

from __future__ import annotations

import time
from typing import Any
from urllib.parse import parse_qs

import httpx
import pytest

from quipclient import HttpxTransport, QuipClient


class FakeQuipApi:
    """Routes requests to queued canned responses."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[tuple[int, Any, dict[str, str]]]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        json: Any = None,
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> FakeQuipApi:
        """
        Queue a response for ``method path``.

        Responses queued for the same route are served in order; the last
        one keeps being served once the queue is down to it.
        """
        self.routes.setdefault((method, "/" + path.lstrip("/")), []).append(
            (status, json, headers or {})
        )
        return self

    def error(
        self,
        method: str,
        path: str,
        status: int,
        error: str,
        error_code: int,
        description: str,
    ) -> FakeQuipApi:
        return self.add(
            method,
            path,
            json={
                "error": error,
                "error_code": error_code,
                "error_description": description,
            },
            status=status,
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(
                404,
                json={
                    "error": "Not Found",
                    "error_code": 404,
                    "error_description": f"No route for {request.url.path}",
                },
            )
        status, body, headers = queue.pop(0) if len(queue) > 1 else queue[0]
        return httpx.Response(status, json=body, headers=headers)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)

    def last_form(self) -> dict[str, str]:
        parsed = parse_qs(self.requests[-1].content.decode())
        return {k: v[0] for k, v in parsed.items()}


@pytest.fixture
def fake_api() -> FakeQuipApi:
    return FakeQuipApi()


@pytest.fixture
def transport(fake_api: FakeQuipApi):
    http_client = httpx.Client(
        base_url="https://platform.quip.com/",
        transport=httpx.MockTransport(fake_api),
    )
    yield HttpxTransport(client=http_client)
    http_client.close()


@pytest.fixture
def client(transport: HttpxTransport) -> QuipClient:
    """Client with automatic rate limiting off so tests never sleep."""
    return QuipClient("test-token", transport=transport, auto_rate_limit=False)


@pytest.fixture
def client_v2(transport: HttpxTransport) -> QuipClient:
    return QuipClient(
        "test-token", api_version=2, transport=transport, auto_rate_limit=False
    )


def document_json(
    thread_id: str,
    title: str = "Doc",
    author_id: str = "U1",
    link: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    return {
        "thread": {
            "id": thread_id,
            "title": title,
            "author_id": author_id,
            "link": link or f"https://quip.com/{thread_id}",
            "created_usec": 1_700_000_000_000_000,
            "updated_usec": 1_700_000_100_000_000,
        },
        "user_ids": [author_id],
        "shared_folder_ids": [],
        "html": "<p>body</p>",
        **extra,
    }


def thread_v2_json(
    thread_id: str,
    title: str = "Doc",
    thread_type: str = "DOCUMENT",
    updated_usec: int = 1_700_000_100_000_000,
) -> dict[str, Any]:
    return {
        "thread": {
            "id": thread_id,
            "title": title,
            "type": thread_type,
            "author_id": "U1",
            "is_template": False,
            "secret_path": thread_id,
            "link": f"https://quip.com/{thread_id}",
            "created_usec": 1_700_000_000_000_000,
            "updated_usec": updated_usec,
        }
    }


def folder_json(
    folder_id: str,
    title: str = "Folder",
    thread_ids: list[str] | None = None,
    folder_ids: list[str] | None = None,
) -> dict[str, Any]:
    children = [{"thread_id": t} for t in thread_ids or []]
    children += [{"folder_id": f} for f in folder_ids or []]
    return {
        "folder": {"id": folder_id, "title": title},
        "member_ids": ["U1"],
        "children": children,
    }


def rate_limit_headers(limit: int, remaining: int, reset_in: float = 60.0) -> dict[str, str]:
    """Build an X-Ratelimit-* header triple resetting ``reset_in`` seconds from now."""
    return {
        "X-Ratelimit-Limit": str(limit),
        "X-Ratelimit-Remaining": str(remaining),
        "X-Ratelimit-Reset": str(int(time.time() + reset_in)),
    }


class Payloads:
    """Canned API payload builders, exposed through the ``payloads`` fixture."""

    document = staticmethod(document_json)
    thread_v2 = staticmethod(thread_v2_json)
    folder = staticmethod(folder_json)
    rate_limit_headers = staticmethod(rate_limit_headers)


@pytest.fixture
def payloads() -> type[Payloads]:
    return Payloads
