"""Shared fixtures: an executor wired to an in-process fake web server."""

from __future__ import annotations

import anyio
import httpx
import pytest

from http_client_mcp import RequestExecutor


@pytest.fixture
def anyio_backend():
    return "asyncio"


async def fake_site(request: httpx.Request) -> httpx.Response:
    path = request.url.path

    if path == "/posts/1":
        if request.method == "HEAD":
            return httpx.Response(200, headers={"Content-Type": "application/json"})
        return httpx.Response(200, json={"userId": 1, "id": 1, "title": "hello"})
    if path == "/text":
        return httpx.Response(200, text="hello")
    if path == "/echo":
        return httpx.Response(
            200,
            json={
                "method": request.method,
                "headers": dict(request.headers.items()),
                "body": request.content.decode(),
                "query": [list(item) for item in request.url.params.multi_items()],
            },
        )
    if path == "/redirect":
        return httpx.Response(302, headers={"Location": "https://example.com/posts/1"})
    if path == "/slow":
        await anyio.sleep(2)
        return httpx.Response(200, text="too late")
    if path == "/down":
        raise httpx.ConnectError("Connection refused", request=request)
    return httpx.Response(404, text="not found")


@pytest.fixture
def transport() -> httpx.MockTransport:
    return httpx.MockTransport(fake_site)


@pytest.fixture
def executor(transport) -> RequestExecutor:
    return RequestExecutor(transport=transport)
