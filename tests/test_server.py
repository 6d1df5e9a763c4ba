"""Tests for the FastMCP layer, run in memory."""

from __future__ import annotations

import json

import httpx
import pytest
from fastmcp import Client
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND

from http_client_mcp.server import build_server


@pytest.fixture
def server(executor):
    return build_server(executor)


def _payload(result):
    return json.loads(result.content[0].text)


@pytest.mark.anyio
async def test_server_lists_the_catalog(server):
    async with Client(server) as client:
        tools = await client.list_tools()

    by_name = {tool.name: tool for tool in tools}
    assert list(by_name) == ["http_request", "http_get", "http_post", "set_default_headers"]
    assert by_name["http_get"].description == "Simplified GET request"
    assert by_name["http_request"].inputSchema["required"] == ["url"]
    assert by_name["http_request"].inputSchema["properties"]["timeout"]["default"] == 30000
    assert by_name["http_post"].inputSchema["required"] == ["url", "data"]


@pytest.mark.anyio
async def test_http_get_tool_returns_envelope(server):
    async with Client(server) as client:
        result = await client.call_tool_mcp("http_get", {"url": "https://example.com/posts/1"})

    assert result.isError is False
    payload = _payload(result)
    assert payload["success"] is True
    assert payload["status"] == 200
    assert payload["body"]["id"] == 1
    assert payload["url"] == "https://example.com/posts/1"


@pytest.mark.anyio
async def test_connection_failure_is_a_tool_result(server):
    async with Client(server) as client:
        result = await client.call_tool_mcp("http_get", {"url": "https://example.com/down"})

    assert result.isError is False
    payload = _payload(result)
    assert payload["success"] is False
    assert payload["type"] == "ConnectError"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "name, args, code, message",
    [
        ("http_request", {"url": "https://example.com/slow", "timeout": 1}, INTERNAL_ERROR, "Request timed out after 1ms"),
        ("http_request", {}, INVALID_PARAMS, "URL is required"),
        ("http_request", {"url": ""}, INVALID_PARAMS, "URL is required"),
        ("http_get", {"headers": {"A": "1"}}, INVALID_PARAMS, "URL is required"),
        ("http_post", {"url": "https://example.com/echo"}, INVALID_PARAMS, "Data is required for POST"),
        ("set_default_headers", {}, INVALID_PARAMS, "Headers object is required"),
        ("nope", {}, METHOD_NOT_FOUND, "Unknown tool: nope"),
    ],
)
async def test_faults_are_json_rpc_errors_with_code(server, name, args, code, message):
    async with Client(server) as client:
        with pytest.raises(McpError) as excinfo:
            await client.call_tool_mcp(name, args)

    assert excinfo.value.error.code == code
    assert excinfo.value.error.message == message


@pytest.mark.anyio
async def test_default_headers_persist_between_calls(server, executor):
    async with Client(server) as client:
        await client.call_tool_mcp("set_default_headers", {"headers": {"X-Api-Key": "k1"}})
        result = await client.call_tool_mcp("http_get", {"url": "https://example.com/echo"})

    assert _payload(result)["body"]["headers"]["x-api-key"] == "k1"
    assert executor.default_headers["X-Api-Key"] == "k1"


@pytest.mark.anyio
async def test_health_route(server):
    transport = httpx.ASGITransport(app=server.http_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "server": "http-client-server",
        "version": "1.0.0",
        "tools": 4,
    }
