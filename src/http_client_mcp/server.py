"""
HTTP Client FastMCP Server
--------------------------
Exposes generic HTTP request capability as MCP tools.

Tools exposed:
 - http_request
 - http_get
 - http_post
 - set_default_headers

Tool listing and tool calls are answered straight from the RequestExecutor:
the advertised schemas are the executor's catalog, and arguments reach the
executor unbound so it alone decides what is invalid. Faults leave as JSON-RPC
errors carrying their code; HTTP outcomes leave as a JSON text result.

Runs on stdio by default; set HTTP_MCP_TRANSPORT=streamable-http (or http/sse)
to serve over HTTP, which also enables GET /health.
"""

from __future__ import annotations

import json

from fastmcp import FastMCP
from mcp import types
from starlette.requests import Request
from starlette.responses import JSONResponse

from . import __version__
from .config import SERVER_NAME, Settings
from .errors import ToolFault
from .executor import RequestExecutor
from .logging_config import get_logger, setup_logging

logger = get_logger("http_client_mcp.server")


def _text_result(payload: dict) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=json.dumps(payload, indent=2))],
        isError=False,
    )


def build_server(executor: RequestExecutor | None = None) -> FastMCP:
    """
    Create the FastMCP app and route tools/list and tools/call to ``executor``.
    """
    executor = executor or RequestExecutor()
    mcp = FastMCP(name=SERVER_NAME)
    handlers = mcp._mcp_server.request_handlers

    async def list_tools(req: types.ListToolsRequest) -> types.ServerResult:  # noqa: ARG001
        tools = [types.Tool(**op) for op in executor.list_operations()]
        return types.ServerResult(types.ListToolsResult(tools=tools))

    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        try:
            payload = await executor.execute(name, req.params.arguments)
        except ToolFault as fault:
            logger.warning("Tool %s rejected [%s]: %s", name, fault.label, fault.message)
            # McpError is turned into a JSON-RPC error response by the session.
            raise fault.to_mcp_error() from fault
        return types.ServerResult(_text_result(payload))

    handlers[types.ListToolsRequest] = list_tools
    handlers[types.CallToolRequest] = call_tool

    @mcp.custom_route("/health", methods=["GET"])
    async def health(request: Request) -> JSONResponse:  # noqa: ARG001
        return JSONResponse(
            {
                "status": "healthy",
                "server": SERVER_NAME,
                "version": __version__,
                "tools": len(executor.list_operations()),
            }
        )

    return mcp


# -----------------------------
# Start MCP server
# -----------------------------
def main() -> None:
    settings = Settings.from_env()
    log_file = setup_logging(settings.log_dir, settings.log_level)
    logger.info("Logging to %s", log_file)

    executor = RequestExecutor(
        default_headers={"User-Agent": settings.user_agent},
        default_timeout_ms=settings.default_timeout_ms,
    )
    mcp = build_server(executor)

    try:
        if settings.transport == "stdio":
            logger.info("Starting HTTP Client MCP server on stdio")
            mcp.run(transport="stdio")
        else:
            logger.info(
                "Starting HTTP Client MCP server (%s) on http://%s:%s",
                settings.transport,
                settings.host,
                settings.port,
            )
            mcp.run(transport=settings.transport, host=settings.host, port=settings.port)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")

    logger.info("HTTP Client MCP server stopped")


if __name__ == "__main__":
    main()
