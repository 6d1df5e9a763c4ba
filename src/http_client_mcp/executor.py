"""
Request Executor
----------------
Implements the four HTTP client tools independently of the MCP transport.

Tools:
 - http_request          generic request (any method, headers, body, query params, timeout, redirects)
 - http_get              http_request with method forced to GET
 - http_post             POST with a derived Content-Type header
 - set_default_headers   merge or replace the headers sent with every request

Results are plain dicts ready to be serialized as tool output. Failures of
the HTTP call are returned as ``success: false`` envelopes; malformed
invocations and timeouts raise a ToolFault instead.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from typing import Any

import anyio
import httpx
from pydantic import BaseModel, ValidationError

from .config import DEFAULT_TIMEOUT_MS, DEFAULT_USER_AGENT
from .errors import ExecutionFailed, InvalidArguments, ToolFault, UnknownOperation
from .schemas import (
    BODY_METHODS,
    ContentType,
    DefaultHeadersArguments,
    DefaultHeadersEnvelope,
    ErrorEnvelope,
    HttpMethod,
    PostArguments,
    RequestDescriptor,
    ResponseEnvelope,
)

logger = logging.getLogger("http_client_mcp.executor")

_STRING_MAP = {"type": "object", "additionalProperties": {"type": "string"}}

# Canonical tool catalog (name -> description/inputSchema), served to MCP clients.
OPERATIONS: list[dict[str, Any]] = [
    {
        "name": "http_request",
        "description": (
            "Make HTTP requests with any method "
            "(GET, POST, PUT, DELETE, PATCH, HEAD, OPTIONS, etc.)"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "url": {"type": "string"},
                "method": {
                    "type": "string",
                    "enum": [m.value for m in HttpMethod],
                    "default": "GET",
                },
                "headers": _STRING_MAP,
                "body": {"type": "string"},
                "query_params": _STRING_MAP,
                "timeout": {"type": "integer", "default": DEFAULT_TIMEOUT_MS},
                "follow_redirects": {"type": "boolean", "default": True},
            },
            "required": ["url"],
        },
    },
    {
        "name": "http_get",
        "description": "Simplified GET request",
        "inputSchema": {
            "type": "object",
            "properties": {
                "url": {"type": "string"},
                "headers": _STRING_MAP,
                "query_params": _STRING_MAP,
            },
            "required": ["url"],
        },
    },
    {
        "name": "http_post",
        "description": "Simplified POST request",
        "inputSchema": {
            "type": "object",
            "properties": {
                "url": {"type": "string"},
                "data": {"type": "string"},
                "content_type": {
                    "type": "string",
                    "enum": [c.value for c in ContentType],
                    "default": ContentType.JSON.value,
                },
                "headers": _STRING_MAP,
            },
            "required": ["url", "data"],
        },
    },
    {
        "name": "set_default_headers",
        "description": "Set headers for all requests",
        "inputSchema": {
            "type": "object",
            "properties": {
                "headers": _STRING_MAP,
                "merge": {"type": "boolean", "default": True},
            },
            "required": ["headers"],
        },
    },
]


def merge_headers(base: Mapping[str, str], override: Mapping[str, str]) -> dict[str, str]:
    """
    Overlay ``override`` on ``base``. Header names match case-insensitively;
    the overriding name and value replace any existing spelling.
    """
    merged = dict(base)
    for name, value in override.items():
        for existing in [k for k in merged if k.lower() == name.lower()]:
            del merged[existing]
        merged[name] = value
    return merged


def build_url(base_url: str, query_params: Mapping[str, Any] | None) -> str:
    """
    Append query parameters to ``base_url`` in mapping order.

    Parameters already on the URL are kept, so a key can end up repeated.
    List values add one pair per element.
    """
    if not query_params:
        return base_url
    url = httpx.URL(base_url)
    for key, value in query_params.items():
        values = value if isinstance(value, list) else [value]
        for item in values:
            url = url.copy_add_param(key, item)
    return str(url)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_body(text: str) -> Any:
    """Return the decoded JSON value of ``text``, or ``text`` itself if it isn't JSON."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return text


def _validate(model: type[BaseModel], args: Mapping[str, Any]) -> Any:
    try:
        return model.model_validate(dict(args))
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidArguments(f"Invalid arguments: {details}") from None


def _clean_args(args: Any) -> dict[str, Any]:
    # JSON null and a missing key mean the same thing for every tool argument.
    if args is None:
        return {}
    if not isinstance(args, Mapping):
        raise InvalidArguments("Tool arguments must be an object")
    return {k: v for k, v in args.items() if v is not None}


class RequestExecutor:
    """
    Executes HTTP client tools and owns the default-header state.

    ``transport`` is handed to every httpx client; tests pass an
    ``httpx.MockTransport`` here.
    """

    def __init__(
        self,
        default_headers: Mapping[str, str] | None = None,
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if default_headers is None:
            default_headers = {"User-Agent": DEFAULT_USER_AGENT}
        self._default_headers: dict[str, str] = dict(default_headers)
        self._default_timeout_ms = default_timeout_ms
        self._transport = transport
        self._handlers = {
            "http_request": self.http_request,
            "http_get": self.http_get,
            "http_post": self.http_post,
            "set_default_headers": self.set_default_headers,
        }

    @property
    def default_headers(self) -> dict[str, str]:
        return dict(self._default_headers)

    def list_operations(self) -> list[dict[str, Any]]:
        return copy.deepcopy(OPERATIONS)

    async def execute(self, name: str, args: Mapping[str, Any] | None = None) -> dict:
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownOperation(f"Unknown tool: {name}")

        try:
            return await handler(_clean_args(args))
        except ToolFault:
            raise
        except Exception as e:
            logger.exception("Tool %s failed unexpectedly", name)
            raise ExecutionFailed(f"Tool execution failed: {e}") from e

    # -----------------------------
    # Tools
    # -----------------------------

    async def http_request(self, args: Mapping[str, Any]) -> dict:
        descriptor = _validate(RequestDescriptor, args)
        return await self._request(descriptor)

    async def http_get(self, args: Mapping[str, Any]) -> dict:
        return await self.http_request({**args, "method": HttpMethod.GET.value})

    async def http_post(self, args: Mapping[str, Any]) -> dict:
        params = _validate(PostArguments, args)
        if not params.data:
            raise InvalidArguments("Data is required for POST")

        headers = merge_headers({"Content-Type": params.content_type.value}, params.headers)
        descriptor = RequestDescriptor(
            url=params.url,
            method=HttpMethod.POST,
            headers=headers,
            body=params.data,
        )
        return await self._request(descriptor)

    async def set_default_headers(self, args: Mapping[str, Any]) -> dict:
        if not isinstance(args.get("headers"), Mapping):
            raise InvalidArguments("Headers object is required")
        params = _validate(DefaultHeadersArguments, args)

        if params.merge:
            self._default_headers = merge_headers(self._default_headers, params.headers)
        else:
            self._default_headers = dict(params.headers)

        logger.info(
            "Default headers %s -> %s",
            "merged" if params.merge else "replaced",
            sorted(self._default_headers),
        )
        return DefaultHeadersEnvelope(current_defaults=self.default_headers).model_dump()

    # -----------------------------
    # HTTP call
    # -----------------------------

    async def _request(self, descriptor: RequestDescriptor) -> dict:
        if not descriptor.url:
            raise InvalidArguments("URL is required")

        timeout_ms = descriptor.timeout if descriptor.timeout is not None else self._default_timeout_ms
        method = descriptor.method
        headers = merge_headers(self._default_headers, descriptor.headers)
        content = descriptor.body if descriptor.body and method in BODY_METHODS else None

        try:
            final_url = build_url(descriptor.url, descriptor.query_params)
            logger.info("HTTP %s %s follow_redirects=%s", method.value, final_url, descriptor.follow_redirects)
            with anyio.fail_after(timeout_ms / 1000):
                async with httpx.AsyncClient(
                    transport=self._transport,
                    timeout=None,
                    follow_redirects=descriptor.follow_redirects,
                ) as client:
                    response = await client.request(method.value, final_url, headers=headers, content=content)
        except (TimeoutError, httpx.TimeoutException):
            logger.warning("HTTP %s %s timed out after %sms", method.value, descriptor.url, timeout_ms)
            raise ExecutionFailed(f"Request timed out after {timeout_ms}ms") from None
        except Exception as e:  # network/lower level errors are reported to the caller
            logger.error("HTTP %s %s failed error=%r", method.value, descriptor.url, e)
            return ErrorEnvelope(
                error=str(e) or type(e).__name__,
                type=type(e).__name__,
                url=descriptor.url,
            ).model_dump()

        logger.info("HTTP %s %s -> %s", method.value, response.url, response.status_code)
        return ResponseEnvelope(
            status=response.status_code,
            headers=dict(response.headers.items()),
            body=parse_body(response.text),
            url=str(response.url),
        ).model_dump()
