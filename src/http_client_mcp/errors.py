"""
Protocol-level faults raised by the request executor.

Failures of the HTTP call itself are not faults: they come back as
``{"success": false, ...}`` envelopes. A ToolFault means the tool invocation
was rejected or could not run, and is surfaced to the MCP caller as an error
response carrying one of the JSON-RPC codes below.
"""

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData


class ToolFault(Exception):
    code = INTERNAL_ERROR
    label = "internal-error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_mcp_error(self) -> McpError:
        return McpError(ErrorData(code=self.code, message=self.message))


class InvalidArguments(ToolFault):
    code = INVALID_PARAMS
    label = "invalid-parameters"


class UnknownOperation(ToolFault):
    code = METHOD_NOT_FOUND
    label = "method-not-found"


class ExecutionFailed(ToolFault):
    code = INTERNAL_ERROR
    label = "internal-error"
