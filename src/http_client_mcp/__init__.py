"""
HTTP client tools exposed over MCP.
"""

from .executor import RequestExecutor
from .errors import ExecutionFailed, InvalidArguments, ToolFault, UnknownOperation

__version__ = "1.0.0"

__all__ = [
    "RequestExecutor",
    "ToolFault",
    "InvalidArguments",
    "UnknownOperation",
    "ExecutionFailed",
]
