"""Unified error handling for slack_mcp.

- ErrorCode: Error taxonomy for a tool call
- ToolError/ToolException: Caller-facing structured errors and exceptions
- Result/Ok/Err: Explicit success/failure flow
- Failure variants: ValidationFailure, RemoteFailure, UnknownTool, TransportFailure
- map_failure: The one place failures become ToolErrors
"""

from .errors import ErrorCode, ToolError, ToolException, is_transient
from .mapper import map_failure
from .result import Err, Ok, Result
from .types import (
    Failure,
    FieldIssue,
    JsonDict,
    JsonValue,
    Mode,
    RemoteFailure,
    TransportFailure,
    UnknownTool,
    ValidationFailure,
)

__all__ = [
    # Caller-facing errors
    "ErrorCode", "ToolError", "ToolException", "is_transient", "map_failure",
    # Result type
    "Result", "Ok", "Err",
    # Failure variants
    "Failure", "FieldIssue", "Mode", "RemoteFailure", "TransportFailure", "UnknownTool", "ValidationFailure",
    # JSON aliases
    "JsonDict", "JsonValue",
]
