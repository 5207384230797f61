"""Error mapper: the single conversion point from failure variants to ToolError."""

from __future__ import annotations

from .errors import ErrorCode, ToolError, is_transient
from .types import Failure, Mode, RemoteFailure, TransportFailure, UnknownTool, ValidationFailure


def map_failure(tool_name: str, failure: Failure, *, label: str | None = None) -> ToolError:
    """Convert any failure variant into the caller-facing ToolError.

    Args:
        tool_name: Tool the call was addressed to
        failure: Failure reported by validation, normalization, the remote API or transport
        label: Human phrase for the operation, e.g. "post message"

    The message always names the cause; remote error strings are kept verbatim.
    """
    match failure:
        case UnknownTool(name=name):
            return ToolError.create(
                tool_name, f"Unknown tool: {name}", ErrorCode.UNKNOWN_TOOL,
            )
        case ValidationFailure(mode=Mode.STRICT):
            return ToolError.create(
                tool_name,
                f"Invalid arguments: {failure.message}",
                ErrorCode.INVALID_ARGUMENTS,
                details=f"schema={failure.schema_name}",
            )
        case ValidationFailure():
            what = label or failure.schema_name
            return ToolError.create(
                tool_name,
                f"Unexpected response while trying to {what}: {failure.message}",
                ErrorCode.MALFORMED_RESPONSE,
                details=f"schema={failure.schema_name}",
            )
        case RemoteFailure(operation=operation, error=error):
            return ToolError.create(
                tool_name,
                f"Failed to {label or operation}: {error}",
                ErrorCode.REMOTE_FAILURE,
                recoverable=is_transient(error),
                details=error,
            )
        case TransportFailure(operation=operation, message=message, exc_type=exc_type):
            return ToolError.create(
                tool_name,
                f"Failed to {label or operation}: {message}",
                ErrorCode.TRANSPORT_FAILURE,
                recoverable=exc_type is not None or is_transient(message),
                details=exc_type,
            )
    raise TypeError(f"Unsupported failure variant: {type(failure).__name__}")
