"""Caller-facing error model for tool calls.

Provides error codes and the structured error surfaced to the orchestrator.
Uses Pydantic for validation and serialization.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ErrorCode(StrEnum):
    """Error taxonomy for a single tool call."""
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    INVALID_ARGUMENTS = "INVALID_ARGUMENTS"
    REMOTE_FAILURE = "REMOTE_FAILURE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"


# Substrings marking a failure that might pass if the caller tries again later
_TRANSIENT_PATTERNS: tuple[str, ...] = (
    "ratelimited",
    "rate_limited",
    "timeout",
    "timed out",
    "connection",
    "network",
    "service_unavailable",
)


@lru_cache(maxsize=256)
def is_transient(message: str) -> bool:
    """Whether an error message looks like a transient condition."""
    haystack = message.lower()
    return any(pattern in haystack for pattern in _TRANSIENT_PATTERNS)


class ToolError(BaseModel):
    """Structured error response for a failed tool call.

    Attributes:
        tool_name: Name of the tool that failed
        message: Human-readable error message, always surfaced to the caller
        code: Machine-readable error code
        recoverable: Whether a later attempt might succeed (no retry happens here)
        details: Optional detail (remote error string, field issues, exception type)
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "title": "Tool Error",
            "description": "Structured error from a Slack tool call",
            "examples": [{
                "tool_name": "slack_post_message",
                "message": "Failed to post message: channel_not_found",
                "code": "REMOTE_FAILURE",
                "recoverable": False,
            }],
        },
    )

    tool_name: Annotated[str, Field(
        min_length=1,
        description="Name of the tool that produced the error",
    )]
    message: Annotated[str, Field(
        min_length=1,
        description="Human-readable error message",
    )]
    code: ErrorCode = Field(description="Machine-readable error classification")
    recoverable: bool = Field(
        default=False,
        description="Whether a later attempt might succeed",
    )
    details: str | None = Field(
        default=None,
        description="Optional detailed error info",
    )

    @computed_field
    @property
    def is_caller_error(self) -> bool:
        """Whether the caller can fix this by changing the request."""
        return self.code in (ErrorCode.UNKNOWN_TOOL, ErrorCode.INVALID_ARGUMENTS)

    @classmethod
    def create(
        cls,
        tool_name: str,
        message: str,
        code: ErrorCode,
        *,
        recoverable: bool = False,
        details: str | None = None,
    ) -> Self:
        """Positional shorthand used by the error mapper."""
        return cls(tool_name=tool_name, message=message, code=code, recoverable=recoverable, details=details)


class ToolException(Exception):
    """Exception wrapping a ToolError for raising across the transport boundary."""

    __slots__ = ("error",)

    def __init__(self, error: ToolError) -> None:
        self.error = error
        super().__init__(error.message)

    @property
    def code(self) -> ErrorCode:
        return self.error.code
