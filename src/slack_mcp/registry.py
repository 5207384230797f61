"""Tool registry: the fixed, ordered set of tools this server exposes.

The registry provides:
- Lookup by name
- Registration-order listing for list-tools requests
- JSON Schema documents for each tool's input
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .schemas import (
    AddReactionRequest,
    GetChannelHistoryRequest,
    GetThreadRepliesRequest,
    ListChannelsRequest,
    PostMessageRequest,
    PostRichMessageRequest,
    SlackModel,
)

LIST_CHANNELS = "slack_list_channels"
POST_MESSAGE = "slack_post_message"
POST_RICH_MESSAGE = "slack_post_rich_message"
ADD_REACTION = "slack_add_reaction"
GET_CHANNEL_HISTORY = "slack_get_channel_history"
GET_THREAD_REPLIES = "slack_get_thread_replies"


class ToolDefinition(BaseModel):
    """Name, description and input schema of one tool.

    Attributes:
        name: Unique identifier (snake_case, e.g., "slack_post_message")
        description: What the tool does (shown to the orchestrator for selection)
        input_schema: Model the arguments are validated against
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z][a-z0-9_]*$")
    description: str = Field(..., min_length=10)
    input_schema: type[SlackModel]

    @property
    def schema_name(self) -> str:
        return self.input_schema.__name__

    def to_schema_document(self) -> dict[str, Any]:
        """JSON Schema for the tool's arguments. Objects are closed: unknown fields are rejected."""
        schema = self.input_schema.model_json_schema()
        schema.pop("title", None)
        for node in (schema, *schema.get("$defs", {}).values()):
            if node.get("type") == "object":
                node["additionalProperties"] = False
        return schema


class ToolRegistry:
    """Insertion-ordered, read-only collection of tool definitions.

    Example:
        >>> registry = ToolRegistry([definition])
        >>> registry.get("slack_post_message")
        ToolDefinition(name='slack_post_message', ...)
        >>> [t.name for t in registry.list_tools()]
        ['slack_post_message']
    """

    __slots__ = ("_tools",)

    def __init__(self, tools: Iterable[ToolDefinition] = ()) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ValueError(f"Tool '{tool.name}' already registered.")
            self._tools[tool.name] = tool

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def list_tools(self) -> tuple[ToolDefinition, ...]:
        """All definitions in registration order."""
        return tuple(self._tools.values())


TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name=LIST_CHANNELS,
        description="List public channels in the workspace with pagination",
        input_schema=ListChannelsRequest,
    ),
    ToolDefinition(
        name=POST_MESSAGE,
        description="Post a plain text message to a Slack channel or reply to a thread",
        input_schema=PostMessageRequest,
    ),
    ToolDefinition(
        name=POST_RICH_MESSAGE,
        description=(
            "Post a rich structured message to Slack with Block Kit support. Can post to channels "
            "or reply to threads. Supports plain text, markdown formatting, and rich Block Kit "
            "layouts with sections, images, dividers, headers, and more."
        ),
        input_schema=PostRichMessageRequest,
    ),
    ToolDefinition(
        name=ADD_REACTION,
        description="Add a reaction emoji to a message",
        input_schema=AddReactionRequest,
    ),
    ToolDefinition(
        name=GET_CHANNEL_HISTORY,
        description=(
            "Get messages from a channel in chronological order. Use this when: 1) You need the "
            "latest conversation flow without specific filters, 2) You want ALL messages including "
            "bot/automation messages, 3) You need to browse messages sequentially with pagination."
        ),
        input_schema=GetChannelHistoryRequest,
    ),
    ToolDefinition(
        name=GET_THREAD_REPLIES,
        description="Get all replies in a message thread",
        input_schema=GetThreadRepliesRequest,
    ),
)


@lru_cache(maxsize=1)
def default_registry() -> ToolRegistry:
    """The process-wide registry of the six Slack tools."""
    return ToolRegistry(TOOLS)
