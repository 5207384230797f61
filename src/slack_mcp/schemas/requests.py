"""Input schemas, one per tool."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_core import PydanticCustomError

from .base import SlackModel, Timestamp
from .blocks import Blocks

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000

_CURSOR_DESCRIPTION = "Pagination cursor for next page of results"
_THREAD_TS_DESCRIPTION = (
    "The timestamp of the parent message in the format '1234567890.123456'. "
    "Timestamps in the format without the period can be converted by adding "
    "the period such that 6 numbers come after it."
)
_REPLY_TS_DESCRIPTION = "Optional timestamp of parent message to reply in thread. Format: '1234567890.123456'"


class ListChannelsRequest(SlackModel):
    cursor: str | None = Field(default=None, description=_CURSOR_DESCRIPTION)
    limit: int = Field(
        default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT,
        description="Maximum number of channels to return (default 100)",
    )


class PostMessageRequest(SlackModel):
    channel_id: str = Field(description="The ID of the channel to post to")
    text: str = Field(description="The message text to post")
    thread_ts: Timestamp | None = Field(default=None, description=_REPLY_TS_DESCRIPTION)


class PostRichMessageRequest(SlackModel):
    """Structured message. Needs fallback text, a block layout, or both."""

    channel_id: str = Field(description="The ID of the channel to post to")
    text: str | None = Field(
        default=None,
        description="Fallback text for notifications and screen readers. Required if blocks is not provided.",
    )
    blocks: Blocks | None = Field(
        default=None,
        description="Block Kit blocks for structured message layout. Required if text is not provided.",
    )
    thread_ts: Timestamp | None = Field(default=None, description=_REPLY_TS_DESCRIPTION)
    parse: Literal["full", "none"] | None = Field(
        default=None,
        description='How to parse text content. "full" enables link and mrkdwn parsing.',
    )
    unfurl_links: bool | None = Field(default=None, description="Enable automatic link previews")
    unfurl_media: bool | None = Field(default=None, description="Enable automatic media previews")

    @model_validator(mode="after")
    def _require_text_or_blocks(self) -> PostRichMessageRequest:
        # Empty text does not count; an empty block list does
        if not self.text and self.blocks is None:
            raise PydanticCustomError(
                "text_or_blocks_required",
                "Either text or blocks must be provided",
                {"fields": ("text", "blocks")},
            )
        return self


class AddReactionRequest(SlackModel):
    channel_id: str = Field(description="The ID of the channel containing the message")
    reaction: str = Field(description="The name of the emoji reaction (without ::)")
    timestamp: Timestamp = Field(
        description="The timestamp of the message to react to in the format '1234567890.123456'",
    )


class GetChannelHistoryRequest(SlackModel):
    channel_id: str = Field(
        description=(
            "The ID of the channel. Use this tool for: browsing latest messages without filters, "
            "getting ALL messages including bot/automation messages, sequential pagination."
        ),
    )
    cursor: str | None = Field(default=None, description=_CURSOR_DESCRIPTION)
    limit: int = Field(
        default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT,
        description="Number of messages to retrieve (default 100)",
    )


class GetThreadRepliesRequest(SlackModel):
    channel_id: str = Field(description="The ID of the channel containing the thread")
    thread_ts: Timestamp = Field(description=_THREAD_TS_DESCRIPTION)
    cursor: str | None = Field(default=None, description=_CURSOR_DESCRIPTION)
    limit: int = Field(
        default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT,
        description="Number of replies to retrieve (default 100)",
    )
