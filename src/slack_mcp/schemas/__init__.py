"""Data contracts: tool inputs, Slack responses and the Block Kit layout."""

from .base import TIMESTAMP_MESSAGE, TIMESTAMP_PATTERN, SlackModel
from .blocks import (
    MAX_BLOCKS,
    ActionsBlock,
    Block,
    ContextBlock,
    DividerBlock,
    HeaderBlock,
    HeaderText,
    ImageBlock,
    ImageElement,
    SectionBlock,
    TextObject,
)
from .catalog import SCHEMAS
from .requests import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    AddReactionRequest,
    GetChannelHistoryRequest,
    GetThreadRepliesRequest,
    ListChannelsRequest,
    PostMessageRequest,
    PostRichMessageRequest,
)
from .responses import (
    Channel,
    ChannelTopic,
    ConversationsHistoryResponse,
    ConversationsRepliesResponse,
    ListChannelsResponse,
    Message,
    Reaction,
    ResponseMetadata,
    SlackResponse,
)

__all__ = [
    # Base
    "SlackModel", "TIMESTAMP_PATTERN", "TIMESTAMP_MESSAGE",
    # Layout
    "MAX_BLOCKS", "Block", "TextObject", "HeaderText", "ImageElement",
    "SectionBlock", "DividerBlock", "ImageBlock", "HeaderBlock", "ContextBlock", "ActionsBlock",
    # Requests
    "DEFAULT_LIMIT", "MAX_LIMIT",
    "ListChannelsRequest", "PostMessageRequest", "PostRichMessageRequest",
    "AddReactionRequest", "GetChannelHistoryRequest", "GetThreadRepliesRequest",
    # Responses
    "SlackResponse", "ResponseMetadata", "Channel", "ChannelTopic", "Message", "Reaction",
    "ListChannelsResponse", "ConversationsHistoryResponse", "ConversationsRepliesResponse",
    # Catalog
    "SCHEMAS",
]
