"""Schema catalog: every named schema the validator can apply."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .base import SlackModel
from .requests import (
    AddReactionRequest,
    GetChannelHistoryRequest,
    GetThreadRepliesRequest,
    ListChannelsRequest,
    PostMessageRequest,
    PostRichMessageRequest,
)
from .responses import (
    ConversationsHistoryResponse,
    ConversationsRepliesResponse,
    ListChannelsResponse,
    SlackResponse,
)

_MODELS: tuple[type[SlackModel], ...] = (
    ListChannelsRequest,
    PostMessageRequest,
    PostRichMessageRequest,
    AddReactionRequest,
    GetChannelHistoryRequest,
    GetThreadRepliesRequest,
    SlackResponse,
    ListChannelsResponse,
    ConversationsHistoryResponse,
    ConversationsRepliesResponse,
)

SCHEMAS: Mapping[str, type[SlackModel]] = MappingProxyType({m.__name__: m for m in _MODELS})
