"""Tool dispatcher: validate, call Slack once, normalize, map failures.

Flow for one call:

    name -> registry lookup -> strict validation -> one Web API call
         -> ok check -> permissive normalization -> Envelope

Every failure along the way becomes a ToolError via ``map_failure``;
``dispatch`` itself never raises for expected failures.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict

from . import registry as tools
from .client import SlackApi, SlackResult
from .foundation.errors import (
    Err,
    JsonDict,
    Mode,
    RemoteFailure,
    Result,
    ToolError,
    UnknownTool,
    map_failure,
)
from .foundation.logging import get_logger, log_context
from .normalize import ResponseNormalizer
from .registry import ToolRegistry, default_registry
from .schemas import (
    AddReactionRequest,
    ConversationsHistoryResponse,
    ConversationsRepliesResponse,
    GetChannelHistoryRequest,
    GetThreadRepliesRequest,
    ListChannelsRequest,
    ListChannelsResponse,
    PostMessageRequest,
    PostRichMessageRequest,
    SlackModel,
)
from .validation import Validator

log = get_logger("slack_mcp.dispatcher")

UNKNOWN_ERROR = "unknown_error"


class Envelope(BaseModel):
    """Successful tool result: one text item addressed to the caller."""

    model_config = ConfigDict(frozen=True)

    tool_name: str
    text: str


@dataclass(frozen=True, slots=True)
class Route:
    """How one tool maps onto the Web API.

    Attributes:
        operation: SlackApi method to call
        label: Phrase used in failure messages ("Failed to <label>: ...")
        params: Builds the request parameters from validated arguments
        response_schema: Catalog name for read operations; their normalized response is the result
        action: Confirmation phrase for write operations; set instead of response_schema
    """

    operation: str
    label: str
    params: Callable[[Any], JsonDict]
    response_schema: str | None = None
    action: str | None = None


def _list_channels(args: ListChannelsRequest) -> JsonDict:
    return {"types": "public_channel", "limit": args.limit, "cursor": args.cursor}


def _post_message(args: PostMessageRequest) -> JsonDict:
    return {"channel": args.channel_id, "text": args.text, "thread_ts": args.thread_ts}


def _post_rich_message(args: PostRichMessageRequest) -> JsonDict:
    return {
        "channel": args.channel_id,
        "text": args.text or None,
        "blocks": [block.to_payload() for block in args.blocks] if args.blocks is not None else None,
        "thread_ts": args.thread_ts,
        "parse": args.parse,
        "unfurl_links": args.unfurl_links,
        "unfurl_media": args.unfurl_media,
    }


def _add_reaction(args: AddReactionRequest) -> JsonDict:
    return {"channel": args.channel_id, "name": args.reaction, "timestamp": args.timestamp}


def _channel_history(args: GetChannelHistoryRequest) -> JsonDict:
    return {"channel": args.channel_id, "limit": args.limit, "cursor": args.cursor}


def _thread_replies(args: GetThreadRepliesRequest) -> JsonDict:
    return {"channel": args.channel_id, "ts": args.thread_ts, "limit": args.limit, "cursor": args.cursor}


ROUTES: Mapping[str, Route] = MappingProxyType({
    tools.LIST_CHANNELS: Route(
        "conversations_list", "list channels", _list_channels,
        response_schema=ListChannelsResponse.__name__,
    ),
    tools.POST_MESSAGE: Route("chat_post_message", "post message", _post_message, action="Message posted"),
    tools.POST_RICH_MESSAGE: Route(
        "chat_post_message", "post rich message", _post_rich_message, action="Rich message posted",
    ),
    tools.ADD_REACTION: Route("reactions_add", "add reaction", _add_reaction, action="Reaction added"),
    tools.GET_CHANNEL_HISTORY: Route(
        "conversations_history", "get channel history", _channel_history,
        response_schema=ConversationsHistoryResponse.__name__,
    ),
    tools.GET_THREAD_REPLIES: Route(
        "conversations_replies", "get thread replies", _thread_replies,
        response_schema=ConversationsRepliesResponse.__name__,
    ),
})


class Dispatcher:
    """Routes a tool name plus raw arguments to exactly one Slack call.

    Example:
        >>> dispatcher = Dispatcher(SlackClient(token))
        >>> result = await dispatcher.dispatch("slack_add_reaction", {
        ...     "channel_id": "C1", "reaction": "tada", "timestamp": "1234567890.123456",
        ... })
        >>> result.unwrap().text
        'Reaction added successfully'
    """

    __slots__ = ("_client", "_registry", "_validator", "_normalizer", "_routes")

    def __init__(
        self,
        client: SlackApi,
        registry: ToolRegistry | None = None,
        *,
        validator: Validator | None = None,
        routes: Mapping[str, Route] = ROUTES,
    ) -> None:
        self._client = client
        self._registry = registry if registry is not None else default_registry()
        self._validator = validator or Validator()
        self._normalizer = ResponseNormalizer(self._validator)
        self._routes = routes

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def dispatch(self, tool_name: str, arguments: Any = None) -> Result[Envelope, ToolError]:
        """Run one tool call end to end. Never raises for validation, remote or transport failures."""
        start = time.perf_counter()
        with log_context(tool=tool_name):
            result = await self._dispatch(tool_name, arguments)
            elapsed_ms = round((time.perf_counter() - start) * 1000, 1)
            if result.is_ok():
                log.info("tool call succeeded", duration_ms=elapsed_ms)
            else:
                error = result.unwrap_err()
                log.warning("tool call failed", code=error.code.value, error=error.message, duration_ms=elapsed_ms)
        return result

    async def _dispatch(self, tool_name: str, arguments: Any) -> Result[Envelope, ToolError]:
        tool = self._registry.get(tool_name)
        route = self._routes.get(tool_name)
        if tool is None or route is None:
            return Err(map_failure(tool_name, UnknownTool(name=tool_name)))

        validated = self._validator.validate(tool.schema_name, arguments, mode=Mode.STRICT)
        if validated.is_err():
            return Err(map_failure(tool_name, validated.unwrap_err(), label=route.label))
        args = validated.unwrap()

        response = await self._call(route, args)
        if response.is_err():
            return Err(map_failure(tool_name, response.unwrap_err(), label=route.label))
        raw = response.unwrap()

        if raw.get("ok") is not True:
            failure = RemoteFailure(operation=route.operation, error=str(raw.get("error") or UNKNOWN_ERROR))
            return Err(map_failure(tool_name, failure, label=route.label))

        if route.action is not None:
            text = self._normalizer.acknowledge(raw, route.action, thread_ts=getattr(args, "thread_ts", None))
        else:
            text = self._normalizer.summarize(route.response_schema or "SlackResponse", raw)
        return (
            text
            .map(lambda t: Envelope(tool_name=tool_name, text=t))
            .map_err(lambda f: map_failure(tool_name, f, label=route.label))
        )

    async def _call(self, route: Route, args: SlackModel) -> SlackResult:
        params = {k: v for k, v in route.params(args).items() if v is not None}
        log.debug("calling slack", operation=route.operation, params=sorted(params))
        return await getattr(self._client, route.operation)(**params)

