"""Response schemas for the Slack Web API.

Every field is optional: Slack may omit any of them. Validated permissively,
so fields not listed here are dropped from the normalized output.
"""

from __future__ import annotations

from .base import Number, SlackModel


class ChannelTopic(SlackModel):
    """Purpose or topic of a channel."""

    creator: str | None = None
    last_set: Number | None = None
    value: str | None = None


class Channel(SlackModel):
    conversation_host_id: str | None = None
    created: Number | None = None
    id: str | None = None
    is_archived: bool | None = None
    name: str | None = None
    name_normalized: str | None = None
    num_members: Number | None = None
    purpose: ChannelTopic | None = None
    shared_team_ids: list[str] | None = None
    topic: ChannelTopic | None = None
    updated: Number | None = None


class Reaction(SlackModel):
    count: Number | None = None
    name: str | None = None
    url: str | None = None
    users: list[str] | None = None


class Message(SlackModel):
    reactions: list[Reaction] | None = None
    reply_count: Number | None = None
    reply_users: list[str] | None = None
    reply_users_count: Number | None = None
    subtype: str | None = None
    text: str | None = None
    thread_ts: str | None = None
    ts: str | None = None
    type: str | None = None
    user: str | None = None


class ResponseMetadata(SlackModel):
    next_cursor: str | None = None


class SlackResponse(SlackModel):
    """Envelope fields shared by every Web API method."""

    error: str | None = None
    ok: bool | None = None
    response_metadata: ResponseMetadata | None = None

    @property
    def next_cursor(self) -> str | None:
        return self.response_metadata.next_cursor if self.response_metadata else None


class ListChannelsResponse(SlackResponse):
    channels: list[Channel] | None = None


class ConversationsHistoryResponse(SlackResponse):
    messages: list[Message] | None = None


class ConversationsRepliesResponse(SlackResponse):
    messages: list[Message] | None = None
