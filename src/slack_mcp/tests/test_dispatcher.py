"""Tests for the dispatcher: one Slack call per tool, every failure mapped."""

from __future__ import annotations

import orjson
import pytest

from slack_mcp.dispatcher import Dispatcher
from slack_mcp.foundation.errors import Err, ErrorCode, TransportFailure

from conftest import TS, FakeSlackClient

VALID_ARGS = {
    "slack_list_channels": {},
    "slack_post_message": {"channel_id": "C1", "text": "hi"},
    "slack_post_rich_message": {"channel_id": "C1", "text": "hi"},
    "slack_add_reaction": {"channel_id": "C1", "reaction": "tada", "timestamp": TS},
    "slack_get_channel_history": {"channel_id": "C1"},
    "slack_get_thread_replies": {"channel_id": "C1", "thread_ts": TS},
}

LABELS = {
    "slack_list_channels": "list channels",
    "slack_post_message": "post message",
    "slack_post_rich_message": "post rich message",
    "slack_add_reaction": "add reaction",
    "slack_get_channel_history": "get channel history",
    "slack_get_thread_replies": "get thread replies",
}


# ═════════════════════════════════════════════════════════════════════════════
# Read operations
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_list_channels_defaults() -> None:
    fake = FakeSlackClient({"conversations_list": {
        "ok": True,
        "channels": [{"id": "C1", "name": "general", "is_member": True, "topic": {"value": "chat"}}],
        "response_metadata": {"next_cursor": "dGVhbTpDMDYxRkE1UEI="},
    }})
    envelope = (await Dispatcher(fake).dispatch("slack_list_channels", {})).unwrap()

    assert fake.calls == [("conversations_list", {"types": "public_channel", "limit": 100})]
    assert envelope.tool_name == "slack_list_channels"
    assert orjson.loads(envelope.text) == {
        "ok": True,
        "channels": [{"id": "C1", "name": "general", "topic": {"value": "chat"}}],
        "response_metadata": {"next_cursor": "dGVhbTpDMDYxRkE1UEI="},
    }


@pytest.mark.asyncio
async def test_cursor_round_trips_verbatim() -> None:
    cursor = "dXNlcjpVMEc5V0ZYTlo="
    fake = FakeSlackClient({"conversations_history": {
        "ok": True, "messages": [], "response_metadata": {"next_cursor": cursor},
    }})
    dispatcher = Dispatcher(fake)

    first = await dispatcher.dispatch("slack_get_channel_history", {"channel_id": "C1", "limit": 2})
    next_cursor = orjson.loads(first.unwrap().text)["response_metadata"]["next_cursor"]
    await dispatcher.dispatch("slack_get_channel_history", {"channel_id": "C1", "limit": 2, "cursor": next_cursor})

    assert fake.calls[1] == ("conversations_history", {"channel": "C1", "limit": 2, "cursor": cursor})


@pytest.mark.asyncio
async def test_channel_history_normalizes_messages() -> None:
    fake = FakeSlackClient({"conversations_history": {"ok": True, "messages": [
        {"type": "message", "user": "U1", "text": "hello", "ts": TS, "blocks": [{"type": "rich_text"}],
         "reactions": [{"name": "tada", "count": 2, "users": ["U1", "U2"]}]},
    ]}})
    text = (await Dispatcher(fake).dispatch("slack_get_channel_history", {"channel_id": "C1"})).unwrap().text

    assert orjson.loads(text) == {"ok": True, "messages": [
        {"type": "message", "user": "U1", "text": "hello", "ts": TS,
         "reactions": [{"name": "tada", "count": 2, "users": ["U1", "U2"]}]},
    ]}


@pytest.mark.asyncio
async def test_thread_replies_send_parent_timestamp(fake: FakeSlackClient, dispatcher: Dispatcher) -> None:
    await dispatcher.dispatch("slack_get_thread_replies", {"channel_id": "C1", "thread_ts": TS, "limit": 10})
    assert fake.calls == [("conversations_replies", {"channel": "C1", "ts": TS, "limit": 10})]


# ═════════════════════════════════════════════════════════════════════════════
# Write operations
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_post_message_new_vs_thread(fake: FakeSlackClient, dispatcher: Dispatcher) -> None:
    posted = await dispatcher.dispatch("slack_post_message", {"channel_id": "C1", "text": "hi"})
    replied = await dispatcher.dispatch("slack_post_message", {"channel_id": "C1", "text": "hi", "thread_ts": TS})

    assert posted.unwrap().text == "Message posted successfully"
    assert replied.unwrap().text == "Reply sent to thread successfully"
    assert fake.calls == [
        ("chat_post_message", {"channel": "C1", "text": "hi"}),
        ("chat_post_message", {"channel": "C1", "text": "hi", "thread_ts": TS}),
    ]


@pytest.mark.asyncio
async def test_rich_message_forwards_blocks(fake: FakeSlackClient, dispatcher: Dispatcher) -> None:
    args = {
        "channel_id": "C1",
        "blocks": [
            {"type": "header", "text": {"type": "plain_text", "text": "Release"}},
            {"type": "divider"},
            {"type": "section", "text": {"type": "mrkdwn", "text": "*v2*"},
             "accessory": {"type": "button", "text": {"type": "plain_text", "text": "Open"}, "url": "https://x.io"}},
        ],
        "unfurl_links": False,
        "parse": "none",
    }
    result = await dispatcher.dispatch("slack_post_rich_message", args)

    assert result.unwrap().text == "Rich message posted successfully"
    assert fake.calls == [("chat_post_message", {
        "channel": "C1",
        "blocks": args["blocks"],
        "parse": "none",
        "unfurl_links": False,
    })]


@pytest.mark.asyncio
async def test_rich_message_empty_text_not_sent(fake: FakeSlackClient, dispatcher: Dispatcher) -> None:
    await dispatcher.dispatch("slack_post_rich_message", {"channel_id": "C1", "text": "", "blocks": [], "thread_ts": TS})
    assert fake.calls == [("chat_post_message", {"channel": "C1", "blocks": [], "thread_ts": TS})]


@pytest.mark.asyncio
async def test_rich_message_thread_reply(dispatcher: Dispatcher) -> None:
    result = await dispatcher.dispatch("slack_post_rich_message", {"channel_id": "C1", "text": "hi", "thread_ts": TS})
    assert result.unwrap().text == "Reply sent to thread successfully"


@pytest.mark.asyncio
async def test_add_reaction(fake: FakeSlackClient, dispatcher: Dispatcher) -> None:
    result = await dispatcher.dispatch("slack_add_reaction", VALID_ARGS["slack_add_reaction"])
    assert result.unwrap().text == "Reaction added successfully"
    assert fake.calls == [("reactions_add", {"channel": "C1", "name": "tada", "timestamp": TS})]


# ═════════════════════════════════════════════════════════════════════════════
# Failures
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
@pytest.mark.parametrize("tool", list(VALID_ARGS))
async def test_remote_error_is_preserved(tool: str) -> None:
    fake = FakeSlackClient(default={"ok": False, "error": "channel_not_found"})
    error = (await Dispatcher(fake).dispatch(tool, VALID_ARGS[tool])).unwrap_err()

    assert len(fake.calls) == 1
    assert error.code is ErrorCode.REMOTE_FAILURE
    assert error.message == f"Failed to {LABELS[tool]}: channel_not_found"
    assert error.tool_name == tool
    assert not error.recoverable


@pytest.mark.asyncio
async def test_remote_error_without_reason() -> None:
    fake = FakeSlackClient(default={"ok": False})
    error = (await Dispatcher(fake).dispatch("slack_post_message", VALID_ARGS["slack_post_message"])).unwrap_err()
    assert error.message == "Failed to post message: unknown_error"


@pytest.mark.asyncio
async def test_rate_limit_is_recoverable() -> None:
    fake = FakeSlackClient(default={"ok": False, "error": "ratelimited"})
    error = (await Dispatcher(fake).dispatch("slack_list_channels", {})).unwrap_err()
    assert error.recoverable


@pytest.mark.asyncio
async def test_unknown_tool_makes_no_call(fake: FakeSlackClient, dispatcher: Dispatcher) -> None:
    error = (await dispatcher.dispatch("slack_reply_to_thread", {"channel_id": "C1"})).unwrap_err()

    assert fake.calls == []
    assert error.code is ErrorCode.UNKNOWN_TOOL
    assert error.message == "Unknown tool: slack_reply_to_thread"


@pytest.mark.asyncio
async def test_invalid_arguments_make_no_call(fake: FakeSlackClient, dispatcher: Dispatcher) -> None:
    error = (await dispatcher.dispatch("slack_add_reaction", {"channel_id": "C1", "reaction": "tada",
                                                              "timestamp": "123.456"})).unwrap_err()
    assert fake.calls == []
    assert error.code is ErrorCode.INVALID_ARGUMENTS
    assert error.is_caller_error
    assert error.message.startswith("Invalid arguments: timestamp: ")


@pytest.mark.asyncio
async def test_missing_arguments_treated_as_empty(fake: FakeSlackClient, dispatcher: Dispatcher) -> None:
    assert (await dispatcher.dispatch("slack_list_channels", None)).is_ok()
    error = (await dispatcher.dispatch("slack_post_message", None)).unwrap_err()
    assert error.code is ErrorCode.INVALID_ARGUMENTS
    assert len(fake.calls) == 1


@pytest.mark.asyncio
async def test_transport_failure() -> None:
    failure = TransportFailure(operation="chat.postMessage", message="Network error: boom", exc_type="ConnectError")
    fake = FakeSlackClient({"chat_post_message": Err(failure)})
    error = (await Dispatcher(fake).dispatch("slack_post_message", VALID_ARGS["slack_post_message"])).unwrap_err()

    assert error.code is ErrorCode.TRANSPORT_FAILURE
    assert error.message == "Failed to post message: Network error: boom"
    assert error.recoverable


@pytest.mark.asyncio
async def test_malformed_response() -> None:
    fake = FakeSlackClient({"conversations_list": {"ok": True, "channels": {"id": "C1"}}})
    error = (await Dispatcher(fake).dispatch("slack_list_channels", {})).unwrap_err()

    assert error.code is ErrorCode.MALFORMED_RESPONSE
    assert error.message.startswith("Unexpected response while trying to list channels: channels: ")
