"""Shared fixtures: silent logging and an in-memory Slack API."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from slack_mcp.client import SlackResult
from slack_mcp.dispatcher import Dispatcher
from slack_mcp.foundation.config import clear_settings_cache
from slack_mcp.foundation.errors import JsonDict, JsonValue, Ok, Result
from slack_mcp.foundation.logging import configure_logging

TS = "1234567890.123456"


class FakeSlackClient:
    """Records every call and answers from a per-operation table."""

    def __init__(
        self,
        responses: dict[str, JsonDict | SlackResult] | None = None,
        *,
        default: JsonDict | SlackResult | None = None,
    ) -> None:
        self.calls: list[tuple[str, JsonDict]] = []
        self.responses = responses or {}
        self.default = default if default is not None else {"ok": True}

    async def _respond(self, operation: str, params: JsonDict) -> SlackResult:
        self.calls.append((operation, params))
        reply = self.responses.get(operation, self.default)
        return reply if isinstance(reply, Result) else Ok(reply)

    async def conversations_list(self, **params: JsonValue) -> SlackResult:
        return await self._respond("conversations_list", params)

    async def chat_post_message(self, **params: JsonValue) -> SlackResult:
        return await self._respond("chat_post_message", params)

    async def reactions_add(self, **params: JsonValue) -> SlackResult:
        return await self._respond("reactions_add", params)

    async def conversations_history(self, **params: JsonValue) -> SlackResult:
        return await self._respond("conversations_history", params)

    async def conversations_replies(self, **params: JsonValue) -> SlackResult:
        return await self._respond("conversations_replies", params)


@pytest.fixture(autouse=True)
def quiet_logging() -> Iterator[None]:
    configure_logging("none")
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def fake() -> FakeSlackClient:
    return FakeSlackClient()


@pytest.fixture
def dispatcher(fake: FakeSlackClient) -> Dispatcher:
    return Dispatcher(fake)
