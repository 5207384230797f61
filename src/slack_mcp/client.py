"""Async Slack Web API client.

Thin wrapper over httpx: one method per Web API call the tools use. Calls
never raise for transport problems; they return ``Err(TransportFailure)``
so the dispatcher can map them like any other failure.

Example:
    >>> async with SlackClient("xoxb-...") as client:
    ...     result = await client.conversations_list(limit=10, types="public_channel")
    ...     result.unwrap()["ok"]
    True
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx
import orjson
from pydantic import SecretStr

from .foundation.errors import Err, JsonDict, JsonValue, Ok, Result, TransportFailure
from .foundation.logging import get_logger

if TYPE_CHECKING:
    from types import TracebackType

    from .foundation.config import ApiSettings

log = get_logger("slack_mcp.client")

SlackResult = Result[JsonDict, TransportFailure]


@runtime_checkable
class SlackApi(Protocol):
    """The subset of the Slack Web API the tools call."""

    async def conversations_list(self, **params: JsonValue) -> SlackResult: ...
    async def chat_post_message(self, **params: JsonValue) -> SlackResult: ...
    async def reactions_add(self, **params: JsonValue) -> SlackResult: ...
    async def conversations_history(self, **params: JsonValue) -> SlackResult: ...
    async def conversations_replies(self, **params: JsonValue) -> SlackResult: ...


class SlackClient:
    """Bearer-token client for https://slack.com/api.

    Read methods are sent as GET with query parameters, write methods as POST
    with a JSON body. Parameters whose value is None are not sent.
    """

    __slots__ = ("_http", "_timeout")

    def __init__(
        self,
        token: SecretStr | str,
        *,
        base_url: str = "https://slack.com/api",
        timeout: float = 30.0,
        user_agent: str = "slack-mcp-server/0.1",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        secret = token.get_secret_value() if isinstance(token, SecretStr) else token
        self._timeout = timeout
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {secret}", "User-Agent": user_agent},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: ApiSettings, token: SecretStr) -> SlackClient:
        return cls(token, base_url=settings.base_url, timeout=settings.timeout, user_agent=settings.user_agent)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> SlackClient:
        return self

    async def __aexit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                        exc_tb: TracebackType | None) -> None:
        await self.aclose()

    # ─────────────────────────────────────────────────────────────────
    # Web API methods
    # ─────────────────────────────────────────────────────────────────

    async def conversations_list(self, **params: JsonValue) -> SlackResult:
        return await self.api_call("conversations.list", params=params)

    async def chat_post_message(self, **params: JsonValue) -> SlackResult:
        return await self.api_call("chat.postMessage", json=params)

    async def reactions_add(self, **params: JsonValue) -> SlackResult:
        return await self.api_call("reactions.add", json=params)

    async def conversations_history(self, **params: JsonValue) -> SlackResult:
        return await self.api_call("conversations.history", params=params)

    async def conversations_replies(self, **params: JsonValue) -> SlackResult:
        return await self.api_call("conversations.replies", params=params)

    # ─────────────────────────────────────────────────────────────────
    # Transport
    # ─────────────────────────────────────────────────────────────────

    async def api_call(
        self, method: str, *, params: JsonDict | None = None, json: JsonDict | None = None,
    ) -> SlackResult:
        """Call a Web API method and return the decoded JSON object.

        ``ok: false`` bodies are returned as Ok; deciding what they mean is the caller's job.
        """
        start = time.perf_counter()
        try:
            if json is not None:
                response = await self._http.post(f"/{method}", json=_compact(json))
            else:
                response = await self._http.get(f"/{method}", params=_compact(params or {}))
        except httpx.TimeoutException as e:
            return Err(_failure(method, f"Request timed out after {self._timeout}s", e))
        except httpx.NetworkError as e:
            return Err(_failure(method, f"Network error: {e}", e))
        except httpx.HTTPError as e:
            return Err(_failure(method, f"Request failed: {e}", e))

        elapsed_ms = round((time.perf_counter() - start) * 1000, 1)
        log.debug("slack api call", method=method, status=response.status_code, duration_ms=elapsed_ms)

        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError:
            return Err(_failure(method, f"Invalid JSON response (HTTP {response.status_code})"))
        if not isinstance(body, dict):
            return Err(_failure(method, f"Expected a JSON object (HTTP {response.status_code})"))
        return Ok(body)


def _compact(params: JsonDict) -> JsonDict:
    return {k: v for k, v in params.items() if v is not None}


def _failure(method: str, message: str, exc: BaseException | None = None) -> TransportFailure:
    return TransportFailure(operation=method, message=message, exc_type=type(exc).__name__ if exc else None)
