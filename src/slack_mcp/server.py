"""MCP server over stdio exposing the Slack tools.

Converts registry entries to MCP tool primitives and routes tool calls
through the Dispatcher. Arguments are validated by our own schemas, so the
SDK's input validation is turned off.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .client import SlackClient
from .dispatcher import Dispatcher
from .foundation.errors import ToolException
from .foundation.logging import get_logger
from .registry import ToolDefinition, ToolRegistry

if TYPE_CHECKING:
    from pydantic import SecretStr

    from .foundation.config import SlackSettings

log = get_logger("slack_mcp.server")


def tool_to_mcp(tool: ToolDefinition) -> types.Tool:
    """Convert a ToolDefinition to the MCP tool primitive."""
    return types.Tool(name=tool.name, description=tool.description, inputSchema=tool.to_schema_document())


class SlackToolServer:
    """Binds a Dispatcher to an MCP ``Server``.

    Example:
        >>> server = SlackToolServer(Dispatcher(client))
        >>> [t.name for t in server.list_tools()][:2]
        ['slack_list_channels', 'slack_post_message']
        >>> await server.run_stdio()
    """

    __slots__ = ("_dispatcher", "_server")

    def __init__(self, dispatcher: Dispatcher, *, name: str = "slack-mcp-server") -> None:
        self._dispatcher = dispatcher
        self._server = self._create_server(name)

    @property
    def registry(self) -> ToolRegistry:
        return self._dispatcher.registry

    @property
    def server(self) -> Server[Any, Any]:
        return self._server

    def list_tools(self) -> list[types.Tool]:
        return [tool_to_mcp(tool) for tool in self.registry.list_tools()]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        """Dispatch one call. Failures surface as ToolException, which the SDK turns into an error result."""
        try:
            result = await self._dispatcher.dispatch(name, arguments)
        except Exception:
            log.exception("unexpected error in tool call", tool=name)
            raise
        if result.is_err():
            raise ToolException(result.unwrap_err())
        return [types.TextContent(type="text", text=result.unwrap().text)]

    def _create_server(self, name: str) -> Server[Any, Any]:
        server: Server[Any, Any] = Server(name, version=__version__)

        @server.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return self.list_tools()

        @server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
            return await self.call_tool(name, arguments)

        return server

    async def run_stdio(self) -> None:
        """Serve until stdin closes."""
        async with stdio_server() as (read_stream, write_stream):
            await self._server.run(read_stream, write_stream, self._server.create_initialization_options())


async def serve(settings: SlackSettings, token: SecretStr) -> None:
    """Build the client, dispatcher and server from settings and serve over stdio."""
    async with SlackClient.from_settings(settings.api, token) as client:
        app = SlackToolServer(Dispatcher(client), name=settings.server_name)
        log.info("slack mcp server running on stdio", server=settings.server_name, tools=len(app.registry))
        await app.run_stdio()
