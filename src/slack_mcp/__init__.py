"""slack_mcp: Slack tools for MCP clients.

Six tools over the Slack Web API, each with a strict input schema, a
single remote call, and a normalized text result:

    slack_list_channels, slack_post_message, slack_post_rich_message,
    slack_add_reaction, slack_get_channel_history, slack_get_thread_replies

Quick Start:
    >>> from slack_mcp import Dispatcher, SlackClient
    >>> async with SlackClient(token) as client:
    ...     result = await Dispatcher(client).dispatch("slack_list_channels", {"limit": 5})
    ...     print(result.unwrap().text)
"""

__version__ = "0.1.0"

from .client import SlackApi, SlackClient
from .dispatcher import Dispatcher, Envelope
from .foundation.errors import ErrorCode, Mode, ToolError, ToolException
from .registry import ToolDefinition, ToolRegistry, default_registry
from .validation import Validator

__all__ = [
    "__version__",
    "Dispatcher", "Envelope",
    "SlackApi", "SlackClient",
    "ToolDefinition", "ToolRegistry", "default_registry",
    "Validator", "Mode",
    "ErrorCode", "ToolError", "ToolException",
]
