"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files.

Example:
    >>> from slack_mcp.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.api.base_url
    'https://slack.com/api'
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # SLACK_BOT_TOKEN=xoxb-...
    # SLACK_MCP_API_TIMEOUT=10
    # SLACK_MCP_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, PositiveFloat, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import Err, Ok, Result, TransportFailure

TOKEN_ENV_VAR = "SLACK_BOT_TOKEN"
MISSING_TOKEN_MESSAGE = f"{TOKEN_ENV_VAR} is not set. Please set it in your environment or .env file."


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SLACK_MCP_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class ApiSettings(BaseSettings):
    """Slack Web API client configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SLACK_MCP_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(default="https://slack.com/api", description="Slack Web API root")
    timeout: PositiveFloat = Field(default=30.0, description="Per-request timeout in seconds")
    user_agent: str = "slack-mcp-server/0.1"

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")


class SlackSettings(BaseSettings):
    """Root settings for the Slack MCP server.

    The bot token is read from SLACK_BOT_TOKEN; everything else uses the
    SLACK_MCP_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="SLACK_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    bot_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(TOKEN_ENV_VAR),
        description="Slack bot token (xoxb-...)",
    )
    server_name: str = "slack-mcp-server"

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)

    @field_validator("bot_token", mode="before")
    @classmethod
    def _blank_is_missing(cls, v: object) -> object:
        """Treat an empty or whitespace-only token as unset."""
        if isinstance(v, str):
            return v.strip() or None
        return v

    @computed_field
    @property
    def has_token(self) -> bool:
        return self.bot_token is not None

    def require_token(self) -> Result[SecretStr, TransportFailure]:
        """The bot token, or the startup failure that must end the process."""
        if self.bot_token is None:
            return Err(TransportFailure(operation="startup", message=MISSING_TOKEN_MESSAGE))
        return Ok(self.bot_token)


@lru_cache(maxsize=1)
def get_settings() -> SlackSettings:
    """Get the process-wide settings instance (cached)."""
    return SlackSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
