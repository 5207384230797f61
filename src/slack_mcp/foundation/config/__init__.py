"""Configuration management using pydantic-settings."""

from .settings import (
    MISSING_TOKEN_MESSAGE,
    TOKEN_ENV_VAR,
    ApiSettings,
    LoggingSettings,
    SlackSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "MISSING_TOKEN_MESSAGE",
    "TOKEN_ENV_VAR",
    "ApiSettings",
    "LoggingSettings",
    "SlackSettings",
    "clear_settings_cache",
    "get_settings",
]
