"""Configuration module for anthropic-community using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnthropicSettings(BaseSettings):
    """Main configuration settings for anthropic-community.

    All settings can be overridden via environment variables with the ANTHROPIC_ prefix.
    For example, ANTHROPIC_API_KEY will override the api_key setting.
    """

    # API
    api_key: str | None = None
    api_url: str = "https://api.anthropic.com/v1"
    anthropic_version: str = "2023-06-01"
    timeout: float = Field(default=60.0, gt=0)

    # Request defaults
    model: str = "claude-3-opus-20240229"
    max_tokens: int = Field(default=1000, gt=0)
    temperature: float | None = Field(default=1.0, ge=0.0, le=1.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    top_k: int | None = Field(default=1, gt=0)

    # Turn loop
    max_turns: int = Field(default=10, gt=0)
    max_concurrent_tools: int = Field(default=8, gt=0)

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="ANTHROPIC_")

    @property
    def messages_url(self) -> str:
        """Get the full URL of the messages endpoint."""
        return self.api_url.rstrip("/") + "/messages"


@lru_cache
def get_settings() -> AnthropicSettings:
    """Get the process-wide settings instance.

    This function is cached so that the same settings instance is reused
    by every conversation and client that is not given explicit settings.

    Returns:
        AnthropicSettings: The configuration loaded from the environment.
    """
    return AnthropicSettings()
