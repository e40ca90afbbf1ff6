"""Unit tests for AnthropicSettings."""

import os

import pytest
from pydantic import ValidationError

from anthropic_community.config import AnthropicSettings, get_settings


def test_default_settings(monkeypatch):
    """Test default values when no environment variables are set."""
    for name in list(os.environ):
        if name.upper().startswith("ANTHROPIC_"):
            monkeypatch.delenv(name)

    settings = AnthropicSettings()

    assert settings.api_key is None
    assert settings.api_url == "https://api.anthropic.com/v1"
    assert settings.anthropic_version == "2023-06-01"
    assert settings.model == "claude-3-opus-20240229"
    assert settings.max_tokens == 1000
    assert settings.temperature == 1.0
    assert settings.top_k == 1
    assert settings.max_turns == 10
    assert settings.messages_url == "https://api.anthropic.com/v1/messages"


def test_settings_from_environment(monkeypatch):
    """Test that ANTHROPIC_ prefixed variables override defaults."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
    monkeypatch.setenv("ANTHROPIC_MAX_TOKENS", "256")
    monkeypatch.setenv("ANTHROPIC_TEMPERATURE", "0.2")
    monkeypatch.setenv("ANTHROPIC_API_URL", "http://localhost:9000/v1/")

    settings = AnthropicSettings()

    assert settings.api_key == "sk-env"
    assert settings.max_tokens == 256
    assert settings.temperature == 0.2
    assert settings.messages_url == "http://localhost:9000/v1/messages"


@pytest.mark.parametrize(
    "field,value",
    [
        ("max_tokens", 0),
        ("temperature", 1.1),
        ("top_p", -0.5),
        ("max_turns", 0),
        ("max_concurrent_tools", 0),
        ("timeout", 0),
    ],
)
def test_settings_validation(field, value):
    """Test that out-of-range values are rejected."""
    with pytest.raises(ValidationError):
        AnthropicSettings(**{field: value})


def test_get_settings_is_cached():
    """Test that get_settings returns the same instance."""
    assert get_settings() is get_settings()
