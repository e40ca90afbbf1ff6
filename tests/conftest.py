"""Pytest configuration and shared fixtures for anthropic-community tests.

This module provides common fixtures used across all test modules,
including test settings and a client whose HTTP traffic is answered by
scripted responses through an httpx mock transport.
"""

import httpx
import pytest
import pytest_asyncio

from anthropic_community.client import AnthropicClient
from anthropic_community.config import AnthropicSettings
from anthropic_community.conversation import new_conversation
from support import ScriptedApi


@pytest.fixture
def test_settings():
    """Create settings isolated from the environment.

    Returns:
        AnthropicSettings: Settings instance configured for testing.
    """
    return AnthropicSettings(
        api_key="test-key",
        api_url="https://api.test/v1",
        anthropic_version="2023-06-01",
        model="claude-3-opus-20240229",
        max_tokens=1000,
        temperature=1.0,
        top_k=1,
        max_turns=5,
        max_concurrent_tools=4,
        log_level="DEBUG",
    )


@pytest.fixture
def conversation(test_settings):
    """An empty conversation built from the test settings."""
    return new_conversation(test_settings)


@pytest.fixture
def scripted_api():
    """Scripted API responses for the mock transport."""
    return ScriptedApi()


@pytest_asyncio.fixture
async def api_client(test_settings, scripted_api):
    """Create an AnthropicClient backed by the scripted mock transport.

    Args:
        test_settings: Test settings fixture.
        scripted_api: Scripted responses fixture.

    Yields:
        AnthropicClient: Client whose requests are answered by `scripted_api`.
    """
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(scripted_api.handler))
    async with http_client:
        yield AnthropicClient(settings=test_settings, http_client=http_client)
