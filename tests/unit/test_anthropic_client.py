"""Unit tests for the AnthropicClient transport."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from anthropic_community.client import AnthropicClient, RawOutcome
from anthropic_community.config import AnthropicSettings
from anthropic_community.errors import ConfigurationError
from support import make_reply


@pytest.mark.asyncio
async def test_client_initialization(test_settings):
    """Test that AnthropicClient initializes its own httpx client."""
    with patch("anthropic_community.client.client.httpx.AsyncClient") as mock_class:
        mock_class.return_value = AsyncMock()
        client = AnthropicClient(settings=test_settings)

        assert client.settings is test_settings
        assert client._client is mock_class.return_value
        mock_class.assert_called_once_with(timeout=test_settings.timeout)

        await client.close()
        mock_class.return_value.aclose.assert_awaited_once()


def test_build_headers(test_settings):
    """Test the authentication and version headers."""
    client = AnthropicClient(settings=test_settings, http_client=AsyncMock())

    assert client.build_headers() == {
        "x-api-key": "test-key",
        "anthropic-version": "2023-06-01",
        "content-type": "application/json",
    }


@pytest.mark.asyncio
async def test_send_requires_api_key():
    """Test that sending without an api key raises ConfigurationError."""
    http_client = AsyncMock()
    client = AnthropicClient(settings=AnthropicSettings(api_key=None), http_client=http_client)

    with pytest.raises(ConfigurationError, match="api_key"):
        await client.send({"messages": []})

    http_client.post.assert_not_called()


@pytest.mark.asyncio
async def test_send_success(api_client, scripted_api):
    """Test a successful exchange is reported with status and body."""
    scripted_api.reply(make_reply("Hello!"))

    outcome = await api_client.send({"model": "m", "messages": []})

    assert isinstance(outcome, RawOutcome)
    assert outcome.status == 200
    assert outcome.error is None
    assert b"Hello!" in outcome.body

    request = scripted_api.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.test/v1/messages"
    assert request.headers["x-api-key"] == "test-key"
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert scripted_api.payload(0) == {"model": "m", "messages": []}


@pytest.mark.asyncio
async def test_send_error_status_does_not_raise(api_client, scripted_api):
    """Test that error statuses are returned, not raised."""
    scripted_api.raw(529, "overloaded")

    outcome = await api_client.send({"messages": []})

    assert outcome.status == 529
    assert outcome.text == "overloaded"


@pytest.mark.asyncio
async def test_send_transport_failure(api_client, scripted_api):
    """Test that a connection failure is captured in the outcome."""
    scripted_api.fail(httpx.ConnectError("Connection refused"))

    outcome = await api_client.send({"messages": []})

    assert outcome.status is None
    assert isinstance(outcome.error, httpx.ConnectError)


@pytest.mark.asyncio
async def test_close_keeps_injected_client(test_settings):
    """Test that an injected httpx client is left open on close."""
    http_client = AsyncMock()

    async with AnthropicClient(settings=test_settings, http_client=http_client):
        pass

    http_client.aclose.assert_not_called()
