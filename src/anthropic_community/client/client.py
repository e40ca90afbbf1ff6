"""Async HTTP client for the Anthropic Messages API.

This module provides an async wrapper around httpx.AsyncClient for sending
conversation payloads to the Messages API. The client is designed to be
created once and reused across turns. It never raises for HTTP status
codes; every exchange is reported as a RawOutcome for classification.
"""

import logging
from types import TracebackType
from typing import Any

import httpx

from anthropic_community.client.types import RawOutcome
from anthropic_community.config import AnthropicSettings, get_settings
from anthropic_community.errors import ConfigurationError

logger = logging.getLogger(__name__)


class AnthropicClient:
    """Async client for the Anthropic Messages API.

    Attributes:
        settings: Settings providing api key, url, version and timeout
        _client: The underlying httpx.AsyncClient instance
    """

    def __init__(
        self,
        settings: AnthropicSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Optional settings. Defaults to the process-wide settings.
            http_client: Optional preconfigured httpx.AsyncClient (e.g. with a
                         mock transport for tests). Created from settings if
                         not provided.
        """
        self.settings = settings or get_settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=self.settings.timeout)
        logger.info(f"AnthropicClient initialized with url: {self.settings.api_url}")

    def build_headers(self) -> dict[str, str]:
        """Build the request headers.

        Raises:
            ConfigurationError: If no api key is configured
        """
        if self.settings.api_key is None:
            raise ConfigurationError("Anthropic api_key can not be None.")
        return {
            "x-api-key": self.settings.api_key,
            "anthropic-version": self.settings.anthropic_version,
            "content-type": "application/json",
        }

    async def send(self, payload: dict[str, Any]) -> RawOutcome:
        """Send a Messages API request.

        Args:
            payload: The JSON request body

        Returns:
            RawOutcome: The response status and body, or the transport error
            if no response was obtained

        Raises:
            ConfigurationError: If no api key is configured
        """
        headers = self.build_headers()
        url = self.settings.messages_url
        logger.debug(f"POST {url} with {len(payload.get('messages', []))} message(s)")

        try:
            response = await self._client.post(url, json=payload, headers=headers)
        except httpx.TransportError as e:
            logger.warning(f"Request to {url} failed: {e!r}")
            return RawOutcome(error=e)

        logger.debug(f"Received status {response.status_code} from {url}")
        return RawOutcome(
            status=response.status_code,
            body=response.content,
            headers={k.lower(): v for k, v in response.headers.items()},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
        logger.debug("AnthropicClient closed")

    async def __aenter__(self) -> "AnthropicClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
