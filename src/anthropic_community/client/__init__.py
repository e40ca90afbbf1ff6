"""HTTP transport for the Anthropic Messages API.

This package provides the async client that sends conversation payloads
and reports each exchange as a raw outcome.
"""

from anthropic_community.client.client import AnthropicClient
from anthropic_community.client.types import RawOutcome

__all__ = ["AnthropicClient", "RawOutcome"]
