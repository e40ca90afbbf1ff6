"""anthropic-community: Anthropic Messages API client with text-embedded tool calling.

This package builds multi-turn conversations, sends them to the Messages
API, and runs the tools the model requests through `<invoke>` blocks until
the model replies without further requests.
"""

from anthropic_community.client import AnthropicClient
from anthropic_community.config import AnthropicSettings, get_settings
from anthropic_community.conversation import (
    Conversation,
    ImageBlock,
    Message,
    TextBlock,
    new_conversation,
)
from anthropic_community.services import Response, TurnDriver, TurnResult
from anthropic_community.tools import Invocation, Tool, ToolParameter

__version__ = "0.3.0"

__all__ = [
    "AnthropicClient",
    "AnthropicSettings",
    "Conversation",
    "ImageBlock",
    "Invocation",
    "Message",
    "Response",
    "TextBlock",
    "Tool",
    "ToolParameter",
    "TurnDriver",
    "TurnResult",
    "__version__",
    "get_settings",
    "new_conversation",
]
