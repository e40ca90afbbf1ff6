"""Conversation value for multi-turn exchanges with the model.

A Conversation holds the message history, system prompt, sampling
parameters and registered tools. It is immutable: every operation that
adds a message or a tool returns a new Conversation, so a conversation can
be threaded through turns without shared mutable state.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from anthropic_community.config import AnthropicSettings, get_settings
from anthropic_community.conversation.image import InputType, process_image
from anthropic_community.conversation.types import ContentBlock, Message, Role
from anthropic_community.errors import ConfigurationError
from anthropic_community.models.messages import MessagesRequest
from anthropic_community.tools.base import Tool, load_tool
from anthropic_community.tools.description import decorate_system_prompt

logger = logging.getLogger(__name__)


def _validate_unit_interval(name: str, value: float | None) -> None:
    if value is None:
        return
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not 0.0 <= value <= 1.0
    ):
        raise ConfigurationError(
            f"Invalid {name} value, must be a float between 0.0 and 1.0."
        )


@dataclass(frozen=True)
class Conversation:
    """An immutable conversation with the model.

    Attributes:
        model: Model name to send the conversation to
        max_tokens: Maximum number of tokens in each reply
        messages: Message history, oldest first
        system: Optional system prompt (without tool descriptions)
        temperature: Sampling temperature (0.0 - 1.0)
        top_p: Nucleus sampling threshold (0.0 - 1.0)
        top_k: Number of top tokens considered when sampling
        metadata: Optional request metadata
        stop_sequences: Optional custom stop sequences
        tools: Registered tools by name
    """

    model: str
    max_tokens: int
    messages: tuple[Message, ...] = ()
    system: str | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    metadata: dict[str, Any] | None = None
    stop_sequences: tuple[str, ...] | None = None
    tools: dict[str, Tool] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        """Validate sampling parameters."""
        if (
            isinstance(self.max_tokens, bool)
            or not isinstance(self.max_tokens, int)
            or self.max_tokens <= 0
        ):
            raise ConfigurationError("Invalid max_tokens value, must be a positive integer.")
        _validate_unit_interval("temperature", self.temperature)
        _validate_unit_interval("top_p", self.top_p)
        if self.top_k is not None and (not isinstance(self.top_k, int) or self.top_k <= 0):
            raise ConfigurationError("Invalid top_k value, must be a positive integer.")

    def add_system_message(self, message: str) -> "Conversation":
        """Set the system prompt.

        Raises:
            TypeError: If the message is not a string
        """
        if not isinstance(message, str):
            raise TypeError(
                f"System message must be type str, got {type(message).__name__}"
            )
        return replace(self, system=message)

    def add_message(self, role: Role, content: Any) -> "Conversation":
        """Append a message with the given role.

        Args:
            role: "user" or "assistant"
            content: A string, a content block, a list of content blocks, or a
                     list of strings. Each string in a list becomes a separate
                     message.

        Returns:
            Conversation: A new conversation with the message(s) appended
        """
        if isinstance(content, list) and all(isinstance(item, str) for item in content):
            new_messages = tuple(Message(role=role, content=item) for item in content)
        else:
            new_messages = (Message(role=role, content=content),)
        return replace(self, messages=self.messages + new_messages)

    def add_user_message(self, content: str | ContentBlock | list[ContentBlock]) -> "Conversation":
        """Append a user message."""
        return self.add_message("user", content)

    def add_assistant_message(
        self, content: str | ContentBlock | list[ContentBlock]
    ) -> "Conversation":
        """Append an assistant message."""
        return self.add_message("assistant", content)

    def add_image(
        self, source: str | bytes | Path, input_type: InputType = "path"
    ) -> "Conversation":
        """Validate an image and append it as a user message.

        Raises:
            ImageError: If the image cannot be processed
        """
        return self.add_message("user", process_image(source, input_type))

    def register_tool(self, tool: Any) -> "Conversation":
        """Register a tool for this conversation.

        Registering the same tool (same instance or same Tool class) twice is
        a no-op.

        Args:
            tool: A Tool instance, a Tool subclass, or a dotted import path

        Returns:
            Conversation: A conversation with the tool registered

        Raises:
            ToolNotLoaded: If the tool reference cannot be resolved
            ValueError: If a different tool is already registered under the
                        same name
        """
        resolved = load_tool(tool)
        existing = self.tools.get(resolved.name)
        if existing is not None:
            if existing is resolved or type(existing) is type(resolved):
                return self
            raise ValueError(f"A different tool named {resolved.name} is already registered")

        logger.debug(f"Registered tool {resolved.name}")
        return replace(self, tools={**self.tools, resolved.name: resolved})

    def lookup_tool(self, name: str) -> Tool | None:
        """Return the registered tool with the given name, if any."""
        return self.tools.get(name)

    def to_request(self) -> MessagesRequest:
        """Build the Messages API request for this conversation."""
        return MessagesRequest(
            model=self.model,
            messages=[message.to_dict() for message in self.messages],
            system=decorate_system_prompt(self.system, self.tools.values()),
            max_tokens=self.max_tokens,
            metadata=self.metadata,
            stop_sequences=list(self.stop_sequences) if self.stop_sequences else None,
            temperature=self.temperature,
            top_p=self.top_p,
            top_k=self.top_k,
        )

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON payload for this conversation, omitting unset fields."""
        return self.to_request().model_dump(exclude_none=True)


def new_conversation(
    settings: AnthropicSettings | None = None, **overrides: Any
) -> Conversation:
    """Create a new conversation from the configured request defaults.

    Args:
        settings: Settings to take defaults from. Defaults to the
                  process-wide settings.
        **overrides: Conversation fields overriding the defaults for this
                     conversation only (model, max_tokens, temperature, ...)

    Returns:
        Conversation: An empty conversation
    """
    settings = settings or get_settings()
    values: dict[str, Any] = {
        "model": settings.model,
        "max_tokens": settings.max_tokens,
        "temperature": settings.temperature,
        "top_p": settings.top_p,
        "top_k": settings.top_k,
    }
    values.update(overrides)
    return Conversation(**values)
