"""Exception hierarchy for anthropic-community.

API errors (transport, decode, client, server) end a turn and are handed
back to the caller inside a TurnResult together with the untouched
conversation. Invocation, tool and configuration errors are raised
directly and must be handled by the caller.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from anthropic_community.conversation.conversation import Conversation


class AnthropicError(Exception):
    """Base error type for all anthropic-community failures."""


class ConfigurationError(AnthropicError, ValueError):
    """Invalid or missing configuration (api key, sampling values, ...)."""


class ImageError(AnthropicError, ValueError):
    """An image could not be read, validated or encoded."""


class ToolNotLoaded(AnthropicError):
    """A tool could not be resolved to a loaded Tool at registration time."""

    def __init__(self, reference: Any, reason: str | None = None):
        self.reference = reference
        message = f"Tool {reference!r} is not loaded"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvocationError(AnthropicError):
    """A requested invocation cannot be executed (unknown tool, bad argument)."""

    def __init__(self, tool_name: str | None, message: str | None = None):
        self.tool_name = tool_name
        super().__init__(message or f"Invocation error: Tool {tool_name} not found")


class ToolExecutionError(AnthropicError):
    """A tool raised while being invoked; the whole turn is aborted."""

    def __init__(self, tool_name: str, cause: BaseException):
        self.tool_name = tool_name
        self.cause = cause
        super().__init__(f"Tool {tool_name} failed: {cause}")


class TurnLimitExceeded(AnthropicError):
    """The model kept requesting tools beyond the configured turn limit.

    `conversation` ends with the last reply, whose invocations were not
    run, so the caller can inspect it or continue it.
    """

    def __init__(self, max_turns: int, conversation: Conversation | None = None):
        self.max_turns = max_turns
        self.conversation = conversation
        super().__init__(
            f"Model still requested tool invocations after {max_turns} turns"
        )


class ApiError(AnthropicError):
    """Base class for errors that terminate a turn and are returned to the caller."""


class TransportError(ApiError):
    """No HTTP response was obtained (connection refused, timeout, ...)."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Transport failure: {cause}")


class DecodeError(ApiError):
    """A 200 response body did not match the expected reply schema."""

    def __init__(self, body: str | bytes, cause: BaseException | None = None):
        self.body = body
        self.cause = cause
        super().__init__(f"Could not decode response body: {cause}")


class ApiStatusError(ApiError):
    """The API answered with a status code outside the handled ranges.

    `body` is the response body exactly as received, unless a subclass
    documents otherwise.
    """

    def __init__(self, status: int, body: Any, message: str | None = None):
        self.status = status
        self.body = body
        super().__init__(message or f"Unexpected response status {status}")

    @property
    def text(self) -> str:
        """The body as text (undecodable bytes are replaced)."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        if isinstance(self.body, str):
            return self.body
        return json.dumps(self.body)


class ClientError(ApiStatusError):
    """4xx response.

    `body` is the decoded error object when it could be parsed, else the
    raw response bytes.
    """

    @property
    def error_type(self) -> str | None:
        """The API error type (e.g. "authentication_error") when known."""
        if isinstance(self.body, dict):
            error = self.body.get("error")
            if isinstance(error, dict):
                return error.get("type")
        return None


class ServerError(ApiStatusError):
    """5xx response. `body` is the raw response bytes."""


__all__ = [
    "AnthropicError",
    "ApiError",
    "ApiStatusError",
    "ClientError",
    "ConfigurationError",
    "DecodeError",
    "ImageError",
    "InvocationError",
    "ServerError",
    "ToolExecutionError",
    "ToolNotLoaded",
    "TransportError",
    "TurnLimitExceeded",
]
