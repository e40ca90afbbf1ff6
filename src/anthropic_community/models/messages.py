"""Pydantic models for the Messages API request and response bodies.

These models define the wire schema: the request payload built from a
Conversation, the reply body decoded from a successful response, and the
structured error object returned with 4xx responses.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessagesRequest(BaseModel):
    """Request body for POST /v1/messages."""

    model: str = Field(description="Model that should complete the conversation")
    messages: list[dict[str, Any]] = Field(
        description="Conversation messages in API format"
    )
    system: str | None = Field(
        default=None,
        description="System prompt, including tool descriptions when tools are registered",
    )
    max_tokens: int = Field(description="Maximum number of tokens to generate")
    metadata: dict[str, Any] | None = Field(default=None)
    stop_sequences: list[str] | None = Field(default=None)
    stream: bool = Field(default=False, description="Streaming is not supported")
    temperature: float | None = Field(default=None)
    top_p: float | None = Field(default=None)
    top_k: int | None = Field(default=None)

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "model": "claude-3-opus-20240229",
                    "max_tokens": 1000,
                    "messages": [
                        {
                            "role": "user",
                            "content": [{"type": "text", "text": "Hello"}],
                        }
                    ],
                }
            ]
        }
    )


class UsageBody(BaseModel):
    """Token usage counters of a reply."""

    input_tokens: int = Field(default=0)
    output_tokens: int = Field(default=0)


class MessagesResponseBody(BaseModel):
    """Body of a successful Messages API reply."""

    id: str
    type: str = Field(default="message")
    role: str
    content: list[dict[str, Any]]
    model: str
    stop_reason: str | None = Field(default=None)
    stop_sequence: str | None = Field(default=None)
    usage: UsageBody = Field(default_factory=UsageBody)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Validate that every text block carries its text as a string."""
        for index, block in enumerate(v):
            if block.get("type") == "text" and not isinstance(block.get("text"), str):
                raise ValueError(f"Text content block {index} has no string 'text'")
        return v


class ApiErrorDetail(BaseModel):
    """The `error` member of an API error body."""

    type: str
    message: str = Field(default="")


class ApiErrorBody(BaseModel):
    """Structured error object returned with 4xx responses."""

    type: str = Field(default="error")
    error: ApiErrorDetail
