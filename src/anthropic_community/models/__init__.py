"""Pydantic models for Messages API request and response schemas.

This package contains the models used to serialize conversations into
request payloads and to validate reply and error bodies.
"""

from anthropic_community.models.messages import (
    ApiErrorBody,
    ApiErrorDetail,
    MessagesRequest,
    MessagesResponseBody,
    UsageBody,
)

__all__ = [
    "ApiErrorBody",
    "ApiErrorDetail",
    "MessagesRequest",
    "MessagesResponseBody",
    "UsageBody",
]
