"""Classification of raw HTTP outcomes into replies or API errors.

A successful exchange is decoded into a Response whose first text block is
scanned for tool invocations. Every other outcome is turned into one of the
ApiError subclasses, chosen by whether a response was obtained and by its
status code. Nothing is retried.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from anthropic_community.client.types import RawOutcome
from anthropic_community.conversation.types import (
    ContentBlock,
    TextBlock,
    content_block_from_dict,
)
from anthropic_community.errors import (
    ApiStatusError,
    ClientError,
    DecodeError,
    ServerError,
    TransportError,
)
from anthropic_community.models.messages import (
    ApiErrorBody,
    MessagesResponseBody,
)
from anthropic_community.tools.scanner import Invocation, scan_invocations

logger = logging.getLogger(__name__)


@dataclass
class Usage:
    """Token usage of one reply."""

    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class Response:
    """The model's reply for one turn.

    Attributes:
        id: Message identifier assigned by the API
        type: Object type (always "message")
        role: Role of the reply (always "assistant")
        content: Content blocks of the reply
        model: Model that produced the reply
        stop_reason: Why generation stopped (e.g. "end_turn")
        stop_sequence: The stop sequence that was hit, if any
        usage: Token usage counters
        invocations: Tool invocations requested in the first text block
    """

    id: str
    role: str
    content: list[ContentBlock]
    model: str
    type: str = "message"
    stop_reason: str | None = None
    stop_sequence: str | None = None
    usage: Usage = field(default_factory=Usage)
    invocations: list[Invocation] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Concatenated text of all text blocks."""
        return "".join(b.text for b in self.content if isinstance(b, TextBlock))

    @staticmethod
    def from_body(body: MessagesResponseBody) -> "Response":
        """Create a Response from a decoded reply body.

        Block types this client does not model are dropped. Invocations are
        scanned from the first content block only, and only if it is text.
        """
        content: list[ContentBlock] = []
        for block_data in body.content:
            block = content_block_from_dict(block_data)
            if block is None:
                logger.warning(f"Ignoring unsupported content block type: {block_data.get('type')}")
                continue
            content.append(block)

        invocations: list[Invocation] = []
        if body.content and body.content[0].get("type") == "text":
            invocations = scan_invocations(body.content[0].get("text", ""))

        return Response(
            id=body.id,
            type=body.type,
            role=body.role,
            content=content,
            model=body.model,
            stop_reason=body.stop_reason,
            stop_sequence=body.stop_sequence,
            usage=Usage(
                input_tokens=body.usage.input_tokens,
                output_tokens=body.usage.output_tokens,
            ),
            invocations=invocations,
        )


def _decode_client_error(outcome: RawOutcome) -> tuple[Any, str]:
    try:
        error_body = ApiErrorBody.model_validate_json(outcome.body)
    except ValidationError:
        return outcome.body, f"Client error {outcome.status}"
    return (
        error_body.model_dump(),
        f"Client error {outcome.status} ({error_body.error.type}): {error_body.error.message}",
    )


def parse_response(outcome: RawOutcome) -> Response:
    """Classify a raw outcome.

    Args:
        outcome: The raw result of one HTTP exchange

    Returns:
        Response: The decoded reply for a 200 response

    Raises:
        TransportError: No response was obtained
        DecodeError: A 200 body does not match the reply schema
        ClientError: 4xx status
        ServerError: 5xx status
        ApiStatusError: Any other status
    """
    if outcome.error is not None or outcome.status is None:
        raise TransportError(outcome.error or RuntimeError("no response"))

    status = outcome.status

    if status == 200:
        try:
            body = MessagesResponseBody.model_validate_json(outcome.body)
        except ValidationError as e:
            logger.error(f"Failed to decode response body: {e}")
            raise DecodeError(outcome.body, e) from e
        return Response.from_body(body)

    if 500 <= status <= 599:
        raise ServerError(status, outcome.body, f"Server error {status}")

    if 400 <= status <= 499:
        body, message = _decode_client_error(outcome)
        raise ClientError(status, body, message)

    raise ApiStatusError(status, outcome.body)
